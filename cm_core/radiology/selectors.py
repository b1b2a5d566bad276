# cm_core/radiology/selectors.py
from __future__ import annotations

from django.db.models import QuerySet

from cm_core.radiology.models import RadiologyExam


def radiology_exams_filtered(
    *,
    patient_id: int | None = None,
    status: str | None = None,
) -> QuerySet[RadiologyExam]:
    qs = RadiologyExam.objects.select_related("patient", "ordered_by__staff_profile", "radiologist__staff_profile")

    if patient_id is not None:
        qs = qs.filter(patient_id=patient_id)

    if status:
        qs = qs.filter(status=status)

    return qs.order_by("-ordered_at", "-id")
