# cm_core/lab/selectors.py
from __future__ import annotations

from django.db.models import QuerySet

from cm_core.lab.models import LabTest


def lab_tests_filtered(*, patient_id: int | None = None, status: str | None = None) -> QuerySet[LabTest]:
    qs = LabTest.objects.select_related("patient", "ordered_by__staff_profile", "technician__staff_profile")

    if patient_id is not None:
        qs = qs.filter(patient_id=patient_id)

    if status:
        qs = qs.filter(status=status)

    return qs.order_by("-ordered_at", "-id")
