# cm_core/records/selectors.py
from __future__ import annotations

from django.db.models import QuerySet

from cm_core.records.models import MedicalRecord


def medical_records(*, patient_id: int | None = None) -> QuerySet[MedicalRecord]:
    qs = MedicalRecord.objects.select_related("patient", "doctor__staff_profile")
    if patient_id is not None:
        qs = qs.filter(patient_id=patient_id)
    return qs.order_by("-visit_date", "-id")
