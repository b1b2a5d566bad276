# cm_core/patients/selectors.py
from __future__ import annotations

from django.db.models import Q, QuerySet

from cm_core.common.lookups import require
from cm_core.patients.models import Patient


def get_patient(*, patient_id: int) -> Patient:
    return require(Patient, patient_id, label="Patient")


def search_patients(*, q: str | None = None) -> QuerySet[Patient]:
    qs = Patient.objects.all()

    qv = (q or "").strip()
    if qv:
        qs = qs.filter(
            Q(full_name__icontains=qv)
            | Q(medical_record_number__icontains=qv)
            | Q(phone__icontains=qv)
            | Q(email__icontains=qv)
        )

    return qs.order_by("-created_at", "-id")
