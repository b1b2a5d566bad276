# cm_core/patients/services.py
from __future__ import annotations

import logging
from datetime import date

from django.db import transaction

from cm_core.common.sequences import format_number, highest_number, next_value
from cm_core.patients.models import Patient

logger = logging.getLogger(__name__)

MRN_PREFIX = "MRN"
MRN_SEQUENCE = "patient.mrn"


def _highest_mrn() -> int:
    return highest_number(MRN_PREFIX, Patient.objects.values_list("medical_record_number", flat=True))


class PatientService:
    @staticmethod
    def _next_mrn_locked() -> str:
        n = next_value(MRN_SEQUENCE, seed=_highest_mrn)
        return format_number(MRN_PREFIX, n)

    @staticmethod
    @transaction.atomic
    def create_patient(
        *,
        full_name: str,
        date_of_birth: date,
        gender: str,
        phone: str | None = None,
        email: str | None = None,
        address: str | None = None,
        emergency_contact: str | None = None,
        emergency_phone: str | None = None,
        blood_type: str | None = None,
        allergies: str | None = None,
    ) -> Patient:
        patient = Patient.objects.create(
            medical_record_number=PatientService._next_mrn_locked(),
            full_name=full_name,
            date_of_birth=date_of_birth,
            gender=gender,
            phone=phone,
            email=email,
            address=address,
            emergency_contact=emergency_contact,
            emergency_phone=emergency_phone,
            blood_type=blood_type,
            allergies=allergies,
        )
        logger.info("Patient registered id=%s mrn=%s", patient.id, patient.medical_record_number)
        return patient
