# cm_core/records/services.py
from __future__ import annotations

import logging

from django.db import transaction

from cm_core.common.lookups import require, require_user
from cm_core.patients.models import Patient
from cm_core.records.models import MedicalRecord

logger = logging.getLogger(__name__)


class MedicalRecordService:
    @staticmethod
    @transaction.atomic
    def create_medical_record(
        *,
        patient_id: int,
        doctor_id: int,
        chief_complaint: str,
        diagnosis: str,
        present_illness: str | None = None,
        physical_examination: str | None = None,
        treatment_plan: str | None = None,
        prescription: str | None = None,
        notes: str | None = None,
    ) -> MedicalRecord:
        patient = require(Patient, patient_id, label="Patient")
        doctor = require_user(doctor_id, label="Doctor")

        record = MedicalRecord.objects.create(
            patient=patient,
            doctor=doctor,
            chief_complaint=chief_complaint,
            present_illness=present_illness,
            physical_examination=physical_examination,
            diagnosis=diagnosis,
            treatment_plan=treatment_plan,
            prescription=prescription,
            notes=notes,
        )
        logger.info("Medical record created id=%s patient=%s doctor=%s", record.id, patient.id, doctor.id)
        return record
