# cm_core/radiology/services.py
from __future__ import annotations

import logging

from django.db import transaction

from cm_core.common.completion import completed_at_for
from cm_core.common.lookups import require, require_user
from cm_core.patients.models import Patient
from cm_core.radiology.models import RadiologyExam, RadiologyStatus
from cm_core.records.models import MedicalRecord

logger = logging.getLogger(__name__)

_REPORT_FIELDS = ("findings", "impression", "recommendations")


class RadiologyService:
    @staticmethod
    @transaction.atomic
    def create_radiology_exam(
        *,
        patient_id: int,
        ordered_by_id: int,
        exam_type: str,
        body_part: str,
        medical_record_id: int | None = None,
        notes: str | None = None,
    ) -> RadiologyExam:
        patient = require(Patient, patient_id, label="Patient")
        ordered_by = require_user(ordered_by_id)
        record = None
        if medical_record_id is not None:
            record = require(MedicalRecord, medical_record_id, label="Medical record")

        exam = RadiologyExam.objects.create(
            patient=patient,
            medical_record=record,
            exam_type=exam_type,
            body_part=body_part,
            status=RadiologyStatus.ORDERED,
            ordered_by=ordered_by,
            notes=notes,
        )
        logger.info("Radiology exam ordered id=%s patient=%s by=%s", exam.id, patient.id, ordered_by.id)
        return exam

    @staticmethod
    @transaction.atomic
    def update_radiology_exam(
        *,
        exam_id: int,
        status: str | None = None,
        radiologist_id: int | None = None,
        findings: str | None = None,
        impression: str | None = None,
        recommendations: str | None = None,
    ) -> RadiologyExam:
        exam = require(
            RadiologyExam,
            exam_id,
            label="Radiology exam",
            queryset=RadiologyExam.objects.select_for_update(),
        )

        fields = ["updated_at"]

        if radiologist_id is not None:
            exam.radiologist = require_user(radiologist_id, label="Radiologist")
            fields.append("radiologist")

        report = {"findings": findings, "impression": impression, "recommendations": recommendations}
        for name in _REPORT_FIELDS:
            if report[name] is not None:
                setattr(exam, name, report[name])
                fields.append(name)

        if status is not None:
            exam.status = status
            exam.completed_at = completed_at_for(status)
            fields += ["status", "completed_at"]

        exam.save(update_fields=fields)
        logger.info("Radiology exam updated id=%s status=%s", exam.id, exam.status)
        return exam
