# cm_core/lab/services.py
from __future__ import annotations

import logging

from django.db import transaction

from cm_core.common.completion import completed_at_for
from cm_core.common.lookups import require, require_user
from cm_core.lab.models import LabTest, LabTestStatus
from cm_core.patients.models import Patient
from cm_core.records.models import MedicalRecord

logger = logging.getLogger(__name__)


class LabTestService:
    """
    Write-model operations for lab tests.
    - order a test (status ordered)
    - update status / technician / results; completed_at follows the status
    """

    @staticmethod
    @transaction.atomic
    def create_lab_test(
        *,
        patient_id: int,
        ordered_by_id: int,
        test_name: str,
        test_type: str,
        medical_record_id: int | None = None,
        reference_values: str | None = None,
        notes: str | None = None,
    ) -> LabTest:
        patient = require(Patient, patient_id, label="Patient")
        ordered_by = require_user(ordered_by_id)
        record = None
        if medical_record_id is not None:
            record = require(MedicalRecord, medical_record_id, label="Medical record")

        lab_test = LabTest.objects.create(
            patient=patient,
            medical_record=record,
            test_name=test_name,
            test_type=test_type,
            status=LabTestStatus.ORDERED,
            ordered_by=ordered_by,
            reference_values=reference_values,
            notes=notes,
        )
        logger.info("Lab test ordered id=%s patient=%s by=%s", lab_test.id, patient.id, ordered_by.id)
        return lab_test

    @staticmethod
    @transaction.atomic
    def update_lab_test(
        *,
        lab_test_id: int,
        status: str | None = None,
        technician_id: int | None = None,
        results: str | None = None,
    ) -> LabTest:
        """
        Arguments left as None are not touched.
        Any status may follow any other.
        """
        lab_test = require(LabTest, lab_test_id, label="Lab test", queryset=LabTest.objects.select_for_update())

        fields = ["updated_at"]

        if technician_id is not None:
            lab_test.technician = require_user(technician_id, label="Technician")
            fields.append("technician")

        if results is not None:
            lab_test.results = results
            fields.append("results")

        if status is not None:
            lab_test.status = status
            lab_test.completed_at = completed_at_for(status)
            fields += ["status", "completed_at"]

        lab_test.save(update_fields=fields)
        logger.info("Lab test updated id=%s status=%s", lab_test.id, lab_test.status)
        return lab_test
