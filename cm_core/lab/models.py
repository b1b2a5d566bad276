# cm_core/lab/models.py
from django.conf import settings
from django.db import models

from cm_core.common.models import TimeStampedModel
from cm_core.patients.models import Patient
from cm_core.records.models import MedicalRecord


class LabTestStatus(models.TextChoices):
    ORDERED = "ordered", "Ordered"
    IN_PROGRESS = "in_progress", "In Progress"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"


class LabTest(TimeStampedModel):
    """
    A laboratory test ordered for a patient.

    completed_at is set exactly while status == completed.
    """
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name="lab_tests")
    medical_record = models.ForeignKey(
        MedicalRecord,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="lab_tests",
    )

    test_name = models.CharField(max_length=255)
    test_type = models.CharField(max_length=128)
    status = models.CharField(max_length=16, choices=LabTestStatus.choices, default=LabTestStatus.ORDERED, db_index=True)

    ordered_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="lab_tests_ordered")
    technician = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="lab_tests_handled",
    )

    results = models.TextField(null=True, blank=True)
    reference_values = models.TextField(null=True, blank=True)
    notes = models.TextField(null=True, blank=True)

    ordered_at = models.DateTimeField(auto_now_add=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "lab_lab_test"
        indexes = [
            models.Index(fields=["patient", "ordered_at"], name="lab_patient_ordered_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.test_name} ({self.status})"
