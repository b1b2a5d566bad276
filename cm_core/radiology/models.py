# cm_core/radiology/models.py
from django.conf import settings
from django.db import models

from cm_core.common.models import TimeStampedModel
from cm_core.patients.models import Patient
from cm_core.records.models import MedicalRecord


class RadiologyStatus(models.TextChoices):
    ORDERED = "ordered", "Ordered"
    IN_PROGRESS = "in_progress", "In Progress"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"


class RadiologyExam(TimeStampedModel):
    """
    An imaging exam ordered for a patient, reported by a radiologist.

    completed_at is set exactly while status == completed.
    """
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name="radiology_exams")
    medical_record = models.ForeignKey(
        MedicalRecord,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="radiology_exams",
    )

    exam_type = models.CharField(max_length=128)
    body_part = models.CharField(max_length=128)
    status = models.CharField(
        max_length=16,
        choices=RadiologyStatus.choices,
        default=RadiologyStatus.ORDERED,
        db_index=True,
    )

    ordered_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="radiology_exams_ordered",
    )
    radiologist = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="radiology_exams_reported",
    )

    findings = models.TextField(null=True, blank=True)
    impression = models.TextField(null=True, blank=True)
    recommendations = models.TextField(null=True, blank=True)
    notes = models.TextField(null=True, blank=True)

    ordered_at = models.DateTimeField(auto_now_add=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "radiology_exam"
        indexes = [
            models.Index(fields=["patient", "ordered_at"], name="radiology_patient_ordered_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.exam_type} {self.body_part} ({self.status})"
