# cm_core/records/models.py
from django.conf import settings
from django.db import models

from cm_core.common.models import TimeStampedModel
from cm_core.patients.models import Patient


class MedicalRecord(TimeStampedModel):
    """
    One clinical visit note written by a doctor.

    visit_date is stamped at creation and never edited.
    """
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name="medical_records")
    doctor = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="medical_records")

    visit_date = models.DateTimeField(auto_now_add=True)
    chief_complaint = models.TextField()
    present_illness = models.TextField(null=True, blank=True)
    physical_examination = models.TextField(null=True, blank=True)
    diagnosis = models.TextField()
    treatment_plan = models.TextField(null=True, blank=True)
    prescription = models.TextField(null=True, blank=True)
    notes = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "records_medical_record"
        indexes = [
            models.Index(fields=["patient", "visit_date"], name="records_patient_visit_idx"),
        ]

    def __str__(self) -> str:
        return f"Record {self.id} for patient {self.patient_id}"
