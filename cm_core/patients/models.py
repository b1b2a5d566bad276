# cm_core/patients/models.py
from django.db import models

from cm_core.common.models import TimeStampedModel


class Gender(models.TextChoices):
    MALE = "male", "Male"
    FEMALE = "female", "Female"


class Patient(TimeStampedModel):
    """
    Registered patient. The MRN is assigned by PatientService at creation
    and never changes afterwards.
    """
    medical_record_number = models.CharField(max_length=16, unique=True)

    full_name = models.CharField(max_length=255)
    date_of_birth = models.DateField()
    gender = models.CharField(max_length=8, choices=Gender.choices)

    phone = models.CharField(max_length=32, null=True, blank=True)
    email = models.EmailField(null=True, blank=True)
    address = models.TextField(null=True, blank=True)
    emergency_contact = models.CharField(max_length=255, null=True, blank=True)
    emergency_phone = models.CharField(max_length=32, null=True, blank=True)
    blood_type = models.CharField(max_length=8, null=True, blank=True)
    allergies = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "patients_patient"
        indexes = [
            models.Index(fields=["full_name"], name="patients_full_name_idx"),
            models.Index(fields=["phone"], name="patients_phone_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.full_name} ({self.medical_record_number})"
