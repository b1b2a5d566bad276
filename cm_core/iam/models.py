# cm_core/iam/models.py
from django.conf import settings
from django.db import models

from cm_core.common.models import TimeStampedModel


class StaffRole(models.TextChoices):
    ADMIN = "admin", "Admin"
    DOCTOR = "doctor", "Doctor"
    NURSE = "nurse", "Nurse"
    CASHIER = "cashier", "Cashier"
    PHARMACIST = "pharmacist", "Pharmacist"
    LAB_TECHNICIAN = "lab_technician", "Lab Technician"
    RADIOLOGIST = "radiologist", "Radiologist"


class StaffProfile(TimeStampedModel):
    """
    Clinic staff identity anchored to Django's AUTH_USER_MODEL.

    The profile shares its primary key with the auth user, so every
    "user id" stored elsewhere (doctor, ordered_by, cashier...) is the
    auth user id. Login identity is the email, kept in user.username.
    """
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="staff_profile",
    )
    full_name = models.CharField(max_length=255)
    role = models.CharField(max_length=32, choices=StaffRole.choices, db_index=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "iam_staff_profile"
        indexes = [
            models.Index(fields=["role", "is_active"], name="iam_staff_role_active_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.full_name} ({self.role})"

    @property
    def email(self) -> str:
        return self.user.email
