# cm_core/pharmacy/models.py
from decimal import Decimal

from django.conf import settings
from django.db import models

from cm_core.common.models import TimeStampedModel
from cm_core.patients.models import Patient
from cm_core.records.models import MedicalRecord


class Medication(TimeStampedModel):
    """
    Inventory row. stock_quantity only changes through
    MedicationService.update_stock and PrescriptionService.dispense.
    """
    name = models.CharField(max_length=255)
    generic_name = models.CharField(max_length=255, null=True, blank=True)
    strength = models.CharField(max_length=64, null=True, blank=True)
    dosage_form = models.CharField(max_length=64)
    manufacturer = models.CharField(max_length=255, null=True, blank=True)
    barcode = models.CharField(max_length=64, null=True, blank=True)

    price = models.DecimalField(max_digits=12, decimal_places=2)
    stock_quantity = models.PositiveIntegerField(default=0)
    min_stock_level = models.PositiveIntegerField(default=0)

    expiry_date = models.DateField(null=True, blank=True)
    description = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "pharmacy_medication"
        indexes = [
            models.Index(fields=["name"], name="pharmacy_med_name_idx"),
            models.Index(fields=["barcode"], name="pharmacy_med_barcode_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} {self.strength or ''}".strip()

    @property
    def is_low_stock(self) -> bool:
        return self.stock_quantity <= self.min_stock_level


class PrescriptionStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    DISPENSED = "dispensed", "Dispensed"
    CANCELLED = "cancelled", "Cancelled"


class Prescription(TimeStampedModel):
    """
    pending -> dispensed | cancelled. Both targets are final.
    total_amount is fixed at creation from the items' price snapshots.
    """
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name="prescriptions")
    medical_record = models.ForeignKey(
        MedicalRecord,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="prescriptions",
    )

    prescribed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="prescriptions_written",
    )
    dispensed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="prescriptions_dispensed",
    )

    status = models.CharField(
        max_length=16,
        choices=PrescriptionStatus.choices,
        default=PrescriptionStatus.PENDING,
        db_index=True,
    )
    prescription_date = models.DateTimeField(auto_now_add=True)
    dispensed_date = models.DateTimeField(null=True, blank=True)

    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    notes = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "pharmacy_prescription"
        indexes = [
            models.Index(fields=["patient", "prescription_date"], name="pharmacy_rx_patient_date_idx"),
        ]

    def __str__(self) -> str:
        return f"Prescription {self.id} ({self.status})"


class PrescriptionItem(models.Model):
    prescription = models.ForeignKey(Prescription, on_delete=models.CASCADE, related_name="items")
    medication = models.ForeignKey(Medication, on_delete=models.PROTECT, related_name="prescription_items")

    quantity = models.PositiveIntegerField()
    dosage = models.CharField(max_length=128)
    frequency = models.CharField(max_length=128)
    duration = models.CharField(max_length=128)
    instructions = models.TextField(null=True, blank=True)

    # medication price at the time of prescribing
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    total_price = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        db_table = "pharmacy_prescription_item"

    def __str__(self) -> str:
        return f"{self.medication_id} x{self.quantity}"


class StockOperation(models.TextChoices):
    ADD = "add", "Add"
    SUBTRACT = "subtract", "Subtract"
