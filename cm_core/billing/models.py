# cm_core/billing/models.py
from decimal import Decimal

from django.conf import settings
from django.db import models

from cm_core.common.models import TimeStampedModel
from cm_core.patients.models import Patient


class PaymentStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    PAID = "paid", "Paid"
    PARTIAL = "partial", "Partial"
    CANCELLED = "cancelled", "Cancelled"
    REFUNDED = "refunded", "Refunded"


class PaymentMethod(models.TextChoices):
    CASH = "cash", "Cash"
    CREDIT_CARD = "credit_card", "Credit Card"
    DEBIT_CARD = "debit_card", "Debit Card"
    TRANSFER = "transfer", "Transfer"
    INSURANCE = "insurance", "Insurance"


class InvoiceItemType(models.TextChoices):
    SERVICE = "service", "Service"
    MEDICATION = "medication", "Medication"
    LAB_TEST = "lab_test", "Lab Test"
    RADIOLOGY = "radiology", "Radiology"


class Invoice(TimeStampedModel):
    """
    Amounts are fixed at creation:
      total_amount = sum of item total_price
      final_amount = total_amount - discount_amount + tax_amount
    invoice_number comes from the global INV sequence.
    """
    invoice_number = models.CharField(max_length=16, unique=True)
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name="invoices")
    cashier = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="invoices_collected",
    )

    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    discount_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    tax_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    final_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    payment_status = models.CharField(
        max_length=16,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
        db_index=True,
    )
    payment_method = models.CharField(max_length=16, choices=PaymentMethod.choices, null=True, blank=True)
    payment_date = models.DateTimeField(null=True, blank=True)
    notes = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "billing_invoice"
        indexes = [
            models.Index(fields=["patient", "created_at"], name="billing_inv_patient_idx"),
            models.Index(fields=["payment_status", "payment_date"], name="billing_inv_status_paid_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.invoice_number} ({self.payment_status})"


class InvoiceItem(models.Model):
    invoice = models.ForeignKey(Invoice, on_delete=models.CASCADE, related_name="items")

    item_type = models.CharField(max_length=16, choices=InvoiceItemType.choices)
    # id in the table named by item_type; not a foreign key
    item_id = models.PositiveBigIntegerField()
    description = models.CharField(max_length=255)

    quantity = models.DecimalField(max_digits=10, decimal_places=2)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    total_price = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        db_table = "billing_invoice_item"

    def __str__(self) -> str:
        return f"{self.item_type}:{self.item_id} x{self.quantity}"
