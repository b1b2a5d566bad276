# cm_core/billing/services.py
from __future__ import annotations

import logging
from decimal import Decimal

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from cm_core.billing.models import Invoice, InvoiceItem, PaymentMethod, PaymentStatus
from cm_core.common.api.exceptions import ConflictError
from cm_core.common.lookups import require, require_user
from cm_core.common.money import ZERO, line_total, round2, to_decimal
from cm_core.common.sequences import format_number, highest_number, next_value
from cm_core.patients.models import Patient

logger = logging.getLogger(__name__)

INVOICE_PREFIX = "INV"
INVOICE_SEQUENCE = "billing.invoice_number"

PAYABLE_STATUSES = (PaymentStatus.PENDING,)


def _highest_invoice_number() -> int:
    return highest_number(INVOICE_PREFIX, Invoice.objects.values_list("invoice_number", flat=True))


def compute_totals(
    items: list[dict],
    *,
    discount_amount: Decimal = ZERO,
    tax_amount: Decimal = ZERO,
) -> tuple[list[Decimal], Decimal, Decimal]:
    """
    Returns (line totals, total_amount, final_amount).

    Each line is rounded to cents first; total is the sum of the rounded
    lines; final = total - discount + tax.
    """
    lines = [line_total(it["quantity"], it["unit_price"]) for it in items]
    total = round2(sum(lines, ZERO))
    final = round2(total - to_decimal(discount_amount, "discount_amount") + to_decimal(tax_amount, "tax_amount"))
    return lines, total, final


class InvoiceService:
    @staticmethod
    def _next_invoice_number_locked() -> str:
        n = next_value(INVOICE_SEQUENCE, seed=_highest_invoice_number)
        return format_number(INVOICE_PREFIX, n)

    @staticmethod
    @transaction.atomic
    def create_invoice(
        *,
        patient_id: int,
        items: list[dict],
        discount_amount: Decimal = ZERO,
        tax_amount: Decimal = ZERO,
        notes: str | None = None,
    ) -> Invoice:
        if not items:
            raise ValidationError({"items": "At least one item is required."})

        discount_amount = round2(to_decimal(discount_amount, "discount_amount"))
        tax_amount = round2(to_decimal(tax_amount, "tax_amount"))
        if discount_amount < 0:
            raise ValidationError({"discount_amount": "Discount must be >= 0."})
        if tax_amount < 0:
            raise ValidationError({"tax_amount": "Tax must be >= 0."})

        for it in items:
            if to_decimal(it["quantity"], "quantity") <= 0:
                raise ValidationError({"quantity": "Quantity must be > 0."})
            if to_decimal(it["unit_price"], "unit_price") <= 0:
                raise ValidationError({"unit_price": "Unit price must be > 0."})

        patient = require(Patient, patient_id, label="Patient")
        lines, total, final = compute_totals(items, discount_amount=discount_amount, tax_amount=tax_amount)

        if final < 0:
            logger.warning("Invoice for patient=%s has negative final amount %s", patient.id, final)

        invoice = Invoice.objects.create(
            invoice_number=InvoiceService._next_invoice_number_locked(),
            patient=patient,
            total_amount=total,
            discount_amount=discount_amount,
            tax_amount=tax_amount,
            final_amount=final,
            payment_status=PaymentStatus.PENDING,
            notes=notes,
        )
        InvoiceItem.objects.bulk_create(
            [
                InvoiceItem(
                    invoice=invoice,
                    item_type=it["item_type"],
                    item_id=it["item_id"],
                    description=it["description"],
                    quantity=to_decimal(it["quantity"], "quantity"),
                    unit_price=round2(it["unit_price"]),
                    total_price=price,
                )
                for it, price in zip(items, lines)
            ]
        )

        logger.info(
            "Invoice created id=%s number=%s patient=%s final=%s",
            invoice.id,
            invoice.invoice_number,
            patient.id,
            invoice.final_amount,
        )
        return invoice


class PaymentService:
    @staticmethod
    @transaction.atomic
    def process_payment(*, invoice_id: int, payment_method: str, cashier_id: int) -> Invoice:
        if payment_method not in PaymentMethod.values:
            raise ValidationError({"payment_method": f"Invalid payment method: {payment_method}"})

        cashier = require_user(cashier_id, label="Cashier")
        invoice = require(Invoice, invoice_id, label="Invoice", queryset=Invoice.objects.select_for_update())

        if invoice.payment_status not in PAYABLE_STATUSES:
            logger.warning("Payment rejected invoice=%s status=%s", invoice.id, invoice.payment_status)
            raise ConflictError(f"Invoice {invoice.id} is already {invoice.payment_status}")

        invoice.payment_status = PaymentStatus.PAID
        invoice.payment_method = payment_method
        invoice.payment_date = timezone.now()
        invoice.cashier = cashier
        invoice.save(update_fields=["payment_status", "payment_method", "payment_date", "cashier", "updated_at"])

        logger.info("Invoice paid id=%s method=%s cashier=%s", invoice.id, payment_method, cashier.id)
        return invoice
