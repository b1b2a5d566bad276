# cm_core/pharmacy/services.py
from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from cm_core.common.api.exceptions import ConflictError
from cm_core.common.lookups import require, require_user
from cm_core.common.money import ZERO, line_total, round2, to_decimal
from cm_core.patients.models import Patient
from cm_core.pharmacy.models import (
    Medication,
    Prescription,
    PrescriptionItem,
    PrescriptionStatus,
    StockOperation,
)
from cm_core.records.models import MedicalRecord

logger = logging.getLogger(__name__)


class MedicationService:
    @staticmethod
    @transaction.atomic
    def create_medication(
        *,
        name: str,
        dosage_form: str,
        price: Decimal,
        stock_quantity: int = 0,
        min_stock_level: int = 0,
        generic_name: str | None = None,
        strength: str | None = None,
        manufacturer: str | None = None,
        barcode: str | None = None,
        expiry_date: date | None = None,
        description: str | None = None,
    ) -> Medication:
        price = round2(to_decimal(price, "price"))
        if price <= 0:
            raise ValidationError({"price": "Price must be > 0."})
        if stock_quantity < 0:
            raise ValidationError({"stock_quantity": "Stock quantity must be >= 0."})
        if min_stock_level < 0:
            raise ValidationError({"min_stock_level": "Minimum stock level must be >= 0."})

        med = Medication.objects.create(
            name=name,
            generic_name=generic_name,
            strength=strength,
            dosage_form=dosage_form,
            manufacturer=manufacturer,
            barcode=barcode,
            price=price,
            stock_quantity=stock_quantity,
            min_stock_level=min_stock_level,
            expiry_date=expiry_date,
            description=description,
        )
        logger.info("Medication created id=%s stock=%s", med.id, med.stock_quantity)
        return med

    @staticmethod
    @transaction.atomic
    def update_stock(*, medication_id: int, quantity: int, operation: str) -> Medication:
        """
        add: always allowed.
        subtract: rejected with a conflict when quantity > current stock,
        leaving the row untouched. Stock never goes below zero.
        """
        if quantity <= 0:
            raise ValidationError({"quantity": "Quantity must be > 0."})

        med = require(
            Medication,
            medication_id,
            label="Medication",
            queryset=Medication.objects.select_for_update(),
        )

        if operation == StockOperation.ADD:
            med.stock_quantity += quantity
        elif operation == StockOperation.SUBTRACT:
            if quantity > med.stock_quantity:
                logger.warning(
                    "Stock subtract rejected medication=%s current=%s requested=%s",
                    med.id,
                    med.stock_quantity,
                    quantity,
                )
                raise ConflictError(f"Insufficient stock. Current: {med.stock_quantity}, Requested: {quantity}")
            med.stock_quantity -= quantity
        else:
            raise ValidationError({"operation": f"Unknown operation: {operation}"})

        med.save(update_fields=["stock_quantity", "updated_at"])
        logger.info("Medication stock id=%s %s %s -> %s", med.id, operation, quantity, med.stock_quantity)
        return med


class PrescriptionService:
    """
    Prescriptions and their items.
    - create: snapshot medication prices into the items
    - dispense: status flip and stock decrement in one transaction
    - cancel: pending only
    """

    @staticmethod
    @transaction.atomic
    def create_prescription(
        *,
        patient_id: int,
        prescribed_by_id: int,
        items: list[dict],
        medical_record_id: int | None = None,
        notes: str | None = None,
    ) -> Prescription:
        if not items:
            raise ValidationError({"items": "At least one item is required."})

        patient = require(Patient, patient_id, label="Patient")
        prescriber = require_user(prescribed_by_id)
        record = None
        if medical_record_id is not None:
            record = require(MedicalRecord, medical_record_id, label="Medical record")

        meds = Medication.objects.in_bulk({it["medication_id"] for it in items})
        missing = [it["medication_id"] for it in items if it["medication_id"] not in meds]
        if missing:
            raise NotFound(f"Medication with id {missing[0]} not found")

        rows = []
        total = ZERO
        for it in items:
            med = meds[it["medication_id"]]
            price = line_total(it["quantity"], med.price)
            total += price
            rows.append(
                PrescriptionItem(
                    medication=med,
                    quantity=it["quantity"],
                    dosage=it["dosage"],
                    frequency=it["frequency"],
                    duration=it["duration"],
                    instructions=it.get("instructions") or None,
                    unit_price=med.price,
                    total_price=price,
                )
            )

        rx = Prescription.objects.create(
            patient=patient,
            medical_record=record,
            prescribed_by=prescriber,
            status=PrescriptionStatus.PENDING,
            total_amount=round2(total),
            notes=notes,
        )
        for row in rows:
            row.prescription = rx
        PrescriptionItem.objects.bulk_create(rows)

        logger.info("Prescription created id=%s patient=%s items=%s total=%s", rx.id, patient.id, len(rows), rx.total_amount)
        return rx

    @staticmethod
    @transaction.atomic
    def dispense(*, prescription_id: int, dispensed_by_id: int) -> Prescription:
        dispenser = require_user(dispensed_by_id)
        rx = require(
            Prescription,
            prescription_id,
            label="Prescription",
            queryset=Prescription.objects.select_for_update(),
        )

        if rx.status != PrescriptionStatus.PENDING:
            logger.warning("Dispense rejected prescription=%s status=%s", rx.id, rx.status)
            raise ConflictError(f"Cannot dispense prescription with status: {rx.status}")

        items = list(rx.items.all())
        needed: dict[int, int] = {}
        for item in items:
            needed[item.medication_id] = needed.get(item.medication_id, 0) + item.quantity

        # locked in id order
        meds = {m.id: m for m in Medication.objects.select_for_update().filter(id__in=needed).order_by("id")}

        for med_id, qty in needed.items():
            med = meds[med_id]
            if med.stock_quantity < qty:
                logger.warning(
                    "Dispense rejected prescription=%s medication=%s required=%s available=%s",
                    rx.id,
                    med_id,
                    qty,
                    med.stock_quantity,
                )
                raise ConflictError(
                    f"Insufficient stock for medication ID {med_id}. Required: {qty}, Available: {med.stock_quantity}"
                )

        for med_id, qty in needed.items():
            med = meds[med_id]
            med.stock_quantity -= qty
            med.save(update_fields=["stock_quantity", "updated_at"])

        rx.status = PrescriptionStatus.DISPENSED
        rx.dispensed_by = dispenser
        rx.dispensed_date = timezone.now()
        rx.save(update_fields=["status", "dispensed_by", "dispensed_date", "updated_at"])

        logger.info("Prescription dispensed id=%s by=%s", rx.id, dispenser.id)
        return rx

    @staticmethod
    @transaction.atomic
    def cancel(*, prescription_id: int) -> Prescription:
        rx = require(
            Prescription,
            prescription_id,
            label="Prescription",
            queryset=Prescription.objects.select_for_update(),
        )

        if rx.status != PrescriptionStatus.PENDING:
            logger.warning("Cancel rejected prescription=%s status=%s", rx.id, rx.status)
            raise ConflictError(f"Cannot cancel prescription with status: {rx.status}")

        rx.status = PrescriptionStatus.CANCELLED
        rx.save(update_fields=["status", "updated_at"])
        logger.info("Prescription cancelled id=%s", rx.id)
        return rx
