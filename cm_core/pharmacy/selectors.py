# cm_core/pharmacy/selectors.py
from __future__ import annotations

from django.db.models import F, QuerySet

from cm_core.pharmacy.models import Medication, Prescription


def medications_filtered(*, low_stock: bool | None = None) -> QuerySet[Medication]:
    qs = Medication.objects.all()

    if low_stock:
        qs = qs.filter(stock_quantity__lte=F("min_stock_level"))

    return qs.order_by("name", "id")


def prescriptions_filtered(
    *,
    patient_id: int | None = None,
    status: str | None = None,
) -> QuerySet[Prescription]:
    qs = Prescription.objects.select_related(
        "patient",
        "prescribed_by__staff_profile",
        "dispensed_by__staff_profile",
    ).prefetch_related("items__medication")

    if patient_id is not None:
        qs = qs.filter(patient_id=patient_id)

    if status:
        qs = qs.filter(status=status)

    return qs.order_by("-prescription_date", "-id")
