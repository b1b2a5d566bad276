# cm_core/billing/selectors.py
from __future__ import annotations

from django.db.models import QuerySet

from cm_core.billing.models import Invoice


def invoices_filtered(*, patient_id: int | None = None, status: str | None = None) -> QuerySet[Invoice]:
    qs = Invoice.objects.select_related("patient", "cashier__staff_profile").prefetch_related("items")

    if patient_id is not None:
        qs = qs.filter(patient_id=patient_id)

    if status:
        qs = qs.filter(payment_status=status)

    return qs.order_by("-created_at", "-id")
