# cm_core/catalog/selectors.py
from __future__ import annotations

from django.db.models import QuerySet

from cm_core.catalog.models import ClinicService


def services_filtered(*, category: str | None = None, is_active: bool | None = None) -> QuerySet[ClinicService]:
    qs = ClinicService.objects.all()

    if category:
        qs = qs.filter(category=category)

    if is_active is not None:
        qs = qs.filter(is_active=is_active)

    return qs.order_by("category", "name", "id")
