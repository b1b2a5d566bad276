# cm_core/catalog/services.py
from __future__ import annotations

import logging
from decimal import Decimal

from django.db import transaction
from rest_framework.exceptions import ValidationError

from cm_core.catalog.models import ClinicService
from cm_core.common.lookups import require
from cm_core.common.money import round2, to_decimal

logger = logging.getLogger(__name__)


class CatalogService:
    @staticmethod
    @transaction.atomic
    def create_service(
        *,
        name: str,
        category: str,
        price: Decimal,
        description: str | None = None,
    ) -> ClinicService:
        price = round2(to_decimal(price, "price"))
        if price <= 0:
            raise ValidationError({"price": "Price must be > 0."})

        svc = ClinicService.objects.create(
            name=name,
            description=description,
            category=category,
            price=price,
            is_active=True,
        )
        logger.info("Service created id=%s category=%s price=%s", svc.id, svc.category, svc.price)
        return svc

    @staticmethod
    @transaction.atomic
    def set_active(*, service_id: int, is_active: bool) -> ClinicService:
        svc = require(
            ClinicService,
            service_id,
            label="Service",
            queryset=ClinicService.objects.select_for_update(),
        )
        if svc.is_active != is_active:
            svc.is_active = is_active
            svc.save(update_fields=["is_active", "updated_at"])
            logger.info("Service id=%s is_active=%s", svc.id, is_active)
        return svc
