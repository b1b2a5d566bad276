# cm_core/catalog/models.py
from django.db import models

from cm_core.common.models import TimeStampedModel


class ClinicService(TimeStampedModel):
    """
    A billable service offered by the clinic (consultation, procedure...).
    Retired services are deactivated, never deleted.
    """
    name = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True)
    category = models.CharField(max_length=128, db_index=True)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    is_active = models.BooleanField(default=True, db_index=True)

    class Meta:
        db_table = "catalog_service"
        indexes = [
            models.Index(fields=["category", "is_active"], name="catalog_category_active_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.category})"
