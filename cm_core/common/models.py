# cm_core/common/models.py
from __future__ import annotations

from django.db import models


class TimeStampedModel(models.Model):
    """
    Standard timestamps for all entities.
    """
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class SequenceCounter(TimeStampedModel):
    """
    One row per named sequence (MRNs, invoice numbers, one per queue day).

    Rows are only ever advanced under SELECT ... FOR UPDATE
    (see cm_core.common.sequences.next_value).
    """
    key = models.CharField(max_length=64, unique=True)
    last_value = models.PositiveBigIntegerField(default=0)

    class Meta:
        db_table = "common_sequence_counter"

    def __str__(self) -> str:
        return f"{self.key}={self.last_value}"
