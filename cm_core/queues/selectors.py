# cm_core/queues/selectors.py
from __future__ import annotations

from datetime import date

from django.db.models import QuerySet
from django.utils import timezone

from cm_core.queues.models import QueueEntry


def queue_for_day(*, day: date | None = None, status: str | None = None) -> QuerySet[QueueEntry]:
    qs = QueueEntry.objects.select_related("patient").filter(queue_date=day or timezone.localdate())

    if status:
        qs = qs.filter(status=status)

    return qs.order_by("-priority", "queue_number")
