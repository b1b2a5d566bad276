# cm_core/queues/services.py
from __future__ import annotations

import logging
from datetime import date

from django.db import transaction
from django.db.models import Max
from django.utils import timezone

from cm_core.common.lookups import require
from cm_core.common.sequences import next_value
from cm_core.patients.models import Patient
from cm_core.queues.models import QueueEntry, QueueStatus

logger = logging.getLogger(__name__)


def queue_sequence_key(day: date) -> str:
    return f"queue:{day.isoformat()}"


class QueueService:
    @staticmethod
    def _next_number_locked(day: date) -> int:
        def highest() -> int:
            return QueueEntry.objects.filter(queue_date=day).aggregate(m=Max("queue_number"))["m"] or 0

        return next_value(queue_sequence_key(day), seed=highest)

    @staticmethod
    @transaction.atomic
    def create_queue(
        *,
        patient_id: int,
        priority: int = 0,
        notes: str | None = None,
        queue_date: date | None = None,
    ) -> QueueEntry:
        patient = require(Patient, patient_id, label="Patient")
        day = queue_date or timezone.localdate()

        entry = QueueEntry.objects.create(
            patient=patient,
            queue_number=QueueService._next_number_locked(day),
            queue_date=day,
            status=QueueStatus.WAITING,
            priority=priority or 0,
            notes=notes or None,
        )
        logger.info(
            "Queue entry created id=%s patient=%s date=%s number=%s",
            entry.id,
            patient.id,
            day,
            entry.queue_number,
        )
        return entry

    @staticmethod
    @transaction.atomic
    def update_queue_status(*, queue_id: int, status: str) -> QueueEntry:
        entry = require(QueueEntry, queue_id, label="Queue entry", queryset=QueueEntry.objects.select_for_update())

        # No transition graph: any status may follow any other.
        entry.status = status
        entry.save(update_fields=["status", "updated_at"])
        logger.info("Queue entry id=%s status=%s", entry.id, status)
        return entry
