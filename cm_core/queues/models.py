# cm_core/queues/models.py
from django.db import models

from cm_core.common.models import TimeStampedModel
from cm_core.patients.models import Patient


class QueueStatus(models.TextChoices):
    WAITING = "waiting", "Waiting"
    IN_PROGRESS = "in_progress", "In Progress"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"


class QueueEntry(TimeStampedModel):
    """
    A patient's slot in one day's visit queue.

    queue_number restarts at 1 every queue_date. Higher priority is served
    first; equal priorities keep arrival order (queue_number).
    Status may move freely between values.
    """
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name="queue_entries")

    queue_number = models.PositiveIntegerField()
    queue_date = models.DateField(db_index=True)
    status = models.CharField(max_length=16, choices=QueueStatus.choices, default=QueueStatus.WAITING, db_index=True)
    priority = models.IntegerField(default=0)
    notes = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "queues_queue_entry"
        constraints = [
            models.UniqueConstraint(fields=["queue_date", "queue_number"], name="uq_queue_date_number"),
        ]
        indexes = [
            models.Index(fields=["queue_date", "priority"], name="queues_date_priority_idx"),
        ]

    def __str__(self) -> str:
        return f"#{self.queue_number} on {self.queue_date} ({self.status})"
