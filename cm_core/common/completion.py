# cm_core/common/completion.py
from __future__ import annotations

from datetime import datetime

from django.utils import timezone

COMPLETED = "completed"


def completed_at_for(status: str) -> datetime | None:
    """
    completed_at for a status write: stamped now on every write of
    `completed`, cleared for every other status.
    """
    if status == COMPLETED:
        return timezone.now()
    return None
