# cm_core/common/sequences.py
from __future__ import annotations

import re
from typing import Callable, Iterable

from django.db import transaction

from cm_core.common.models import SequenceCounter


def format_number(prefix: str, value: int, width: int = 6) -> str:
    return f"{prefix}{value:0{width}d}"


def highest_number(prefix: str, values: Iterable[str]) -> int:
    """
    Highest numeric suffix among identifiers shaped like <prefix><digits>.
    Anything that does not match is ignored.
    """
    pattern = re.compile(rf"^{re.escape(prefix)}(\d+)$")
    best = 0
    for raw in values:
        m = pattern.match((raw or "").strip())
        if m:
            best = max(best, int(m.group(1)))
    return best


@transaction.atomic
def next_value(key: str, *, seed: Callable[[], int] | None = None) -> int:
    """
    Returns the next integer of the sequence named `key`.

    Call it inside the transaction that inserts the row carrying the number:
    the counter row stays locked until that transaction ends, so two writers
    can never observe the same value.

    `seed` is consulted once, when the counter row does not exist yet, and
    should return the highest value already in use (0 for a fresh scope).
    """
    counter = SequenceCounter.objects.select_for_update().filter(key=key).first()

    if counter is None:
        start = seed() if seed is not None else 0
        SequenceCounter.objects.get_or_create(key=key, defaults={"last_value": start})
        counter = SequenceCounter.objects.select_for_update().get(key=key)

    counter.last_value += 1
    counter.save(update_fields=["last_value", "updated_at"])
    return counter.last_value
