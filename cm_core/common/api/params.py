# cm_core/common/api/params.py
from __future__ import annotations

from datetime import date

from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.fields import DateField

_TRUE = {"1", "true", "yes", "y", "on"}
_FALSE = {"0", "false", "no", "n", "off"}


def int_or_none(value: str | None, field_name: str) -> int | None:
    if value in (None, ""):
        return None
    try:
        return int(str(value))
    except ValueError:
        raise DRFValidationError({field_name: "Invalid integer"})


def date_or_none(value: str | None, field_name: str) -> date | None:
    if not value:
        return None
    try:
        return DateField().to_internal_value(value)
    except DRFValidationError:
        raise DRFValidationError({field_name: "Invalid date, expected YYYY-MM-DD."})


def bool_or_none(value: str | None, field_name: str) -> bool | None:
    """
    Tri-state query flag: missing -> None (no filter), otherwise true/false.
    """
    if value in (None, ""):
        return None
    v = str(value).strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise DRFValidationError({field_name: "Invalid boolean"})
