# cm_core/common/money.py
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from rest_framework.exceptions import ValidationError

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value, field_name: str = "amount") -> Decimal:
    """
    Accepts Decimal / str / int / float and converts to Decimal safely.
    Raises ValidationError for invalid values.
    """
    if isinstance(value, Decimal):
        return value
    try:
        # str() keeps floats from dragging their binary noise along
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError({field_name: "Invalid decimal value."})


def round2(value) -> Decimal:
    return to_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def line_total(quantity, unit_price) -> Decimal:
    return round2(to_decimal(quantity, "quantity") * to_decimal(unit_price, "unit_price"))
