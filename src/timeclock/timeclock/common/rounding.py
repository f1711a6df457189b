from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ..core.constants import HOURS_PLACES

_QUANTUM = Decimal(1).scaleb(-HOURS_PLACES)


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps 0.1 as 0.1 instead of its binary expansion
    return Decimal(str(value))


def round2(value) -> Decimal:
    """Round half-up to two decimal places."""
    return to_decimal(value).quantize(_QUANTUM, rounding=ROUND_HALF_UP)
