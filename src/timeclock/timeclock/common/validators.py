from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional

from ..core.enums import EmployeeRole
from ..core.exceptions import ValidationError
from .rounding import round2, to_decimal

_WAGE_LIMIT = Decimal("100000000")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_wage(value, field_name: str = "Wage") -> Decimal:
    try:
        wage = to_decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if not wage.is_finite() or wage < 0:
        raise ValidationError(f"{field_name} must not be negative")
    if wage >= _WAGE_LIMIT:
        raise ValidationError(f"{field_name} is too large")
    # Stored as DECIMAL(10, 2)
    if wage != round2(wage):
        raise ValidationError(f"{field_name} must have at most 2 decimal places")
    return round2(wage)


def require_role(value) -> EmployeeRole:
    try:
        return EmployeeRole(value)
    except ValueError:
        allowed = ", ".join(r.value for r in EmployeeRole)
        raise ValidationError(f"Role must be one of: {allowed}") from None


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None
