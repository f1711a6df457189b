from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import EmployeeRole


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee in the directory.

    Plain data object, no storage access. ``scan_token`` is assigned once at
    creation and never changes.
    """

    employee_id: int
    name: str
    role: EmployeeRole
    wage: Decimal
    phone: str
    address: str
    scan_token: str
    email: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class EmployeeDraft:
    """Validated input for creating an employee."""

    name: str
    role: EmployeeRole
    wage: Decimal
    phone: str
    address: str
    email: Optional[str] = None
