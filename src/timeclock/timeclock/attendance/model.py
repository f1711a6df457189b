from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import ScanType


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: one check-in/check-out cycle.

    ``employee_name`` is the employee's name at check-in time. It is never
    refreshed, so reports keep showing the name the session was recorded
    under even after a rename or a hard delete.
    """

    session_id: int
    employee_id: int
    employee_name: str
    work_date: date
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    total_hours: Optional[Decimal] = None

    @property
    def is_open(self) -> bool:
        return self.check_out_time is None


@dataclass(frozen=True)
class ScanResult:
    type: ScanType
    employee_id: int
    employee_name: str
    session_id: int
    at: datetime
    total_hours: Optional[Decimal] = None
