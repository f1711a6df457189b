from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import EmployeeRole


@dataclass(frozen=True)
class EmployeeHours:
    """Hours and earnings of one employee. Both are rounded from the same raw hours."""

    employee_id: int
    employee_name: str
    hours: Decimal
    earnings: Decimal
    wage: Decimal


@dataclass(frozen=True)
class TodayReport:
    work_date: date
    rows: list[EmployeeHours]
    total_hours: Decimal
    total_earnings: Decimal


@dataclass(frozen=True)
class DayBucket:
    work_date: date
    total_hours: Decimal
    total_earnings: Decimal
    employee_count: int


@dataclass(frozen=True)
class WeeklyReport:
    start_date: date
    end_date: date
    days: list[DayBucket]
    total_hours: Decimal
    total_earnings: Decimal


@dataclass(frozen=True)
class RoleCount:
    role: EmployeeRole
    count: int


@dataclass(frozen=True)
class LiveSessionRow:
    session_id: int
    employee_id: int
    employee_name: str
    check_in_time: datetime
    check_out_time: Optional[datetime]
    is_open: bool
    hours: Decimal
    earnings: Optional[Decimal]


@dataclass(frozen=True)
class DashboardStats:
    total_employees: int
    active_employees: int
    checked_in_now: int
    completed_hours_today: Decimal
    completed_earnings_today: Decimal
    employees_by_role: list[RoleCount] = field(default_factory=list)


@dataclass(frozen=True)
class EmployeeSummary:
    employee_id: int
    employee_name: str
    wage: Decimal
    is_checked_in: bool
    current_session_hours: Decimal
    today_hours: Decimal
    today_earnings: Decimal
    weekly_hours: Decimal
    weekly_earnings: Decimal
