from __future__ import annotations

import logging
from collections import Counter
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceSession
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import Clock
from ..common.rounding import round2
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.enums import EmployeeRole
from ..core.exceptions import EmployeeNotFound
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .calculator.base import HoursCalculator
from .calculator.standard_calculator import StandardHoursCalculator
from .model import (
    DashboardStats,
    DayBucket,
    EmployeeHours,
    EmployeeSummary,
    LiveSessionRow,
    RoleCount,
    TodayReport,
    WeeklyReport,
)

logger = logging.getLogger(__name__)

ZERO = Decimal(0)


class AttendanceReportService:
    """Hours and earnings aggregation over the attendance ledger.

    Reads never write: live hours of open sessions are computed from ``now``
    on every call, so callers wanting a ticking display re-poll (e.g. every
    minute). Employee lookups are optional; sessions of deleted employees
    fall back to their stored ``employee_name`` and earn nothing.

    Rounding: hours and earnings are each rounded half-up to 2 places from the
    same unrounded hours, never earnings from already-rounded hours.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        clock: Optional[Clock] = None,
        calculator: Optional[HoursCalculator] = None,
        report_days: int = DEFAULT_REPORT_DAYS,
    ):
        self._attendance = attendance
        self._employees = employees
        self._clock = clock or Clock()
        self._calculator = calculator or StandardHoursCalculator()
        self._report_days = max(int(report_days), 1)

    # -- per employee --------------------------------------------------

    def today_hours_for_employee(self, employee_id: int, *, now: Optional[datetime] = None) -> EmployeeHours:
        now, today = self._now_and_today(now)
        employee = self._employees.get_by_id(employee_id)
        sessions = self._attendance.find_sessions(employee_id=employee_id, work_date=today)
        if not employee and not sessions:
            raise EmployeeNotFound(f"Employee {employee_id} not found")

        raw = self._sum_hours(sessions, now=now)
        wage = employee.wage if employee else ZERO
        return EmployeeHours(
            employee_id=employee_id,
            employee_name=_display_name(employee, sessions),
            hours=round2(raw),
            earnings=round2(raw * wage),
            wage=wage,
        )

    def employee_summary(self, employee_id: int, *, now: Optional[datetime] = None) -> EmployeeSummary:
        """Personal dashboard: live today figures plus the closed-session week."""

        now, today = self._now_and_today(now)
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise EmployeeNotFound(f"Employee {employee_id} not found")

        todays = self._attendance.find_sessions(employee_id=employee_id, work_date=today)
        open_sessions = [s for s in todays if s.is_open]
        today_raw = self._sum_hours(todays, now=now)
        current_raw = self._sum_hours(open_sessions, now=now)

        start, end = self.week_window(today)
        week = self._attendance.find_sessions_between(start_date=start, end_date=end, employee_id=employee_id)
        weekly_raw = sum((s.total_hours for s in week if s.total_hours is not None), ZERO)

        return EmployeeSummary(
            employee_id=employee.employee_id,
            employee_name=employee.name,
            wage=employee.wage,
            is_checked_in=bool(open_sessions),
            current_session_hours=round2(current_raw),
            today_hours=round2(today_raw),
            today_earnings=round2(today_raw * employee.wage),
            weekly_hours=round2(weekly_raw),
            weekly_earnings=round2(weekly_raw * employee.wage),
        )

    # -- roster --------------------------------------------------------

    def today_by_employee(self, *, now: Optional[datetime] = None) -> TodayReport:
        now, today = self._now_and_today(now)
        directory = self._directory()
        sessions = self._attendance.find_sessions(work_date=today)

        raw_by_employee: dict[int, Decimal] = {}
        for s in sessions:
            raw_by_employee[s.employee_id] = raw_by_employee.get(s.employee_id, ZERO) + self._calculator.session_hours(
                s, now=now
            )

        rows: list[EmployeeHours] = []
        for employee_id, raw in raw_by_employee.items():
            employee = directory.get(employee_id)
            if not employee:
                logger.debug("No directory entry for employee %s, skipped in today's breakdown", employee_id)
                continue
            if employee.wage <= 0:
                continue
            hours = round2(raw)
            if hours <= 0:
                continue
            rows.append(
                EmployeeHours(
                    employee_id=employee_id,
                    employee_name=employee.name,
                    hours=hours,
                    earnings=round2(raw * employee.wage),
                    wage=employee.wage,
                )
            )

        rows.sort(key=lambda r: (-r.hours, r.employee_name))
        return TodayReport(
            work_date=today,
            rows=rows,
            total_hours=round2(sum((r.hours for r in rows), ZERO)),
            total_earnings=round2(sum((r.earnings for r in rows), ZERO)),
        )

    def weekly_report(self, *, now: Optional[datetime] = None) -> WeeklyReport:
        """Rolling window ending today. Only closed sessions count."""

        _, today = self._now_and_today(now)
        start, end = self.week_window(today)
        directory = self._directory()

        hours: dict[date, Decimal] = {}
        earnings: dict[date, Decimal] = {}
        people: dict[date, set[int]] = {}
        for s in self._attendance.find_sessions_between(start_date=start, end_date=end):
            if s.total_hours is None:
                continue
            employee = directory.get(s.employee_id)
            wage = employee.wage if employee else ZERO
            hours[s.work_date] = hours.get(s.work_date, ZERO) + s.total_hours
            earnings[s.work_date] = earnings.get(s.work_date, ZERO) + s.total_hours * wage
            people.setdefault(s.work_date, set()).add(s.employee_id)

        days = [
            DayBucket(
                work_date=d,
                total_hours=round2(hours.get(d, ZERO)),
                total_earnings=round2(earnings.get(d, ZERO)),
                employee_count=len(people.get(d, ())),
            )
            for d in _date_range(start, end)
        ]
        return WeeklyReport(
            start_date=start,
            end_date=end,
            days=days,
            total_hours=round2(sum((b.total_hours for b in days), ZERO)),
            total_earnings=round2(sum((b.total_earnings for b in days), ZERO)),
        )

    def role_distribution(self) -> list[RoleCount]:
        return _count_roles(e for e in self._employees.list_all() if e.is_active)

    def live_attendance(self, *, now: Optional[datetime] = None) -> list[LiveSessionRow]:
        """Today's sessions, newest check-in first, with live hours for open ones."""

        now, today = self._now_and_today(now)
        directory = self._directory()
        sessions = sorted(
            self._attendance.find_sessions(work_date=today),
            key=lambda s: (s.check_in_time, s.session_id),
            reverse=True,
        )

        rows: list[LiveSessionRow] = []
        for s in sessions:
            raw = self._calculator.session_hours(s, now=now)
            employee = directory.get(s.employee_id)
            rows.append(
                LiveSessionRow(
                    session_id=s.session_id,
                    employee_id=s.employee_id,
                    employee_name=s.employee_name,
                    check_in_time=s.check_in_time,
                    check_out_time=s.check_out_time,
                    is_open=s.is_open,
                    hours=round2(raw),
                    earnings=round2(raw * employee.wage) if employee and employee.wage > 0 else None,
                )
            )
        return rows

    def dashboard_stats(self, *, now: Optional[datetime] = None) -> DashboardStats:
        """Admin overview. Today's hours here count completed sessions only."""

        _, today = self._now_and_today(now)
        employees = list(self._employees.list_all())
        directory = {e.employee_id: e for e in employees}
        sessions = self._attendance.find_sessions(work_date=today)

        completed = [s for s in sessions if s.total_hours is not None]
        hours = sum((s.total_hours for s in completed), ZERO)
        earnings = ZERO
        for s in completed:
            employee = directory.get(s.employee_id)
            if employee:
                earnings += s.total_hours * employee.wage

        active = [e for e in employees if e.is_active]
        return DashboardStats(
            total_employees=len(employees),
            active_employees=len(active),
            checked_in_now=len({s.employee_id for s in sessions if s.is_open}),
            completed_hours_today=round2(hours),
            completed_earnings_today=round2(earnings),
            employees_by_role=_count_roles(active),
        )

    # -- helpers -------------------------------------------------------

    def week_window(self, today: date) -> tuple[date, date]:
        return today - timedelta(days=self._report_days - 1), today

    def _now_and_today(self, now: Optional[datetime]) -> tuple[datetime, date]:
        now = now or self._clock.now()
        return now, self._clock.date_of(now)

    def _directory(self) -> dict[int, Employee]:
        return {e.employee_id: e for e in self._employees.list_all()}

    def _sum_hours(self, sessions: Iterable[AttendanceSession], *, now: datetime) -> Decimal:
        return sum((self._calculator.session_hours(s, now=now) for s in sessions), ZERO)


def _display_name(employee: Optional[Employee], sessions: Sequence[AttendanceSession]) -> str:
    if employee:
        return employee.name
    return sessions[0].employee_name if sessions else ""


def _count_roles(employees: Iterable[Employee]) -> list[RoleCount]:
    counts = Counter(e.role for e in employees)
    return [RoleCount(role=role, count=counts[role]) for role in EmployeeRole if counts[role] > 0]


def _date_range(start: date, end: date) -> list[date]:
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]
