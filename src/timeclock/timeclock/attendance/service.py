from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import Clock
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import (
    DataIntegrityError,
    EmployeeInactive,
    EmployeeNotFound,
    InvalidToken,
    ScanConflict,
)
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .factory import ScanTransitionFactory
from .model import AttendanceSession, ScanResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Attendance state machine: every scan toggles checked-in/checked-out."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        clock: Optional[Clock] = None,
        transition_factory: Optional[ScanTransitionFactory] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._clock = clock or Clock()
        self._factory = transition_factory or ScanTransitionFactory()

    def record_scan(self, employee_id: int, *, now: Optional[datetime] = None) -> ScanResult:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise EmployeeNotFound(f"Employee {employee_id} not found")
        return self._scan(employee, now=now)

    def record_scan_by_token(self, token: str, *, now: Optional[datetime] = None) -> ScanResult:
        token = (token or "").strip()
        employee = self._employees.get_by_token(token) if token else None
        if not employee:
            raise InvalidToken("Employee not found. Please check your QR code.")
        return self._scan(employee, now=now)

    def is_checked_in(self, employee_id: int, *, now: Optional[datetime] = None) -> bool:
        today = self._clock.date_of(now or self._clock.now())
        sessions = self._attendance.find_sessions(employee_id=employee_id, work_date=today)
        return any(s.is_open for s in sessions)

    def get_history(self, employee_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceSession]:
        """Most recent sessions first. Works for deleted employees too."""

        return self._attendance.get_recent_for_employee(employee_id, max(int(limit), 1))

    def _scan(self, employee: Employee, *, now: Optional[datetime]) -> ScanResult:
        if not employee.is_active:
            raise EmployeeInactive("Employee account is inactive.")

        now = now or self._clock.now()
        today = self._clock.date_of(now)

        sessions = self._attendance.find_sessions(employee_id=employee.employee_id, work_date=today)
        try:
            transition = self._factory.for_sessions(
                employee_id=employee.employee_id,
                today=today,
                sessions=sessions,
            )
        except DataIntegrityError:
            logger.error("Integrity violation for employee %s on %s", employee.employee_id, today)
            raise

        try:
            result = transition.apply(self._attendance, employee=employee, today=today, now=now)
        except ScanConflict:
            logger.warning("Concurrent scan lost for employee %s on %s", employee.employee_id, today)
            raise

        logger.info(
            "Scan %s employee=%s session=%s hours=%s",
            result.type.value,
            employee.employee_id,
            result.session_id,
            result.total_hours,
        )
        return result
