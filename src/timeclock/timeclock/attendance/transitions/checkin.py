from __future__ import annotations

from datetime import date, datetime

from ...core.enums import ScanType
from ...employees.model import Employee
from ..model import ScanResult
from ..repository import AttendanceRepository
from .base import ScanTransition


class CheckInTransition(ScanTransition):
    """Open a new session for today."""

    def apply(
        self,
        ledger: AttendanceRepository,
        *,
        employee: Employee,
        today: date,
        now: datetime,
    ) -> ScanResult:
        session_id = ledger.create_session(
            employee_id=employee.employee_id,
            employee_name=employee.name,
            work_date=today,
            check_in_time=now,
        )
        return ScanResult(
            type=ScanType.CHECKIN,
            employee_id=employee.employee_id,
            employee_name=employee.name,
            session_id=session_id,
            at=now,
        )
