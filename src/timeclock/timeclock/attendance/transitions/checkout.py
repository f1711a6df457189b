from __future__ import annotations

from datetime import date, datetime

from ...common.datetime_utils import hours_between
from ...common.rounding import round2
from ...core.enums import ScanType
from ...core.exceptions import ScanConflict, ValidationError
from ...employees.model import Employee
from ..model import AttendanceSession, ScanResult
from ..repository import AttendanceRepository
from .base import ScanTransition


class CheckOutTransition(ScanTransition):
    """Close today's open session.

    Check-out time and total hours are written together, so a session is never
    observed closed without its total.
    """

    def __init__(self, session: AttendanceSession):
        self.session = session

    def apply(
        self,
        ledger: AttendanceRepository,
        *,
        employee: Employee,
        today: date,
        now: datetime,
    ) -> ScanResult:
        if now < self.session.check_in_time:
            raise ValidationError("Check-out time is earlier than check-in time")

        total_hours = round2(hours_between(self.session.check_in_time, now))
        closed = ledger.close_session(
            session_id=self.session.session_id,
            check_out_time=now,
            total_hours=total_hours,
        )
        if not closed:
            raise ScanConflict("Session was already closed by another scan")

        return ScanResult(
            type=ScanType.CHECKOUT,
            employee_id=employee.employee_id,
            employee_name=employee.name,
            session_id=self.session.session_id,
            at=now,
            total_hours=total_hours,
        )
