from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import AttendanceSession


class AttendanceRepository(Protocol):
    """The attendance ledger.

    Implementations must reject a second open session for the same
    (employee_id, work_date) with ScanConflict, and must only close a session
    that is still open.
    """

    def find_sessions(
        self,
        *,
        employee_id: Optional[int] = None,
        work_date: Optional[date] = None,
    ) -> Sequence[AttendanceSession]:
        raise NotImplementedError

    def find_sessions_between(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceSession]:
        """Sessions with start_date <= work_date <= end_date."""

        raise NotImplementedError

    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceSession]:
        raise NotImplementedError

    def create_session(
        self,
        *,
        employee_id: int,
        employee_name: str,
        work_date: date,
        check_in_time: datetime,
    ) -> int:
        raise NotImplementedError

    def close_session(
        self,
        *,
        session_id: int,
        check_out_time: datetime,
        total_hours: Decimal,
    ) -> bool:
        """Set check-out and total hours in one write. False if already closed."""

        raise NotImplementedError
