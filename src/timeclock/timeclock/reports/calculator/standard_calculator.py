from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from ...attendance.model import AttendanceSession
from ...common.datetime_utils import hours_between
from .base import HoursCalculator


class StandardHoursCalculator(HoursCalculator):
    """Closed sessions count their stored total; open ones count live time, not below 0."""

    def session_hours(self, session: AttendanceSession, *, now: datetime) -> Decimal:
        if session.total_hours is not None:
            return session.total_hours
        if session.check_out_time is not None:
            return max(hours_between(session.check_in_time, session.check_out_time), Decimal(0))
        return max(hours_between(session.check_in_time, now), Decimal(0))
