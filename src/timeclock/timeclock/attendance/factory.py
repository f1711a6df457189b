from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Sequence

from ..core.exceptions import MultipleOpenSessions
from .model import AttendanceSession
from .transitions.base import ScanTransition
from .transitions.checkin import CheckInTransition
from .transitions.checkout import CheckOutTransition


@dataclass
class ScanTransitionFactory:
    """Factory Pattern: choose the transition from today's sessions."""

    def for_sessions(
        self,
        *,
        employee_id: int,
        today: date,
        sessions: Sequence[AttendanceSession],
    ) -> ScanTransition:
        open_sessions = [s for s in sessions if s.is_open]
        if not open_sessions:
            return CheckInTransition()
        if len(open_sessions) == 1:
            return CheckOutTransition(open_sessions[0])
        raise MultipleOpenSessions(employee_id, today, len(open_sessions))
