from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal

from ...attendance.model import AttendanceSession


class HoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked hours)."""

    @abstractmethod
    def session_hours(self, session: AttendanceSession, *, now: datetime) -> Decimal:
        """Unrounded hours a session counts for at ``now``."""

        raise NotImplementedError
