from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime

from ...employees.model import Employee
from ..model import ScanResult
from ..repository import AttendanceRepository


class ScanTransition(ABC):
    """Strategy Pattern: what a scan does to the attendance ledger.

    Each transition performs exactly one ledger write.
    """

    @abstractmethod
    def apply(
        self,
        ledger: AttendanceRepository,
        *,
        employee: Employee,
        today: date,
        now: datetime,
    ) -> ScanResult:
        raise NotImplementedError
