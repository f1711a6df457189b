from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Callable


def now_local() -> datetime:
    """Current local time."""
    return datetime.now()


def calendar_date(moment: datetime) -> date:
    """Local calendar date a moment falls on."""
    return moment.date()


def hours_between(start: datetime, end: datetime) -> Decimal:
    """Exact elapsed hours between two moments (microsecond precision)."""
    micros = (end - start) // timedelta(microseconds=1)
    return Decimal(micros) / Decimal(3_600_000_000)


@dataclass
class Clock:
    """Source of "now" and of the calendar date a moment belongs to.

    Services take a Clock instead of calling datetime.now() directly so tests
    can pin arbitrary dates and times.
    """

    now_fn: Callable[[], datetime] = field(default=now_local)
    date_fn: Callable[[datetime], date] = field(default=calendar_date)

    def now(self) -> datetime:
        return self.now_fn()

    def date_of(self, moment: datetime) -> date:
        return self.date_fn(moment)

    def today(self) -> date:
        return self.date_of(self.now())
