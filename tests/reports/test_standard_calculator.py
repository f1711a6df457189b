from datetime import date, datetime
from decimal import Decimal

from timeclock.attendance.model import AttendanceSession
from timeclock.reports.calculator.standard_calculator import StandardHoursCalculator


def _session(check_out=None, total_hours=None) -> AttendanceSession:
    return AttendanceSession(
        session_id=1,
        employee_id=1,
        employee_name="A",
        work_date=date(2026, 3, 2),
        check_in_time=datetime(2026, 3, 2, 9, 0),
        check_out_time=check_out,
        total_hours=total_hours,
    )


def test_closed_session_uses_stored_total_verbatim():
    session = _session(check_out=datetime(2026, 3, 2, 17, 0), total_hours=Decimal("7.99"))

    hours = StandardHoursCalculator().session_hours(session, now=datetime(2026, 3, 2, 23, 0))

    assert hours == Decimal("7.99")


def test_open_session_counts_live_time_unrounded():
    hours = StandardHoursCalculator().session_hours(_session(), now=datetime(2026, 3, 2, 9, 33, 30))

    assert hours.quantize(Decimal("0.000001")) == Decimal("0.558333")


def test_open_session_never_negative():
    hours = StandardHoursCalculator().session_hours(_session(), now=datetime(2026, 3, 2, 8, 0))

    assert hours == 0
