from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional

import pytest

from timeclock.attendance.model import AttendanceSession
from timeclock.common.datetime_utils import Clock
from timeclock.container import wire_services
from timeclock.core.enums import EmployeeRole
from timeclock.core.exceptions import DuplicateToken, ScanConflict
from timeclock.employees.model import Employee, EmployeeDraft


class FrozenClock(Clock):
    def __init__(self, current: datetime):
        super().__init__(now_fn=lambda: self.current)
        self.current = current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


class InMemoryEmployees:
    def __init__(self):
        self._by_id: dict[int, Employee] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def add(
        self,
        name: str = "Alex",
        *,
        wage="10.00",
        role: EmployeeRole = EmployeeRole.SERVER,
        is_active: bool = True,
        scan_token: Optional[str] = None,
    ) -> Employee:
        with self._lock:
            employee_id = self._next_id
            self._next_id += 1
            employee = Employee(
                employee_id=employee_id,
                name=name,
                role=role,
                wage=Decimal(str(wage)),
                phone="0700 000000",
                address="1 High Street",
                scan_token=scan_token or f"token-{employee_id}",
                is_active=is_active,
            )
            self._by_id[employee_id] = employee
            return employee

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def get_by_token(self, scan_token: str) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.scan_token == scan_token), None)

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda e: (e.name, e.employee_id))

    def create_employee(self, draft: EmployeeDraft, *, scan_token: str, now: datetime) -> int:
        with self._lock:
            if any(e.scan_token == scan_token for e in self._by_id.values()):
                raise DuplicateToken("Scan token already assigned")
            employee_id = self._next_id
            self._next_id += 1
            self._by_id[employee_id] = Employee(
                employee_id=employee_id,
                name=draft.name,
                role=draft.role,
                wage=draft.wage,
                phone=draft.phone,
                address=draft.address,
                email=draft.email,
                scan_token=scan_token,
                is_active=True,
                created_at=now,
                updated_at=now,
            )
            return employee_id

    def update_employee(self, employee_id: int, changes, *, now: datetime) -> bool:
        employee = self._by_id.get(employee_id)
        if not employee:
            return False
        self._by_id[employee_id] = replace(employee, **dict(changes), updated_at=now)
        return True

    def set_active(self, employee_id: int, *, is_active: bool, now: datetime) -> bool:
        employee = self._by_id.get(employee_id)
        if not employee:
            return False
        self._by_id[employee_id] = replace(employee, is_active=is_active, updated_at=now)
        return True

    def delete_by_id(self, employee_id: int) -> bool:
        employee = self._by_id.get(employee_id)
        if not employee or employee.is_active:
            return False
        del self._by_id[employee_id]
        return True


class InMemoryAttendance:
    """Ledger fake that enforces one open session per employee and day."""

    def __init__(self):
        self._sessions: dict[int, AttendanceSession] = {}
        self._next_id = 1
        self._lock = threading.Lock()
        self.writes: list[str] = []

    def insert(
        self,
        employee_id: int,
        check_in_time: datetime,
        check_out_time: Optional[datetime] = None,
        total_hours=None,
        *,
        employee_name: str = "Alex",
        work_date: Optional[date] = None,
    ) -> AttendanceSession:
        """Seed a row directly, bypassing the one-open-session check."""

        with self._lock:
            session = AttendanceSession(
                session_id=self._next_id,
                employee_id=employee_id,
                employee_name=employee_name,
                work_date=work_date or check_in_time.date(),
                check_in_time=check_in_time,
                check_out_time=check_out_time,
                total_hours=Decimal(str(total_hours)) if total_hours is not None else None,
            )
            self._sessions[self._next_id] = session
            self._next_id += 1
            return session

    def all(self) -> list[AttendanceSession]:
        return sorted(self._sessions.values(), key=lambda s: s.session_id)

    def find_sessions(self, *, employee_id=None, work_date=None):
        return [
            s
            for s in self.all()
            if (employee_id is None or s.employee_id == employee_id) and (work_date is None or s.work_date == work_date)
        ]

    def find_sessions_between(self, *, start_date, end_date, employee_id=None):
        return [
            s
            for s in self.all()
            if start_date <= s.work_date <= end_date and (employee_id is None or s.employee_id == employee_id)
        ]

    def get_recent_for_employee(self, employee_id: int, limit: int):
        items = [s for s in self.all() if s.employee_id == employee_id]
        items.sort(key=lambda s: s.check_in_time, reverse=True)
        return items[:limit]

    def create_session(self, *, employee_id, employee_name, work_date, check_in_time) -> int:
        with self._lock:
            if any(s.employee_id == employee_id and s.work_date == work_date and s.is_open for s in self._sessions.values()):
                raise ScanConflict("Employee already has an open session today")
            session_id = self._next_id
            self._next_id += 1
            self._sessions[session_id] = AttendanceSession(
                session_id=session_id,
                employee_id=employee_id,
                employee_name=employee_name,
                work_date=work_date,
                check_in_time=check_in_time,
            )
            self.writes.append("create")
            return session_id

    def close_session(self, *, session_id, check_out_time, total_hours) -> bool:
        with self._lock:
            session = self._sessions.get(session_id)
            if not session or not session.is_open:
                return False
            self._sessions[session_id] = replace(session, check_out_time=check_out_time, total_hours=total_hours)
            self.writes.append("close")
            return True


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 9, 0, 0)


@pytest.fixture
def clock(fixed_now) -> FrozenClock:
    return FrozenClock(fixed_now)


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees()


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def container(employees_repo, attendance_repo, clock):
    return wire_services(employees_repo=employees_repo, attendance_repo=attendance_repo, clock=clock)


@pytest.fixture
def attendance_service(container):
    return container.attendance_service


@pytest.fixture
def report_service(container):
    return container.report_service


@pytest.fixture
def employee_service(container):
    return container.employee_service


@pytest.fixture
def client(container, monkeypatch):
    from timeclock.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()
