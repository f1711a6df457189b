from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import Clock
from .core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_TOKEN_RETRY_LIMIT
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .reports.service import AttendanceReportService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository

    employee_service: EmployeeService
    attendance_service: AttendanceService
    report_service: AttendanceReportService

    history_limit: int = DEFAULT_HISTORY_LIMIT


def wire_services(
    *,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    clock: Optional[Clock] = None,
    token_retry_limit: int = DEFAULT_TOKEN_RETRY_LIMIT,
    history_limit: int = DEFAULT_HISTORY_LIMIT,
) -> Container:
    clock = clock or Clock()

    employee_service = EmployeeService(employees_repo, clock=clock, token_retry_limit=token_retry_limit)
    attendance_service = AttendanceService(attendance_repo, employees_repo, clock=clock)
    report_service = AttendanceReportService(attendance_repo, employees_repo, clock=clock)

    return Container(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        employee_service=employee_service,
        attendance_service=attendance_service,
        report_service=report_service,
        history_limit=int(history_limit),
    )


def build_container(
    *,
    db_config: dict,
    clock: Optional[Clock] = None,
    token_retry_limit: int = DEFAULT_TOKEN_RETRY_LIMIT,
    history_limit: int = DEFAULT_HISTORY_LIMIT,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return wire_services(
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        clock=clock,
        token_retry_limit=token_retry_limit,
        history_limit=history_limit,
    )
