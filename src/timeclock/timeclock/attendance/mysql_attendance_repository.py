from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.exceptions import ScanConflict
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, is_duplicate_key
from .model import AttendanceSession
from .repository import AttendanceRepository

_COLUMNS = "session_id, employee_id, employee_name, work_date, check_in_time, check_out_time, total_hours"


def _to_session(r: dict) -> AttendanceSession:
    total = r.get("total_hours")
    return AttendanceSession(
        session_id=int(r["session_id"]),
        employee_id=int(r["employee_id"]),
        employee_name=r["employee_name"],
        work_date=r["work_date"],
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
        total_hours=Decimal(total) if total is not None else None,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_sessions(
        self,
        *,
        employee_id: Optional[int] = None,
        work_date: Optional[date] = None,
    ) -> Sequence[AttendanceSession]:
        clauses: list[str] = []
        params: list[object] = []

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if work_date is not None:
            clauses.append("work_date=%s")
            params.append(work_date)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_sessions {where} ORDER BY check_in_time DESC, session_id DESC",
                tuple(params),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def find_sessions_between(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceSession]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE {where}
                ORDER BY work_date DESC, check_in_time DESC
                """,
                tuple(params),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE employee_id=%s
                ORDER BY check_in_time DESC
                LIMIT %s
                """,
                (int(employee_id), int(limit)),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def create_session(
        self,
        *,
        employee_id: int,
        employee_name: str,
        work_date: date,
        check_in_time: datetime,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_sessions(employee_id, employee_name, work_date, check_in_time)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (int(employee_id), employee_name, work_date, check_in_time),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            if is_duplicate_key(e, index_name="uq_attendance_one_open"):
                raise ScanConflict("Employee already has an open session today") from e
            raise

    def close_session(
        self,
        *,
        session_id: int,
        check_out_time: datetime,
        total_hours: Decimal,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_sessions
                SET check_out_time=%s, total_hours=%s
                WHERE session_id=%s AND check_out_time IS NULL
                """,
                (check_out_time, total_hours, int(session_id)),
            )
            return cur.rowcount > 0
