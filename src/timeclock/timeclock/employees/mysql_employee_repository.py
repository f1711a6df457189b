from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import EmployeeRole
from ..core.exceptions import DuplicateToken
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Employee, EmployeeDraft
from .repository import EmployeeRepository

_COLUMNS = "employee_id, name, role, wage, phone, address, email, scan_token, is_active, created_at, updated_at"
_UPDATABLE = ("name", "role", "wage", "phone", "address", "email")


def _to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        name=row["name"],
        role=EmployeeRole(row["role"]),
        wage=Decimal(row["wage"]),
        phone=row["phone"],
        address=row["address"],
        scan_token=row["scan_token"],
        email=row.get("email"),
        is_active=bool(row.get("is_active", True)),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_token(self, scan_token: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE scan_token=%s", (scan_token,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY name ASC, employee_id ASC")
            return [_to_employee(r) for r in fetchall(cur)]

    def create_employee(self, draft: EmployeeDraft, *, scan_token: str, now: datetime) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO employees(name, role, wage, phone, address, email, scan_token, is_active, created_at, updated_at)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,1,%s,%s)
                    """,
                    (
                        draft.name,
                        draft.role.value,
                        draft.wage,
                        draft.phone,
                        draft.address,
                        draft.email,
                        scan_token,
                        now,
                        now,
                    ),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            if is_duplicate_key(e, index_name="uq_employees_scan_token"):
                raise DuplicateToken("Scan token already assigned") from e
            raise

    def update_employee(self, employee_id: int, changes: Mapping[str, Any], *, now: datetime) -> bool:
        fields = [k for k in _UPDATABLE if k in changes]
        if not fields:
            return self.get_by_id(employee_id) is not None

        params: list[object] = []
        for k in fields:
            value = changes[k]
            params.append(value.value if isinstance(value, EmployeeRole) else value)
        params.extend([now, int(employee_id)])

        assignments = ", ".join(f"{k}=%s" for k in fields)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE employees SET {assignments}, updated_at=%s WHERE employee_id=%s",
                tuple(params),
            )
            return cur.rowcount > 0

    def set_active(self, employee_id: int, *, is_active: bool, now: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET is_active=%s, updated_at=%s WHERE employee_id=%s",
                (1 if is_active else 0, now, int(employee_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, employee_id: int) -> bool:
        # Only inactive rows may be removed.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s AND is_active=0", (int(employee_id),))
            return cur.rowcount > 0
