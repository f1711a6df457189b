from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Employee, EmployeeDraft


class EmployeeRepository(Protocol):
    """Repository interface for the employee directory.

    Note (DIP): services depend on this interface, not on a concrete store.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_token(self, scan_token: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def create_employee(self, draft: EmployeeDraft, *, scan_token: str, now: datetime) -> int:
        """Insert an active employee. Raises DuplicateToken if the token is taken."""

        raise NotImplementedError

    def update_employee(self, employee_id: int, changes: Mapping[str, Any], *, now: datetime) -> bool:
        raise NotImplementedError

    def set_active(self, employee_id: int, *, is_active: bool, now: datetime) -> bool:
        raise NotImplementedError

    def delete_by_id(self, employee_id: int) -> bool:
        raise NotImplementedError
