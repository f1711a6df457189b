from __future__ import annotations

import logging
import uuid
from typing import Any, Callable, Optional, Sequence

from ..common.datetime_utils import Clock
from ..common.validators import optional_text, require_non_empty, require_role, require_wage
from ..core.constants import DEFAULT_TOKEN_RETRY_LIMIT
from ..core.exceptions import (
    CannotDeleteActiveEmployee,
    DuplicateToken,
    EmployeeNotFound,
    ValidationError,
)
from .model import Employee, EmployeeDraft
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def generate_scan_token() -> str:
    return str(uuid.uuid4())


class EmployeeService:
    """Use case: manage the employee directory (admin)."""

    def __init__(
        self,
        employees: EmployeeRepository,
        *,
        clock: Optional[Clock] = None,
        token_factory: Callable[[], str] = generate_scan_token,
        token_retry_limit: int = DEFAULT_TOKEN_RETRY_LIMIT,
    ):
        self._employees = employees
        self._clock = clock or Clock()
        self._token_factory = token_factory
        self._token_retry_limit = max(int(token_retry_limit), 1)

    def get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise EmployeeNotFound(f"Employee {employee_id} not found")
        return employee

    def list_employees(self, *, active_only: bool = False) -> Sequence[Employee]:
        employees = self._employees.list_all()
        if active_only:
            return [e for e in employees if e.is_active]
        return list(employees)

    def create_employee(
        self,
        *,
        name: str,
        role: Any,
        wage: Any,
        phone: str,
        address: str,
        email: Optional[str] = None,
    ) -> int:
        draft = EmployeeDraft(
            name=require_non_empty(name, "Name"),
            role=require_role(role),
            wage=require_wage(wage),
            phone=require_non_empty(phone, "Phone"),
            address=require_non_empty(address, "Address"),
            email=optional_text(email),
        )

        for attempt in range(1, self._token_retry_limit + 1):
            token = self._token_factory()
            if self._employees.get_by_token(token):
                logger.warning("Scan token collision before insert (attempt %d)", attempt)
                continue
            try:
                employee_id = self._employees.create_employee(draft, scan_token=token, now=self._clock.now())
            except DuplicateToken:
                logger.warning("Scan token collision on insert (attempt %d)", attempt)
                continue
            logger.info("Created employee %s (%s)", employee_id, draft.role.value)
            return employee_id

        raise DuplicateToken(f"Could not assign a unique scan token after {self._token_retry_limit} attempts")

    def update_employee(self, employee_id: int, **changes: Any) -> Employee:
        """Partially update directory fields. The scan token is never changed."""

        unknown = set(changes) - {"name", "role", "wage", "phone", "address", "email"}
        if unknown:
            raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

        self.get_employee(employee_id)

        clean: dict[str, Any] = {}
        for key in ("name", "phone", "address"):
            if key in changes:
                clean[key] = require_non_empty(changes[key], key.capitalize())
        if "role" in changes:
            clean["role"] = require_role(changes["role"])
        if "wage" in changes:
            clean["wage"] = require_wage(changes["wage"])
        if "email" in changes:
            clean["email"] = optional_text(changes["email"])

        if not self._employees.update_employee(employee_id, clean, now=self._clock.now()):
            raise EmployeeNotFound(f"Employee {employee_id} not found")
        return self.get_employee(employee_id)

    def deactivate_employee(self, employee_id: int) -> None:
        self._set_active(employee_id, False)

    def reactivate_employee(self, employee_id: int) -> None:
        self._set_active(employee_id, True)

    def delete_employee(self, employee_id: int) -> None:
        """Irreversibly remove an inactive employee. Attendance history is kept."""

        employee = self.get_employee(employee_id)
        if employee.is_active:
            raise CannotDeleteActiveEmployee("Deactivate the employee before deleting")

        if not self._employees.delete_by_id(employee_id):
            # reactivated or removed since the read above
            current = self._employees.get_by_id(employee_id)
            if current and current.is_active:
                raise CannotDeleteActiveEmployee("Deactivate the employee before deleting")
            raise EmployeeNotFound(f"Employee {employee_id} not found")
        logger.info("Deleted employee %s", employee_id)

    def _set_active(self, employee_id: int, is_active: bool) -> None:
        self.get_employee(employee_id)
        if not self._employees.set_active(employee_id, is_active=is_active, now=self._clock.now()):
            raise EmployeeNotFound(f"Employee {employee_id} not found")
        logger.info("Employee %s is_active=%s", employee_id, is_active)
