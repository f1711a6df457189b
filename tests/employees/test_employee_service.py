from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import pytest

from timeclock.core.enums import EmployeeRole
from timeclock.core.exceptions import (
    CannotDeleteActiveEmployee,
    DuplicateToken,
    EmployeeNotFound,
    ValidationError,
)
from timeclock.employees.service import EmployeeService

VALID = dict(name="Sam", role="chef", wage="12.50", phone="0700 111111", address="2 Mill Lane")


def test_create_employee_defaults(employee_service, fixed_now):
    employee_id = employee_service.create_employee(**VALID, email="  ")
    employee = employee_service.get_employee(employee_id)

    assert employee.name == "Sam"
    assert employee.role == EmployeeRole.CHEF
    assert employee.wage == Decimal("12.50")
    assert employee.email is None
    assert employee.is_active is True
    assert employee.scan_token
    assert employee.created_at == fixed_now


def test_created_employees_get_distinct_tokens(employee_service):
    first = employee_service.get_employee(employee_service.create_employee(**VALID))
    second = employee_service.get_employee(employee_service.create_employee(**VALID))

    assert first.scan_token != second.scan_token


@pytest.mark.parametrize(
    "override",
    [
        {"name": "  "},
        {"phone": ""},
        {"address": None},
        {"wage": "-1"},
        {"wage": "abc"},
        {"wage": "11.005"},
        {"wage": "100000000"},
        {"role": "janitor"},
    ],
)
def test_create_employee_validation(employee_service, employees_repo, override):
    with pytest.raises(ValidationError):
        employee_service.create_employee(**{**VALID, **override})
    assert employees_repo.list_all() == []


def test_wage_is_kept_at_cents(employee_service):
    employee_id = employee_service.create_employee(**{**VALID, "wage": 11.5})

    assert employee_service.get_employee(employee_id).wage == Decimal("11.50")


def test_update_rejects_sub_cent_wage(employee_service, employees_repo):
    emp = employees_repo.add("A", wage="10")

    with pytest.raises(ValidationError):
        employee_service.update_employee(emp.employee_id, wage="11.005")
    assert employees_repo.get_by_id(emp.employee_id).wage == Decimal("10")


def test_token_collision_is_regenerated(employees_repo, clock):
    employees_repo.add("Existing", scan_token="taken")
    tokens = iter(["taken", "taken", "fresh"])
    service = EmployeeService(employees_repo, clock=clock, token_factory=lambda: next(tokens), token_retry_limit=3)

    employee_id = service.create_employee(**VALID)

    assert service.get_employee(employee_id).scan_token == "fresh"


def test_token_collision_gives_up_after_limit(employees_repo, clock):
    employees_repo.add("Existing", scan_token="taken")
    service = EmployeeService(employees_repo, clock=clock, token_factory=lambda: "taken", token_retry_limit=2)

    with pytest.raises(DuplicateToken):
        service.create_employee(**VALID)
    assert len(employees_repo.list_all()) == 1


def test_insert_time_collision_is_regenerated(employees_repo, clock):
    tokens = iter(["raced", "fresh"])
    real_get = employees_repo.get_by_token

    def blind_lookup(token):
        # the racing row appears only after the pre-check
        if token == "raced" and not real_get("raced"):
            employees_repo.add("Racer", scan_token="raced")
            return None
        return real_get(token)

    employees_repo.get_by_token = blind_lookup
    service = EmployeeService(employees_repo, clock=clock, token_factory=lambda: next(tokens))

    employee_id = service.create_employee(**VALID)

    assert service.get_employee(employee_id).scan_token == "fresh"


def test_update_is_partial_and_keeps_token(employee_service, employees_repo, clock):
    emp = employees_repo.add("A", wage="10", scan_token="keep-me")
    clock.advance(hours=1)

    updated = employee_service.update_employee(emp.employee_id, wage="11.25", role=EmployeeRole.MANAGER)

    assert updated.wage == Decimal("11.25")
    assert updated.role == EmployeeRole.MANAGER
    assert updated.name == "A"
    assert updated.scan_token == "keep-me"
    assert updated.updated_at == clock.now()


def test_update_rejects_token_and_unknown_fields(employee_service, employees_repo):
    emp = employees_repo.add("A")

    with pytest.raises(ValidationError):
        employee_service.update_employee(emp.employee_id, scan_token="new")
    with pytest.raises(ValidationError):
        employee_service.update_employee(emp.employee_id, name="")


def test_update_unknown_employee(employee_service):
    with pytest.raises(EmployeeNotFound):
        employee_service.update_employee(404, name="X")


def test_deactivate_keeps_sessions(employee_service, employees_repo, attendance_repo, fixed_now):
    emp = employees_repo.add("A")
    attendance_repo.insert(emp.employee_id, fixed_now - timedelta(hours=2), fixed_now, "2.00")

    employee_service.deactivate_employee(emp.employee_id)

    assert employee_service.get_employee(emp.employee_id).is_active is False
    assert employee_service.get_employee(emp.employee_id).scan_token == emp.scan_token
    assert len(attendance_repo.find_sessions(employee_id=emp.employee_id)) == 1

    employee_service.reactivate_employee(emp.employee_id)
    assert employee_service.get_employee(emp.employee_id).is_active is True


def test_hard_delete_requires_deactivation(employee_service, employees_repo, attendance_repo, attendance_service, fixed_now):
    emp = employees_repo.add("A")
    attendance_repo.insert(emp.employee_id, fixed_now - timedelta(hours=2), fixed_now, "2.00", employee_name="A")

    with pytest.raises(CannotDeleteActiveEmployee):
        employee_service.delete_employee(emp.employee_id)

    employee_service.deactivate_employee(emp.employee_id)
    employee_service.delete_employee(emp.employee_id)

    with pytest.raises(EmployeeNotFound):
        employee_service.get_employee(emp.employee_id)
    history = attendance_service.get_history(emp.employee_id)
    assert [s.employee_name for s in history] == ["A"]


def test_list_active_only(employee_service, employees_repo):
    employees_repo.add("A")
    employees_repo.add("B", is_active=False)

    assert [e.name for e in employee_service.list_employees(active_only=True)] == ["A"]
    assert len(employee_service.list_employees()) == 2
