class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class EmployeeNotFound(DomainError):
    """Raised when an id does not resolve to an employee."""


class InvalidToken(EmployeeNotFound):
    """Raised when a scanned token does not resolve to an employee."""


class EmployeeInactive(DomainError):
    """Raised when a deactivated employee tries to scan."""


class CannotDeleteActiveEmployee(DomainError):
    """Raised when hard-deleting an employee that is still active."""


class DuplicateToken(DomainError):
    """Raised when a generated scan token is already assigned."""


class ScanConflict(DomainError):
    """Raised when a concurrent scan already changed the open session."""


class DataIntegrityError(DomainError):
    """Base class for stored data that violates an invariant."""


class MultipleOpenSessions(DataIntegrityError):
    """Raised when an employee has more than one open session on one day."""

    def __init__(self, employee_id: int, work_date, count: int):
        super().__init__(
            f"Employee {employee_id} has {count} open sessions on {work_date}"
        )
        self.employee_id = employee_id
        self.work_date = work_date
        self.count = count
