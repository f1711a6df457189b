from __future__ import annotations

import logging

from flask import jsonify

from ..core.exceptions import (
    CannotDeleteActiveEmployee,
    DataIntegrityError,
    DomainError,
    DuplicateToken,
    EmployeeInactive,
    EmployeeNotFound,
    ScanConflict,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (EmployeeNotFound, 404),
    (EmployeeInactive, 403),
    (ValidationError, 400),
    (CannotDeleteActiveEmployee, 409),
    (ScanConflict, 409),
    (DuplicateToken, 409),
    (DataIntegrityError, 500),
)


def ok(payload: dict, status: int = 200):
    return jsonify({"success": True, **payload}), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def domain_error(e: DomainError):
    """Map a domain error to its HTTP status; the message is shown to the operator."""

    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(e, error_type):
            if status >= 500:
                logger.error("Data integrity error: %s", e)
            return fail(str(e), status)
    return fail(str(e), 400)


def system_error(action: str):
    logger.exception("Unexpected error while %s", action)
    return fail(f"System error while {action}", 500)
