from __future__ import annotations

from flask import Flask, request

from ..common.responses import domain_error, fail, ok, system_error
from ..common.serialization import to_plain
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import ScanType
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/scan", methods=["POST"], endpoint="api_scan")
    def api_scan():
        """Toggle check-in/check-out for the employee owning the scanned token."""

        data = request.get_json(silent=True) or {}
        token = str(data.get("token") or "").strip() if isinstance(data, dict) else ""
        if not token:
            return fail("QR code must not be empty", 400)

        try:
            result = container.attendance_service.record_scan_by_token(token)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("recording the scan")

        if result.type == ScanType.CHECKOUT:
            message = f"Goodbye {result.employee_name}! Checked out after {result.total_hours} hours."
        else:
            message = f"Welcome {result.employee_name}! Checked in."
        return ok({"action": result.type.value, "message": message, "result": to_plain(result)})

    @app.route("/api/employees/<int:employee_id>/status", methods=["GET"], endpoint="api_employee_status")
    def api_employee_status(employee_id: int):
        try:
            container.employee_service.get_employee(employee_id)
            checked_in = container.attendance_service.is_checked_in(employee_id)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("loading the attendance status")
        return ok({"employee_id": employee_id, "checked_in": checked_in})

    @app.route("/api/employees/<int:employee_id>/attendance", methods=["GET"], endpoint="api_employee_attendance")
    def api_employee_attendance(employee_id: int):
        limit = request.args.get("limit", default=container.history_limit or DEFAULT_HISTORY_LIMIT, type=int)
        try:
            sessions = container.attendance_service.get_history(employee_id, limit=limit)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("loading the attendance history")
        return ok({"sessions": to_plain(list(sessions))})

    @app.route("/api/attendance/today", methods=["GET"], endpoint="api_attendance_today")
    def api_attendance_today():
        try:
            rows = container.report_service.live_attendance()
        except Exception:
            return system_error("loading today's attendance")
        return ok({"sessions": to_plain(rows)})
