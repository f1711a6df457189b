from __future__ import annotations

from flask import Flask, Response, request

from ..common.responses import domain_error, fail, ok, system_error
from ..common.serialization import to_plain
from ..core.exceptions import DomainError
from ..container import Container
from .qr import render_token_png

_EDITABLE = ("name", "role", "wage", "phone", "address", "email")


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="api_employees")
    def api_employees():
        active_only = request.args.get("active") in {"1", "true", "yes"}
        try:
            employees = service.list_employees(active_only=active_only)
        except Exception:
            return system_error("loading employees")
        return ok({"employees": to_plain(employees)})

    @app.route("/api/employees", methods=["POST"], endpoint="api_employee_create")
    def api_employee_create():
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return fail("Request body must be a JSON object", 400)
        try:
            employee_id = service.create_employee(
                name=data.get("name", ""),
                role=data.get("role", ""),
                wage=data.get("wage", 0),
                phone=data.get("phone", ""),
                address=data.get("address", ""),
                email=data.get("email"),
            )
            employee = service.get_employee(employee_id)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("creating the employee")
        return ok({"employee": to_plain(employee)}, 201)

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="api_employee_detail")
    def api_employee_detail(employee_id: int):
        try:
            employee = service.get_employee(employee_id)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("loading the employee")
        return ok({"employee": to_plain(employee)})

    @app.route("/api/employees/<int:employee_id>", methods=["PATCH"], endpoint="api_employee_update")
    def api_employee_update(employee_id: int):
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return fail("Request body must be a JSON object", 400)
        changes = {k: v for k, v in data.items() if k in _EDITABLE}
        try:
            employee = service.update_employee(employee_id, **changes)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("updating the employee")
        return ok({"employee": to_plain(employee)})

    @app.route("/api/employees/<int:employee_id>/deactivate", methods=["POST"], endpoint="api_employee_deactivate")
    def api_employee_deactivate(employee_id: int):
        try:
            service.deactivate_employee(employee_id)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("deactivating the employee")
        return ok({"employee_id": employee_id, "is_active": False})

    @app.route("/api/employees/<int:employee_id>/reactivate", methods=["POST"], endpoint="api_employee_reactivate")
    def api_employee_reactivate(employee_id: int):
        try:
            service.reactivate_employee(employee_id)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("reactivating the employee")
        return ok({"employee_id": employee_id, "is_active": True})

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="api_employee_delete")
    def api_employee_delete(employee_id: int):
        try:
            service.delete_employee(employee_id)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("deleting the employee")
        return ok({"employee_id": employee_id, "deleted": True})

    @app.route("/api/employees/<int:employee_id>/qr.png", methods=["GET"], endpoint="api_employee_qr")
    def api_employee_qr(employee_id: int):
        try:
            employee = service.get_employee(employee_id)
            png = render_token_png(employee.scan_token)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("generating the QR code")
        return Response(png, mimetype="image/png")
