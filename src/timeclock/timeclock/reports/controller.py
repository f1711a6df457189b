from __future__ import annotations

from flask import Flask

from ..common.responses import domain_error, ok, system_error
from ..common.serialization import to_plain
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    @app.route("/api/reports/dashboard", methods=["GET"], endpoint="api_report_dashboard")
    def api_report_dashboard():
        try:
            stats = reports.dashboard_stats()
        except Exception:
            return system_error("loading the dashboard")
        return ok({"stats": to_plain(stats)})

    @app.route("/api/reports/today", methods=["GET"], endpoint="api_report_today")
    def api_report_today():
        try:
            report = reports.today_by_employee()
        except Exception:
            return system_error("loading today's hours")
        return ok({"report": to_plain(report)})

    @app.route("/api/reports/weekly", methods=["GET"], endpoint="api_report_weekly")
    def api_report_weekly():
        try:
            report = reports.weekly_report()
        except Exception:
            return system_error("loading the weekly report")
        return ok({"report": to_plain(report)})

    @app.route("/api/reports/roles", methods=["GET"], endpoint="api_report_roles")
    def api_report_roles():
        try:
            roles = reports.role_distribution()
        except Exception:
            return system_error("loading the role distribution")
        return ok({"roles": to_plain(roles)})

    @app.route("/api/employees/<int:employee_id>/summary", methods=["GET"], endpoint="api_employee_summary")
    def api_employee_summary(employee_id: int):
        try:
            summary = reports.employee_summary(employee_id)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("loading the employee summary")
        return ok({"summary": to_plain(summary)})
