"""Example: drive the service layer directly (no Flask).

Controllers are thin; scanning and reporting live in the services.
"""

import importlib

from config import get_settings_module

from timeclock.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    employee_id = container.employee_service.create_employee(
        name="Sam Carter", role="server", wage="11.00", phone="0700 000000", address="1 High Street"
    )
    employee = container.employee_service.get_employee(employee_id)

    print(container.attendance_service.record_scan_by_token(employee.scan_token))
    print(container.report_service.today_hours_for_employee(employee_id))
    print(container.report_service.dashboard_stats())


if __name__ == "__main__":
    main()
