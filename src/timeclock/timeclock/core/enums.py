from __future__ import annotations

from enum import Enum


class EmployeeRole(str, Enum):
    """Job role of an employee. Declaration order is the display order."""

    OWNER = "owner"
    ADMIN = "admin"
    MANAGER = "manager"
    SERVER = "server"
    CHEF = "chef"
    CASHIER = "cashier"
    DELIVERY = "delivery"


class ScanType(str, Enum):
    """What a scan did to the employee's attendance."""

    CHECKIN = "checkin"
    CHECKOUT = "checkout"
