"""QR time-clock package.

Organized by feature modules (employees, attendance, reports) with thin Flask
controllers on top of service/repository layers.
"""
