"""Attendance & Payroll package.

Organized by feature modules (attendance, stats, payroll, analytics, ...)
with a thin Flask controller layer over service/repository layers.
"""
