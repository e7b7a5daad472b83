from __future__ import annotations

from flask import Flask, request

from ..common.responses import fail, ok
from ..core.exceptions import DomainError


def register(app: Flask, container) -> None:
    service = container.payroll_service

    @app.route("/employees/<employee_id>/salary/<int:month>/<int:year>", methods=["GET"], endpoint="payslip")
    def payslip(employee_id: str, month: int, year: int):
        try:
            slip = service.payslip(employee_id, month, year)
            return ok("Payslip generated successfully", slip.to_dict())
        except DomainError as e:
            return fail(e)

    @app.route("/employees/salary/summary/<int:month>/<int:year>", methods=["GET"], endpoint="salary_summary")
    def salary_summary(month: int, year: int):
        try:
            data = service.salary_summary(
                month,
                year,
                department=request.args.get("department") or None,
                role=request.args.get("role") or None,
            )
            return ok("Salary summary retrieved successfully", data)
        except DomainError as e:
            return fail(e)
