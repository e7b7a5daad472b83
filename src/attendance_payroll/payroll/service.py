from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.numbers import round_half_up
from ..core.exceptions import InvalidPeriodError, MissingSalaryConfigError, NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..stats.aggregator import PeriodAggregator
from ..stats.model import MonthWindow
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import Payslip

logger = logging.getLogger(__name__)


class PayrollService:
    def __init__(
        self,
        employees: EmployeeRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        aggregator: Optional[PeriodAggregator] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._employees = employees
        self._calculator = calculator or StandardPayrollCalculator()
        self._aggregator = aggregator or PeriodAggregator()
        self._clock = clock

    def payslip(self, employee_id: str, month: int, year: int) -> Payslip:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return self._payslip_for(employee, month, year)

    def _payslip_for(self, employee: Employee, month: int, year: int) -> Payslip:
        now = self._clock()
        window = MonthWindow(month=int(month), year=int(year))
        stats = self._aggregator.aggregate(employee.records(), window, today=now.date())
        payslip = self._calculator.compute_payslip(
            employee, stats, employee.salary, month=window.month, year=window.year, generated_on=now
        )
        logger.info("Payslip generated for employee %s (%s)", employee.employee_id, window.label)
        return payslip

    def salary_summary(
        self,
        month: int,
        year: int,
        *,
        department: Optional[str] = None,
        role: Optional[str] = None,
    ) -> dict:
        MonthWindow(month=int(month), year=int(year))
        employees = self._employees.list_active(department=department, role=role)
        rows = []
        total_payroll = 0
        total_hours = 0.0
        total_overtime = 0.0
        departments: dict[str, dict] = {}
        skipped = []

        for employee in employees:
            try:
                slip = self._payslip_for(employee, month, year)
            except (MissingSalaryConfigError, InvalidPeriodError) as e:
                logger.info("Salary summary skipped employee %s: %s", employee.employee_id, e.kind)
                skipped.append({"id": employee.employee_id, "name": employee.name, "error": str(e), "kind": e.kind})
                continue
            rows.append(
                {
                    "employee": {
                        "id": employee.employee_id,
                        "name": employee.name,
                        "employeeId": employee.employee_code,
                        "role": employee.role,
                        "department": employee.department,
                    },
                    "attendance": {
                        "presentDays": slip.period.present_days,
                        "totalHours": slip.attendance["totalHours"],
                        "overtimeHours": slip.attendance["overtimeHours"],
                        "attendancePercentage": slip.attendance["attendancePercentage"],
                    },
                    "salary": {
                        "basicSalary": slip.earnings.basic_salary,
                        "grossSalary": slip.earnings.gross_earnings,
                        "totalAllowances": slip.earnings.allowances.total,
                        "totalDeductions": slip.deductions.total,
                        "netSalary": slip.net_salary,
                    },
                }
            )
            total_payroll += slip.net_salary
            total_hours += slip.attendance["totalHours"]
            total_overtime += slip.attendance["overtimeHours"]

            dept = departments.setdefault(employee.department, {"employees": 0, "totalSalary": 0})
            dept["employees"] += 1
            dept["totalSalary"] += slip.net_salary

        for dept in departments.values():
            dept["averageSalary"] = round_half_up(dept["totalSalary"] / dept["employees"])

        count = len(rows)
        return {
            "summary": {
                "period": f"{int(month)}/{int(year)}",
                "totalEmployees": count,
                "totalPayroll": total_payroll,
                "averageSalary": round_half_up(total_payroll / count) if count else 0,
                "totalHours": round_half_up(total_hours),
                "totalOvertimeHours": round_half_up(total_overtime),
                "departmentBreakdown": departments,
            },
            "employees": rows,
            "skipped": skipped,
        }
