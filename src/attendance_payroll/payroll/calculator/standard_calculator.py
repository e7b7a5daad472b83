from __future__ import annotations

import calendar
from datetime import datetime
from decimal import Decimal
from typing import Optional

from .base import PayrollCalculator
from ..model import Allowances, Deductions, Earnings, PayPeriod, Payslip, PeriodPay
from ..rates import PayrollRates
from ...common.numbers import as_decimal, to_money
from ...core.exceptions import InvalidPeriodError, MissingSalaryConfigError
from ...employees.model import Employee, SalaryConfig
from ...stats.model import PeriodStats


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: fixed monthly basic + overtime + allowances - PF/ESI/advance.

    Amounts are accumulated as Decimal and only rounded to whole units when
    placed on the payslip.
    """

    def __init__(self, rates: Optional[PayrollRates] = None):
        self._rates = rates or PayrollRates()

    @property
    def rates(self) -> PayrollRates:
        return self._rates

    def overtime_rate(self, salary: SalaryConfig) -> Decimal:
        if salary.overtime_rate_per_hour:
            return as_decimal(salary.overtime_rate_per_hour)
        if salary.hourly_rate:
            return as_decimal(salary.hourly_rate) * self._rates.overtime_multiplier
        return Decimal("0")

    def overtime_pay(self, stats: PeriodStats, salary: SalaryConfig) -> Decimal:
        return self.overtime_rate(salary) * as_decimal(stats.overtime_hours)

    @staticmethod
    def _require_base(salary: Optional[SalaryConfig]) -> Decimal:
        if salary is None or salary.base is None:
            raise MissingSalaryConfigError("Salary configuration is missing a base salary")
        return as_decimal(salary.base)

    def compute_payslip(
        self,
        employee: Employee,
        stats: PeriodStats,
        salary: SalaryConfig,
        *,
        month: int,
        year: int,
        generated_on: datetime,
    ) -> Payslip:
        if stats.working_days <= 0:
            raise InvalidPeriodError("Payroll period covers zero days")
        basic = self._require_base(salary)
        r = self._rates

        overtime = self.overtime_pay(stats, salary)
        performance = r.performance_allowance if stats.attendance_percentage >= r.performance_min_attendance else Decimal("0")
        allowance_total = r.transport_allowance + r.meal_allowance + r.mobile_allowance + performance
        bonus = as_decimal(salary.bonus)
        gross = basic + overtime + allowance_total + bonus

        deductions = Deductions(
            pf=to_money(basic * r.pf_rate),
            esi=to_money(basic * r.esi_rate),
            tax=to_money(basic * r.tax_rate),
            advance=to_money(as_decimal(salary.deductions)),
        )

        return Payslip(
            employee_id=employee.employee_id,
            employee_name=employee.name,
            employee_code=employee.employee_code,
            role=employee.role,
            department=employee.department,
            period=PayPeriod(
                month=int(month),
                year=int(year),
                month_name=calendar.month_name[int(month)],
                working_days=stats.working_days,
                present_days=stats.present_days,
            ),
            earnings=Earnings(
                basic_salary=to_money(basic),
                overtime_pay=to_money(overtime),
                bonus=to_money(bonus),
                allowances=Allowances(
                    transport=to_money(r.transport_allowance),
                    meal=to_money(r.meal_allowance),
                    mobile=to_money(r.mobile_allowance),
                    performance=to_money(performance),
                ),
                gross_earnings=to_money(gross),
            ),
            deductions=deductions,
            net_salary=to_money(gross - deductions.total),
            attendance={
                "totalWorkingDays": stats.working_days,
                "presentDays": stats.present_days,
                "absentDays": stats.absent_days,
                "totalHours": stats.total_hours,
                "overtimeHours": stats.overtime_hours,
                "attendancePercentage": stats.attendance_percentage,
            },
            generated_on=generated_on,
        )

    def compute_period_pay(self, stats: PeriodStats, salary: SalaryConfig) -> PeriodPay:
        """Simplified report path: basic prorated by present days."""
        basic = self._require_base(salary)
        daily = basic / Decimal(self._rates.days_per_month)
        return PeriodPay(
            base_pay=daily * stats.present_days,
            overtime_pay=self.overtime_pay(stats, salary),
            bonus=as_decimal(salary.bonus),
            deductions=as_decimal(salary.deductions),
        )
