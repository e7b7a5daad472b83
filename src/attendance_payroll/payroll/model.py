from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Allowances:
    transport: int
    meal: int
    mobile: int
    performance: int

    @property
    def total(self) -> int:
        return self.transport + self.meal + self.mobile + self.performance


@dataclass(frozen=True)
class Earnings:
    basic_salary: int
    overtime_pay: int
    bonus: int
    allowances: Allowances
    gross_earnings: int


@dataclass(frozen=True)
class Deductions:
    pf: int
    esi: int
    tax: int
    advance: int

    @property
    def total(self) -> int:
        return self.pf + self.esi + self.tax + self.advance


@dataclass(frozen=True)
class PayPeriod:
    month: int
    year: int
    month_name: str
    working_days: int
    present_days: int


@dataclass(frozen=True)
class Payslip:
    employee_id: str
    employee_name: str
    employee_code: str
    role: str
    department: str
    period: PayPeriod
    earnings: Earnings
    deductions: Deductions
    net_salary: int
    attendance: dict
    generated_on: datetime

    def to_dict(self) -> dict:
        return {
            "employee": {
                "id": self.employee_id,
                "name": self.employee_name,
                "employeeId": self.employee_code,
                "role": self.role,
                "department": self.department,
            },
            "period": {
                "month": self.period.month,
                "year": self.period.year,
                "monthName": self.period.month_name,
                "workingDays": self.period.working_days,
                "presentDays": self.period.present_days,
            },
            "earnings": {
                "basicSalary": self.earnings.basic_salary,
                "overtimePay": self.earnings.overtime_pay,
                "bonus": self.earnings.bonus,
                "allowances": {
                    "transport": self.earnings.allowances.transport,
                    "meal": self.earnings.allowances.meal,
                    "mobile": self.earnings.allowances.mobile,
                    "performance": self.earnings.allowances.performance,
                },
                "totalAllowances": self.earnings.allowances.total,
                "grossEarnings": self.earnings.gross_earnings,
            },
            "deductions": {
                "pf": self.deductions.pf,
                "esi": self.deductions.esi,
                "tax": self.deductions.tax,
                "advance": self.deductions.advance,
                "totalDeductions": self.deductions.total,
            },
            "netSalary": self.net_salary,
            "attendance": self.attendance,
            "generatedOn": self.generated_on.isoformat(),
        }


@dataclass(frozen=True)
class PeriodPay:
    """Prorated pay for an arbitrary report window, kept unrounded."""

    base_pay: Decimal
    overtime_pay: Decimal
    bonus: Decimal
    deductions: Decimal

    @property
    def gross_pay(self) -> Decimal:
        return self.base_pay + self.overtime_pay + self.bonus

    @property
    def net_pay(self) -> Decimal:
        return self.gross_pay - self.deductions
