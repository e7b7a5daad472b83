from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ...employees.model import Employee, SalaryConfig
from ...stats.model import PeriodStats
from ..model import Payslip, PeriodPay


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
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
        raise NotImplementedError

    @abstractmethod
    def compute_period_pay(self, stats: PeriodStats, salary: SalaryConfig) -> PeriodPay:
        raise NotImplementedError
