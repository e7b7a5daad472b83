from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .analytics.service import AnalyticsService
from .attendance.day import AttendanceDayRules
from .attendance.factory import AttendanceStrategyFactory
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local
from .database.connection import DBConfig, DatabaseConnection
from .employees.memory_repository import InMemoryEmployeeRepository
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.rates import PayrollRates
from .payroll.service import PayrollService
from .shifts.policy import ShiftPolicy
from .stats.aggregator import PeriodAggregator


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    clock: Callable[[], datetime]

    attendance_service: AttendanceService
    payroll_service: PayrollService
    analytics_service: AnalyticsService

    conn: Optional[DatabaseConnection] = None


def build_employee_repository(*, storage: str, db_config: Optional[dict] = None):
    if storage == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config or {}))
        return MySQLEmployeeRepository(conn), conn
    if storage == "memory":
        return InMemoryEmployeeRepository(), None
    raise ValueError(f"Unknown STORAGE backend: {storage!r}")


def build_container(
    *,
    storage: str = "memory",
    db_config: Optional[dict] = None,
    payroll_rates: Optional[dict] = None,
    employees_repo: Optional[EmployeeRepository] = None,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    conn = None
    if employees_repo is None:
        employees_repo, conn = build_employee_repository(storage=storage, db_config=db_config)

    aggregator = PeriodAggregator()
    calculator = StandardPayrollCalculator(PayrollRates.from_mapping(payroll_rates))
    rules = AttendanceDayRules(policy=ShiftPolicy(), strategy_factory=AttendanceStrategyFactory())

    attendance_service = AttendanceService(employees_repo, rules=rules, aggregator=aggregator, clock=clock)
    payroll_service = PayrollService(employees_repo, calculator=calculator, aggregator=aggregator, clock=clock)
    analytics_service = AnalyticsService(
        employees_repo, aggregator=aggregator, calculator=calculator, clock=clock
    )

    return Container(
        employees_repo=employees_repo,
        clock=clock,
        attendance_service=attendance_service,
        payroll_service=payroll_service,
        analytics_service=analytics_service,
        conn=conn,
    )
