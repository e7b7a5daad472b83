from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.numbers import round_half_up, to_money
from ..core.enums import ReportType
from ..core.exceptions import InvalidPeriodError, MissingSalaryConfigError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from ..stats.aggregator import PeriodAggregator
from ..stats.model import DateRange, MonthWindow, PeriodStats
from .cohort import CohortAnalytics
from .model import CohortReport
from .scoring import DASHBOARD_SCORING, REPORT_SCORING

logger = logging.getLogger(__name__)


def _employee_header(e: Employee) -> dict:
    return {
        "id": e.employee_id,
        "name": e.name,
        "employeeId": e.employee_code,
        "department": e.department,
        "role": e.role,
    }


class AnalyticsService:
    def __init__(
        self,
        employees: EmployeeRepository,
        *,
        aggregator: Optional[PeriodAggregator] = None,
        cohort: Optional[CohortAnalytics] = None,
        calculator: Optional[PayrollCalculator] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._employees = employees
        self._aggregator = aggregator or PeriodAggregator()
        self._cohort = cohort or CohortAnalytics()
        self._calculator = calculator or StandardPayrollCalculator()
        self._clock = clock

    def attendance_stats(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        department: Optional[str] = None,
        role: Optional[str] = None,
    ) -> dict:
        """Dashboard statistics for one calendar month."""
        today = self._clock().date()
        window = MonthWindow(month=month or today.month, year=year or today.year)
        employees = self._employees.list_active(department=department, role=role)
        per_employee = [
            (e, self._aggregator.aggregate(e.records(), window, today=today)) for e in employees
        ]
        report = self._cohort.summarize(per_employee, scoring=DASHBOARD_SCORING)

        return {
            "period": window.label,
            "totalEmployees": report.total_employees,
            "overallStats": {
                "totalPresent": report.total_present,
                "totalHours": report.total_hours,
                "totalOvertimeHours": report.total_overtime_hours,
                "averageAttendance": report.average_attendance,
                "punctualityScore": report.punctuality_score,
            },
            "departmentStats": {k: v.to_dict() for k, v in report.departments.items()},
            "roleStats": {k: v.to_dict() for k, v in report.roles.items()},
            "performanceMetrics": {
                "topPerformers": [
                    {**_employee_header(r.employee), **self._metrics(r.stats), "performanceScore": r.performance_score}
                    for r in report.top_performers
                ],
                "concernedEmployees": [
                    {**_employee_header(a.employee), **self._metrics(a.stats), "issues": a.issues}
                    for a in report.at_risk
                ],
            },
        }

    def comprehensive_report(
        self,
        *,
        start: date,
        end: date,
        department: Optional[str] = None,
        role: Optional[str] = None,
        report_type: ReportType = ReportType.SUMMARY,
    ) -> dict:
        if start >= end:
            raise InvalidPeriodError("End date must be after start date")
        window = DateRange(start=start, end=end)
        employees = self._employees.list_active(department=department, role=role)

        per_employee: list[tuple[Employee, PeriodStats]] = []
        details = []
        missing_salary = []
        salary = {
            "totalBaseSalary": Decimal("0"),
            "totalOvertimePay": Decimal("0"),
            "totalDeductions": Decimal("0"),
            "totalNetPay": Decimal("0"),
        }
        net_by_employee: dict[str, Decimal] = {}

        for e in employees:
            stats = self._aggregator.aggregate(e.records(), window)
            per_employee.append((e, stats))
            try:
                pay = self._calculator.compute_period_pay(stats, e.salary)
            except MissingSalaryConfigError:
                missing_salary.append(e.employee_id)
                net = Decimal("0")
            else:
                salary["totalBaseSalary"] += pay.base_pay
                salary["totalOvertimePay"] += pay.overtime_pay
                salary["totalDeductions"] += pay.deductions
                salary["totalNetPay"] += pay.net_pay
                net = pay.net_pay
            net_by_employee[e.employee_id] = net
            details.append(
                {
                    **_employee_header(e),
                    **self._metrics(stats),
                    "presentDays": stats.present_days,
                    "absentDays": stats.absent_days,
                    "netPay": to_money(net),
                    "performanceScore": REPORT_SCORING.score(stats),
                }
            )

        cohort: CohortReport = self._cohort.summarize(per_employee, scoring=REPORT_SCORING)
        dept_salary: dict[str, Decimal] = {}
        for e, _ in per_employee:
            dept_salary[e.department] = dept_salary.get(e.department, Decimal("0")) + net_by_employee[e.employee_id]

        report = {
            "period": window.label,
            "generatedAt": self._clock().isoformat(),
            "filters": {"department": department, "role": role},
            "summary": {
                "totalEmployees": cohort.total_employees,
                "totalWorkingDays": (end - start).days,
                "totalPresent": cohort.total_present,
                "totalAbsent": cohort.total_absent,
                "totalHours": round_half_up(cohort.total_hours),
                "totalOvertimeHours": round_half_up(cohort.total_overtime_hours),
                "totalSalaryPaid": to_money(salary["totalNetPay"]),
            },
            "departmentBreakdown": {
                k: {**v.to_dict(), "totalSalary": to_money(dept_salary[k])} for k, v in cohort.departments.items()
            },
            "roleBreakdown": {k: v.to_dict() for k, v in cohort.roles.items()},
            "topPerformers": [
                {
                    **_employee_header(r.employee),
                    "performanceScore": r.performance_score,
                    "attendancePercentage": r.stats.attendance_percentage,
                    "punctualityScore": r.stats.punctuality_score,
                }
                for r in cohort.top_performers
            ],
            "attendanceIssues": [
                {
                    **_employee_header(a.employee),
                    "attendancePercentage": a.stats.attendance_percentage,
                    "lateCount": a.stats.late_count,
                    "earlyLeaveCount": a.stats.early_leave_count,
                    "issues": a.issues,
                }
                for a in cohort.at_risk
            ],
            "salaryBreakdown": {k: to_money(v) for k, v in salary.items()},
            "missingSalaryConfig": missing_salary,
        }
        if report_type == ReportType.DETAILED:
            report["employeeDetails"] = details

        logger.info("Comprehensive report %s for %d employees", window.label, cohort.total_employees)
        return report

    @staticmethod
    def _metrics(stats: PeriodStats) -> dict:
        return {
            "attendancePercentage": stats.attendance_percentage,
            "punctualityScore": stats.punctuality_score,
            "totalHours": stats.total_hours,
            "overtimeHours": stats.overtime_hours,
            "lateCount": stats.late_count,
            "earlyLeaveCount": stats.early_leave_count,
        }
