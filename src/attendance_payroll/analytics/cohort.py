from __future__ import annotations

from typing import Iterable, Optional

from ..common.numbers import round2, round_half_up
from ..employees.model import Employee
from ..stats.aggregator import attendance_percentage, punctuality_score
from ..stats.model import PeriodStats
from .model import AtRiskEmployee, CohortReport, GroupStats, RankedEmployee
from .scoring import DASHBOARD_SCORING, ScoringStrategy


def _group(groups: dict[str, GroupStats], key: str, stats: PeriodStats, percentages: dict[str, list[int]]) -> None:
    g = groups.setdefault(key, GroupStats())
    g.employees += 1
    g.total_present += stats.present_days
    g.total_hours = round2(g.total_hours + stats.total_hours)
    percentages.setdefault(key, []).append(stats.attendance_percentage)


def _finish(groups: dict[str, GroupStats], percentages: dict[str, list[int]]) -> None:
    for key, g in groups.items():
        values = percentages[key]
        g.average_attendance = round_half_up(sum(values) / len(values))


class CohortAnalytics:
    """Pure summaries over many employees' period statistics."""

    def summarize(
        self,
        per_employee: Iterable[tuple[Employee, PeriodStats]],
        *,
        scoring: Optional[ScoringStrategy] = None,
    ) -> CohortReport:
        scoring = scoring or DASHBOARD_SCORING
        items = list(per_employee)

        departments: dict[str, GroupStats] = {}
        roles: dict[str, GroupStats] = {}
        dept_pct: dict[str, list[int]] = {}
        role_pct: dict[str, list[int]] = {}
        for employee, stats in items:
            _group(departments, employee.department, stats, dept_pct)
            _group(roles, employee.role, stats, role_pct)
        _finish(departments, dept_pct)
        _finish(roles, role_pct)

        ranked = [RankedEmployee(e, s, scoring.score(s)) for e, s in items]
        # Stable sort keeps input order for equal scores.
        ranked.sort(key=lambda r: r.performance_score, reverse=True)

        at_risk = []
        for employee, stats in items:
            issues = scoring.issues(stats)
            if issues:
                at_risk.append(AtRiskEmployee(employee=employee, stats=stats, issues=issues))
        at_risk.sort(key=lambda a: a.stats.attendance_percentage)
        if scoring.at_risk_limit is not None:
            at_risk = at_risk[: scoring.at_risk_limit]

        total_present = sum(s.present_days for _, s in items)
        total_absent = sum(s.absent_days for _, s in items)
        total_late = sum(s.late_count for _, s in items)
        total_early = sum(s.early_leave_count for _, s in items)

        return CohortReport(
            scoring=scoring.name,
            total_employees=len(items),
            total_present=total_present,
            total_absent=total_absent,
            total_hours=round2(sum(s.total_hours for _, s in items)),
            total_overtime_hours=round2(sum(s.overtime_hours for _, s in items)),
            average_attendance=attendance_percentage(total_present, total_absent),
            punctuality_score=punctuality_score(total_present, total_late, total_early),
            departments=departments,
            roles=roles,
            top_performers=ranked[: scoring.top_n],
            at_risk=at_risk,
        )
