"""Named scoring strategies for ranking employees and flagging risks.

Dashboards and comprehensive reports weigh employees differently; both
variants are kept and picked by the caller.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ..common.numbers import round2
from ..core.constants import (
    DASHBOARD_AT_RISK_LIMIT,
    DASHBOARD_TOP_N,
    FULL_TIME_MONTH_HOURS,
    REPORT_TOP_N,
)
from ..stats.model import PeriodStats


def dashboard_performance_score(stats: PeriodStats) -> float:
    return round2(stats.attendance_percentage * 0.7 + stats.punctuality_score * 0.3)


def report_performance_score(stats: PeriodStats) -> float:
    hours_factor = min(stats.total_hours / FULL_TIME_MONTH_HOURS, 1) * 100
    return round2(stats.attendance_percentage * 0.4 + stats.punctuality_score * 0.3 + hours_factor * 0.3)


def dashboard_issues(stats: PeriodStats) -> list[str]:
    issues = []
    if stats.attendance_percentage < 80:
        issues.append(f"Low attendance: {stats.attendance_percentage}%")
    if stats.punctuality_score < 70:
        issues.append(f"Low punctuality: {stats.punctuality_score}%")
    return issues


def report_issues(stats: PeriodStats) -> list[str]:
    """Flagged on low attendance or frequent lateness; early leaves are only noted."""
    flagged = stats.attendance_percentage < 80 or stats.late_count > 5
    if not flagged:
        return []
    issues = []
    if stats.attendance_percentage < 80:
        issues.append(f"Low attendance: {stats.attendance_percentage}%")
    if stats.late_count > 5:
        issues.append(f"Frequent late arrivals: {stats.late_count} times")
    if stats.early_leave_count > 3:
        issues.append(f"Early leaves: {stats.early_leave_count} times")
    return issues


@dataclass(frozen=True)
class ScoringStrategy:
    name: str
    score: Callable[[PeriodStats], float]
    issues: Callable[[PeriodStats], list[str]]
    top_n: int
    at_risk_limit: Optional[int] = None


DASHBOARD_SCORING = ScoringStrategy(
    name="dashboard",
    score=dashboard_performance_score,
    issues=dashboard_issues,
    top_n=DASHBOARD_TOP_N,
    at_risk_limit=DASHBOARD_AT_RISK_LIMIT,
)

REPORT_SCORING = ScoringStrategy(
    name="report",
    score=report_performance_score,
    issues=report_issues,
    top_n=REPORT_TOP_N,
)
