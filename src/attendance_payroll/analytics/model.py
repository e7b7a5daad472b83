from __future__ import annotations

from dataclasses import dataclass, field

from ..employees.model import Employee
from ..stats.model import PeriodStats


@dataclass
class GroupStats:
    employees: int = 0
    total_present: int = 0
    total_hours: float = 0.0
    average_attendance: int = 0

    def to_dict(self) -> dict:
        return {
            "employees": self.employees,
            "totalPresent": self.total_present,
            "totalHours": self.total_hours,
            "averageAttendance": self.average_attendance,
        }


@dataclass(frozen=True)
class RankedEmployee:
    employee: Employee
    stats: PeriodStats
    performance_score: float


@dataclass(frozen=True)
class AtRiskEmployee:
    employee: Employee
    stats: PeriodStats
    issues: list[str]


@dataclass
class CohortReport:
    scoring: str
    total_employees: int
    total_present: int
    total_absent: int
    total_hours: float
    total_overtime_hours: float
    average_attendance: int
    punctuality_score: int
    departments: dict[str, GroupStats] = field(default_factory=dict)
    roles: dict[str, GroupStats] = field(default_factory=dict)
    top_performers: list[RankedEmployee] = field(default_factory=list)
    at_risk: list[AtRiskEmployee] = field(default_factory=list)
