from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Union

from ..common.datetime_utils import month_bounds
from ..core.exceptions import InvalidPeriodError


@dataclass(frozen=True)
class DateRange:
    """Explicit inclusive [start, end] window."""

    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise InvalidPeriodError("End date must not be before start date")

    @property
    def label(self) -> str:
        return f"{self.start.isoformat()} to {self.end.isoformat()}"

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class MonthWindow:
    """A full calendar month."""

    month: int
    year: int

    def __post_init__(self):
        if not 1 <= int(self.month) <= 12:
            raise InvalidPeriodError(f"Invalid month: {self.month}")

    @property
    def label(self) -> str:
        return f"{self.month}/{self.year}"

    @property
    def bounds(self) -> tuple[date, date]:
        return month_bounds(self.year, self.month)

    def contains(self, day: date) -> bool:
        start, end = self.bounds
        return start <= day <= end


PeriodWindow = Union[DateRange, MonthWindow]


@dataclass(frozen=True)
class PeriodStats:
    present_days: int
    absent_days: int
    total_hours: float
    overtime_hours: float
    late_count: int
    early_leave_count: int
    attendance_percentage: int
    punctuality_score: int
    average_hours: float
    total_break_minutes: int = 0

    @property
    def working_days(self) -> int:
        return self.present_days + self.absent_days

    def to_dict(self) -> dict:
        return {
            "presentDays": self.present_days,
            "absentDays": self.absent_days,
            "workingDays": self.working_days,
            "totalHours": self.total_hours,
            "overtimeHours": self.overtime_hours,
            "lateCount": self.late_count,
            "earlyLeaveCount": self.early_leave_count,
            "attendancePercentage": self.attendance_percentage,
            "punctualityScore": self.punctuality_score,
            "averageHours": self.average_hours,
            "totalBreakMinutes": self.total_break_minutes,
        }
