from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..attendance.model import AttendanceDay
from ..common.datetime_utils import days_elapsed_in_month
from ..common.numbers import round2, round_half_up
from ..core.enums import AttendanceStatus
from .model import DateRange, MonthWindow, PeriodStats, PeriodWindow


def attendance_percentage(present_days: int, absent_days: int) -> int:
    total = present_days + absent_days
    if total <= 0:
        return 0
    return round_half_up(present_days / total * 100)


def punctuality_score(present_days: int, late_count: int, early_leave_count: int) -> int:
    """Share of present days without a late or early-leave flag.

    Can go negative; left unclamped for callers to floor at display time.
    """
    if present_days <= 0:
        return 0
    return round_half_up((present_days - late_count - early_leave_count) / present_days * 100)


class PeriodAggregator:
    """Read-only fold of attendance days over a period window."""

    def aggregate(
        self,
        records: Iterable[AttendanceDay],
        window: PeriodWindow,
        *,
        today: Optional[date] = None,
    ) -> PeriodStats:
        selected = [r for r in records if window.contains(r.date)]

        present_days = sum(1 for r in selected if r.is_present)
        if isinstance(window, MonthWindow):
            # Days that have not happened yet never count as absent.
            elapsed = days_elapsed_in_month(window.year, window.month, today or date.today())
            absent_days = max(0, elapsed - present_days)
        else:
            absent_days = sum(1 for r in selected if not r.is_present)

        total_hours = sum(r.hours_worked or 0 for r in selected)
        overtime_hours = sum(r.overtime_hours or 0 for r in selected)
        late_count = sum(1 for r in selected if r.status == AttendanceStatus.LATE)
        early_leave_count = sum(1 for r in selected if r.status == AttendanceStatus.EARLY_LEAVE)

        return PeriodStats(
            present_days=present_days,
            absent_days=absent_days,
            total_hours=round2(total_hours),
            overtime_hours=round2(overtime_hours),
            late_count=late_count,
            early_leave_count=early_leave_count,
            attendance_percentage=attendance_percentage(present_days, absent_days),
            punctuality_score=punctuality_score(present_days, late_count, early_leave_count),
            average_hours=round2(total_hours / present_days) if present_days > 0 else 0.0,
            total_break_minutes=sum(r.total_break_minutes for r in selected),
        )

    def aggregate_range(self, records: Iterable[AttendanceDay], start: date, end: date) -> PeriodStats:
        return self.aggregate(records, DateRange(start=start, end=end))

    def aggregate_month(
        self, records: Iterable[AttendanceDay], month: int, year: int, *, today: Optional[date] = None
    ) -> PeriodStats:
        return self.aggregate(records, MonthWindow(month=month, year=year), today=today)
