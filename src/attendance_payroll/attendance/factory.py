from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import (
    EARLY_LEAVE_THRESHOLD_MINUTES,
    HALF_DAY_HOURS,
    LATE_THRESHOLD_MINUTES,
    OVERTIME_THRESHOLD_HOURS,
)
from .strategies.base import AttendanceStrategy, CheckInFacts, CheckOutFacts
from .strategies.early_strategy import EarlyLeaveStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy
from .strategies.overtime_strategy import OvertimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    Check-out rules are checked in order, first match wins:
    overtime, early leave, half day.
    """

    late_threshold_minutes: int = LATE_THRESHOLD_MINUTES
    early_leave_threshold_minutes: int = EARLY_LEAVE_THRESHOLD_MINUTES
    overtime_threshold_hours: float = OVERTIME_THRESHOLD_HOURS
    half_day_hours: float = HALF_DAY_HOURS

    def for_checkin(self, facts: CheckInFacts) -> AttendanceStrategy:
        if facts.late_minutes > self.late_threshold_minutes:
            return LateStrategy()
        return NormalStrategy()

    def for_checkout(self, facts: CheckOutFacts) -> AttendanceStrategy:
        if facts.overtime_hours > self.overtime_threshold_hours:
            return OvertimeStrategy()
        if facts.early_leave_minutes > self.early_leave_threshold_minutes:
            return EarlyLeaveStrategy()
        if facts.hours_worked < self.half_day_hours:
            return HalfDayStrategy()
        return NormalStrategy()
