from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import minutes_of_day, parse_hhmm
from ..core.constants import DEFAULT_SHIFT_END, DEFAULT_SHIFT_START
from ..core.exceptions import ValidationError
from .model import ShiftTiming


class ShiftPolicy:
    """Resolves expected start/end times and the standard shift length."""

    def __init__(self, *, default_start: str = DEFAULT_SHIFT_START, default_end: str = DEFAULT_SHIFT_END):
        self._default_start = default_start
        self._default_end = default_end

    def expected_start(self, shift: Optional[ShiftTiming]) -> str:
        return (shift and shift.start_time) or self._default_start

    def expected_end(self, shift: Optional[ShiftTiming]) -> str:
        return (shift and shift.end_time) or self._default_end

    def start_time(self, shift: Optional[ShiftTiming]) -> time:
        return parse_hhmm(self.expected_start(shift))

    def end_time(self, shift: Optional[ShiftTiming]) -> time:
        return parse_hhmm(self.expected_end(shift))

    def shift_start_on(self, shift: Optional[ShiftTiming], day: date) -> datetime:
        return datetime.combine(day, self.start_time(shift))

    def shift_end_on(self, shift: Optional[ShiftTiming], day: date) -> datetime:
        return datetime.combine(day, self.end_time(shift))

    def standard_shift_hours(self, shift: Optional[ShiftTiming]) -> float:
        start = minutes_of_day(self.start_time(shift))
        end = minutes_of_day(self.end_time(shift))
        if end <= start:
            # Overnight shifts are not supported.
            raise ValidationError(
                f"Shift end {self.expected_end(shift)} must be after start {self.expected_start(shift)}"
            )
        return (end - start) / 60
