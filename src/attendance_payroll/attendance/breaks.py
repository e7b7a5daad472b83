from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..common.numbers import round_half_up
from ..core.enums import BreakType
from ..core.exceptions import BreakInProgressError, NoOpenBreakError
from .model import BreakInterval


def break_duration_minutes(start: datetime, end: datetime) -> int:
    return round_half_up((end - start).total_seconds() / 60)


@dataclass(frozen=True)
class BreakTracker:
    """Ordered breaks of one day; at most one may be open."""

    breaks: tuple[BreakInterval, ...] = ()

    @property
    def open_break(self) -> Optional[BreakInterval]:
        for b in self.breaks:
            if b.is_open:
                return b
        return None

    @property
    def total_minutes(self) -> int:
        return sum(b.duration_minutes or 0 for b in self.breaks if not b.is_open)

    def start(self, break_type: BreakType, now: datetime) -> "BreakTracker":
        current = self.open_break
        if current is not None:
            raise BreakInProgressError(
                f"{current.type.value.capitalize()} break already in progress since {current.start_time:%H:%M}"
            )
        return BreakTracker(self.breaks + (BreakInterval(type=break_type, start_time=now),))

    def end(self, now: datetime) -> "BreakTracker":
        if self.open_break is None:
            raise NoOpenBreakError("No ongoing break found")
        return BreakTracker(
            tuple(
                replace(b, end_time=now, duration_minutes=break_duration_minutes(b.start_time, now))
                if b.is_open
                else b
                for b in self.breaks
            )
        )

    def close_if_open(self, now: datetime) -> "BreakTracker":
        if self.open_break is None:
            return self
        return self.end(now)
