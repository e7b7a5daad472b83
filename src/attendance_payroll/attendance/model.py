from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, BreakType


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float
    address: str = ""


@dataclass(frozen=True)
class BreakInterval:
    type: BreakType
    start_time: datetime
    end_time: Optional[datetime] = None
    duration_minutes: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.end_time is None


@dataclass(frozen=True)
class AttendanceDay:
    """Domain entity: one employee's record for one calendar date."""

    date: date
    login_time: Optional[datetime] = None
    logout_time: Optional[datetime] = None
    is_present: bool = False
    status: AttendanceStatus = AttendanceStatus.ABSENT
    late_minutes: int = 0
    early_leave_minutes: Optional[int] = None
    work_location: str = ""
    check_in_location: Optional[GeoPoint] = None
    check_out_location: Optional[GeoPoint] = None
    breaks: tuple[BreakInterval, ...] = ()
    total_break_minutes: int = 0
    hours_worked: Optional[float] = None
    overtime_hours: Optional[float] = None

    @property
    def is_checked_in(self) -> bool:
        return self.login_time is not None

    @property
    def is_checked_out(self) -> bool:
        return self.logout_time is not None

    @property
    def on_break(self) -> bool:
        return any(b.is_open for b in self.breaks)
