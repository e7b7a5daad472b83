"""State machine for a single employee's single attendance day.

NoRecord -> CheckedIn -> (OnBreak <-> CheckedIn)* -> CheckedOut

Every transition returns a new ``AttendanceDay``; the input record is never
modified, so a failed transition leaves nothing half-applied.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..common.numbers import round2
from ..core.constants import DEFAULT_WORK_LOCATION
from ..core.enums import BreakType
from ..core.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    NotCheckedInError,
    ValidationError,
)
from ..shifts.model import ShiftTiming
from ..shifts.policy import ShiftPolicy
from .breaks import BreakTracker
from .factory import AttendanceStrategyFactory
from .model import AttendanceDay, GeoPoint
from .strategies.base import CheckInFacts, CheckOutFacts, StatusDecision


def whole_minutes(seconds: float) -> int:
    return int(math.floor(seconds / 60))


@dataclass(frozen=True)
class Transition:
    record: AttendanceDay
    decision: Optional[StatusDecision] = None


class AttendanceDayRules:
    def __init__(
        self,
        *,
        policy: Optional[ShiftPolicy] = None,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
    ):
        self._policy = policy or ShiftPolicy()
        self._factory = strategy_factory or AttendanceStrategyFactory()

    @property
    def policy(self) -> ShiftPolicy:
        return self._policy

    def check_in(
        self,
        existing: Optional[AttendanceDay],
        *,
        now: datetime,
        shift: Optional[ShiftTiming],
        work_location: str = DEFAULT_WORK_LOCATION,
        location: Optional[GeoPoint] = None,
        override: bool = False,
    ) -> Transition:
        today = now.date()
        if existing is not None and existing.is_checked_in and not override:
            raise AlreadyCheckedInError(f"Already checked in today at {existing.login_time:%H:%M}")

        # Rejects shifts that end at or before they start.
        self._policy.standard_shift_hours(shift)
        shift_start = self._policy.shift_start_on(shift, today)
        late_minutes = max(0, whole_minutes((now - shift_start).total_seconds()))
        facts = CheckInFacts(late_minutes=late_minutes)
        decision = self._factory.for_checkin(facts).decide_checkin(facts)

        record = AttendanceDay(
            date=today,
            login_time=now,
            is_present=True,
            status=decision.status,
            late_minutes=late_minutes,
            work_location=work_location or DEFAULT_WORK_LOCATION,
            check_in_location=location,
        )
        return Transition(record=record, decision=decision)

    def start_break(self, existing: Optional[AttendanceDay], *, now: datetime, break_type: BreakType) -> Transition:
        record = self._require_open_day(existing)
        tracker = BreakTracker(record.breaks).start(break_type, now)
        return Transition(record=replace(record, breaks=tracker.breaks))

    def end_break(self, existing: Optional[AttendanceDay], *, now: datetime) -> Transition:
        if existing is None:
            raise NotCheckedInError("No attendance record found for today")
        tracker = BreakTracker(existing.breaks).end(now)
        return Transition(
            record=replace(existing, breaks=tracker.breaks, total_break_minutes=tracker.total_minutes)
        )

    def check_out(
        self,
        existing: Optional[AttendanceDay],
        *,
        now: datetime,
        shift: Optional[ShiftTiming],
        location: Optional[GeoPoint] = None,
    ) -> Transition:
        record = self._require_open_day(existing)
        if now <= record.login_time:
            raise ValidationError("Check-out time must be after check-in time")

        tracker = BreakTracker(record.breaks).close_if_open(now)
        total_break = tracker.total_minutes

        worked_minutes = (now - record.login_time).total_seconds() / 60 - total_break
        hours_worked = max(0.0, worked_minutes / 60)
        overtime_hours = max(0.0, hours_worked - self._policy.standard_shift_hours(shift))
        shift_end = self._policy.shift_end_on(shift, record.date)
        early_leave_minutes = max(0, whole_minutes((shift_end - now).total_seconds()))

        facts = CheckOutFacts(
            hours_worked=hours_worked,
            overtime_hours=overtime_hours,
            early_leave_minutes=early_leave_minutes,
            current=record.status,
        )
        decision = self._factory.for_checkout(facts).decide_checkout(facts)

        updated = replace(
            record,
            logout_time=now,
            status=decision.status,
            early_leave_minutes=decision.early_leave_minutes,
            check_out_location=location if location is not None else record.check_out_location,
            breaks=tracker.breaks,
            total_break_minutes=total_break,
            hours_worked=round2(hours_worked),
            overtime_hours=round2(overtime_hours),
        )
        return Transition(record=updated, decision=decision)

    @staticmethod
    def _require_open_day(existing: Optional[AttendanceDay]) -> AttendanceDay:
        if existing is None or not existing.is_checked_in:
            raise NotCheckedInError("Not checked in today")
        if existing.is_checked_out:
            raise AlreadyCheckedOutError(f"Already checked out today at {existing.logout_time:%H:%M}")
        return existing
