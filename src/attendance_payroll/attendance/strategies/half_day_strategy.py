from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, CheckInFacts, CheckOutFacts, StatusDecision


class HalfDayStrategy(AttendanceStrategy):
    def decide_checkin(self, facts: CheckInFacts) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

    def decide_checkout(self, facts: CheckOutFacts) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.HALF_DAY)
