from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, CheckInFacts, CheckOutFacts, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in."""

    def decide_checkin(self, facts: CheckInFacts) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE, note=f"Late by {facts.late_minutes} minutes")

    def decide_checkout(self, facts: CheckOutFacts) -> StatusDecision:
        return StatusDecision(status=facts.current)
