from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, CheckInFacts, CheckOutFacts, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """On-time check-in, check-out keeps the check-in status."""

    def decide_checkin(self, facts: CheckInFacts) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT, note="On time check-in")

    def decide_checkout(self, facts: CheckOutFacts) -> StatusDecision:
        return StatusDecision(status=facts.current)
