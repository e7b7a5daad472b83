from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, CheckInFacts, CheckOutFacts, StatusDecision


class EarlyLeaveStrategy(AttendanceStrategy):
    """Check-out well before the shift end."""

    def decide_checkin(self, facts: CheckInFacts) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

    def decide_checkout(self, facts: CheckOutFacts) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.EARLY_LEAVE,
            early_leave_minutes=facts.early_leave_minutes,
            note=f"Early leave by {facts.early_leave_minutes} minutes",
        )
