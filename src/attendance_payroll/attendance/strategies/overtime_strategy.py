from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, CheckInFacts, CheckOutFacts, StatusDecision


class OvertimeStrategy(AttendanceStrategy):
    """Check-out past the standard shift length."""

    def decide_checkin(self, facts: CheckInFacts) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

    def decide_checkout(self, facts: CheckOutFacts) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.OVERTIME,
            note=f"with {facts.overtime_hours:.2f} hours overtime",
        )
