from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class CheckInFacts:
    late_minutes: int


@dataclass(frozen=True)
class CheckOutFacts:
    hours_worked: float
    overtime_hours: float
    early_leave_minutes: int
    current: AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    early_leave_minutes: Optional[int] = None
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide_checkin(self, facts: CheckInFacts) -> StatusDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_checkout(self, facts: CheckOutFacts) -> StatusDecision:
        raise NotImplementedError
