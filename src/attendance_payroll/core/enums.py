from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status of an attendance day as stored on the wire."""

    PRESENT = "present"
    LATE = "late"
    OVERTIME = "overtime"
    EARLY_LEAVE = "early-leave"
    HALF_DAY = "half-day"
    ABSENT = "absent"


class BreakType(str, Enum):
    LUNCH = "lunch"
    TEA = "tea"
    DINNER = "dinner"
    OTHER = "other"


class ReportType(str, Enum):
    SUMMARY = "summary"
    DETAILED = "detailed"
