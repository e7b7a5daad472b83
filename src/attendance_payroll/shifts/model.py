from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ShiftTiming:
    """An employee's daily shift as HH:MM strings (same-day only)."""

    start_time: Optional[str] = None
    end_time: Optional[str] = None
