from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Mapping, Optional

from ..attendance.model import AttendanceDay
from ..shifts.model import ShiftTiming


@dataclass(frozen=True)
class SalaryConfig:
    base: Optional[Decimal]
    overtime_rate_per_hour: Optional[Decimal] = None
    bonus: Decimal = Decimal("0")
    deductions: Decimal = Decimal("0")
    hourly_rate: Optional[Decimal] = None


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee with its attendance history.

    ``attendance`` is keyed by calendar date, one record per day. ``version``
    is the stored revision the entity was loaded at.
    """

    employee_id: str
    name: str
    employee_code: str
    role: str
    department: str
    is_active: bool = True
    shift_timing: Optional[ShiftTiming] = None
    salary: Optional[SalaryConfig] = None
    attendance: Mapping[date, AttendanceDay] = field(default_factory=dict, hash=False)
    version: int = 0

    def day(self, work_date: date) -> Optional[AttendanceDay]:
        return self.attendance.get(work_date)

    def with_day(self, record: AttendanceDay) -> "Employee":
        history = dict(self.attendance)
        history[record.date] = record
        return Employee(
            employee_id=self.employee_id,
            name=self.name,
            employee_code=self.employee_code,
            role=self.role,
            department=self.department,
            is_active=self.is_active,
            shift_timing=self.shift_timing,
            salary=self.salary,
            attendance=history,
            version=self.version,
        )

    def records(self) -> list[AttendanceDay]:
        return [self.attendance[d] for d in sorted(self.attendance)]
