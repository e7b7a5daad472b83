from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from attendance_payroll.employees.memory_repository import InMemoryEmployeeRepository
from attendance_payroll.employees.model import Employee, SalaryConfig
from attendance_payroll.shifts.model import ShiftTiming


class FixedClock:
    """Injectable clock; tests move it forward explicitly."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def at(self, hour: int, minute: int = 0, *, day: date | None = None) -> datetime:
        day = day or self.now.date()
        self.now = datetime(day.year, day.month, day.day, hour, minute)
        return self.now


def build_employee(
    employee_id: str = "e1",
    *,
    name: str = "Asha Rao",
    department: str = "Kitchen",
    role: str = "chef",
    is_active: bool = True,
    shift: ShiftTiming | None = ShiftTiming("09:00", "18:00"),
    base: str | None = "30000",
    overtime_rate: str | None = "200",
    attendance=None,
) -> Employee:
    return Employee(
        employee_id=employee_id,
        name=name,
        employee_code=f"EMP-{employee_id}",
        role=role,
        department=department,
        is_active=is_active,
        shift_timing=shift,
        salary=SalaryConfig(
            base=Decimal(base) if base is not None else None,
            overtime_rate_per_hour=Decimal(overtime_rate) if overtime_rate is not None else None,
        ),
        attendance=attendance or {},
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2026, 10, 14, 8, 0))


@pytest.fixture
def make_employee():
    return build_employee


@pytest.fixture
def repo() -> InMemoryEmployeeRepository:
    return InMemoryEmployeeRepository(
        [
            build_employee("e1"),
            build_employee("e2", name="Ben Ortiz", department="Service", role="waiter"),
            build_employee("e3", name="Chen Li", is_active=False),
        ]
    )
