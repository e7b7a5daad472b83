import pytest

from attendance_payroll.core.exceptions import ValidationError
from attendance_payroll.shifts.model import ShiftTiming
from attendance_payroll.shifts.policy import ShiftPolicy


def test_defaults_when_shift_unset():
    policy = ShiftPolicy()

    assert policy.expected_start(None) == "09:00"
    assert policy.expected_end(ShiftTiming()) == "18:00"
    assert policy.standard_shift_hours(None) == 9


def test_standard_hours_from_shift():
    assert ShiftPolicy().standard_shift_hours(ShiftTiming("07:30", "16:00")) == 8.5


def test_partial_shift_falls_back_per_field():
    policy = ShiftPolicy()
    shift = ShiftTiming(start_time="10:00")

    assert policy.expected_start(shift) == "10:00"
    assert policy.expected_end(shift) == "18:00"


def test_end_before_start_fails_fast():
    with pytest.raises(ValidationError):
        ShiftPolicy().standard_shift_hours(ShiftTiming("22:00", "06:00"))


def test_malformed_time_rejected():
    with pytest.raises(ValidationError):
        ShiftPolicy().standard_shift_hours(ShiftTiming("9am", "18:00"))
