from datetime import datetime

import pytest

from attendance_payroll.attendance.day import AttendanceDayRules
from attendance_payroll.attendance.model import GeoPoint
from attendance_payroll.core.enums import AttendanceStatus, BreakType
from attendance_payroll.core.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    NotCheckedInError,
    ValidationError,
)
from attendance_payroll.shifts.model import ShiftTiming

SHIFT = ShiftTiming("09:00", "18:00")


def _t(hour: int, minute: int = 0, second: int = 0) -> datetime:
    return datetime(2026, 10, 14, hour, minute, second)


def _checked_in(at: datetime):
    return AttendanceDayRules().check_in(None, now=at, shift=SHIFT).record


@pytest.mark.parametrize(
    "at, late, status",
    [
        (_t(8, 45), 0, AttendanceStatus.PRESENT),
        (_t(9, 15, 59), 15, AttendanceStatus.PRESENT),
        (_t(9, 16), 16, AttendanceStatus.LATE),
        (_t(11, 0), 120, AttendanceStatus.LATE),
    ],
)
def test_late_minutes_and_status(at, late, status):
    record = _checked_in(at)

    assert record.late_minutes == late
    assert record.status == status
    assert record.is_present
    assert record.date == at.date()
    assert record.breaks == ()


def test_check_in_twice_rejected():
    record = _checked_in(_t(9, 0))

    with pytest.raises(AlreadyCheckedInError):
        AttendanceDayRules().check_in(record, now=_t(9, 5), shift=SHIFT)


def test_override_reopens_the_day():
    rules = AttendanceDayRules()
    done = rules.check_out(_checked_in(_t(9, 0)), now=_t(12, 0), shift=SHIFT).record

    reopened = rules.check_in(done, now=_t(13, 0), shift=SHIFT, override=True).record

    assert reopened.login_time == _t(13, 0)
    assert reopened.logout_time is None
    assert reopened.hours_worked is None


def test_late_check_in_with_lunch_then_early_leave():
    rules = AttendanceDayRules()
    record = rules.check_in(None, now=_t(9, 20), shift=SHIFT).record
    assert (record.late_minutes, record.status) == (20, AttendanceStatus.LATE)

    record = rules.start_break(record, now=_t(13, 0), break_type=BreakType.LUNCH).record
    record = rules.end_break(record, now=_t(13, 30)).record
    assert record.total_break_minutes == 30

    out = rules.check_out(record, now=_t(17, 0), shift=SHIFT)
    record = out.record

    # (17:00 - 09:20) - 30 minutes = 430 minutes
    assert record.hours_worked == 7.17
    assert record.overtime_hours == 0
    assert record.early_leave_minutes == 60
    assert record.status == AttendanceStatus.EARLY_LEAVE
    assert record.logout_time == _t(17, 0)


def test_overtime_beats_early_leave_at_checkout():
    rules = AttendanceDayRules()
    record = rules.check_in(None, now=_t(6, 0), shift=SHIFT).record

    record = rules.check_out(record, now=_t(17, 0), shift=SHIFT).record

    assert record.overtime_hours == 2
    assert record.status == AttendanceStatus.OVERTIME
    assert record.early_leave_minutes is None


def test_half_day():
    rules = AttendanceDayRules()
    record = rules.check_in(None, now=_t(14, 30), shift=SHIFT).record

    record = rules.check_out(record, now=_t(17, 45), shift=SHIFT).record

    assert record.hours_worked == 3.25
    assert record.status == AttendanceStatus.HALF_DAY


def test_status_unchanged_for_normal_day():
    rules = AttendanceDayRules()
    record = rules.check_in(None, now=_t(9, 10), shift=SHIFT).record

    record = rules.check_out(record, now=_t(18, 5), shift=SHIFT).record

    assert record.status == AttendanceStatus.PRESENT
    assert record.overtime_hours == 0
    assert record.hours_worked == 8.92


def test_checkout_force_closes_open_break():
    rules = AttendanceDayRules()
    record = rules.check_in(None, now=_t(9, 0), shift=SHIFT).record
    record = rules.start_break(record, now=_t(17, 40), break_type=BreakType.TEA).record

    record = rules.check_out(record, now=_t(18, 0), shift=SHIFT).record

    assert not record.on_break
    assert record.breaks[0].end_time == _t(18, 0)
    assert record.total_break_minutes == 20
    assert record.hours_worked == 8.67


def test_checkout_records_location():
    rules = AttendanceDayRules()
    record = rules.check_in(None, now=_t(9, 0), shift=SHIFT).record
    point = GeoPoint(12.97, 77.59, "Gate 2")

    record = rules.check_out(record, now=_t(18, 0), shift=SHIFT, location=point).record

    assert record.check_out_location == point


def test_checkout_without_checkin():
    with pytest.raises(NotCheckedInError):
        AttendanceDayRules().check_out(None, now=_t(18, 0), shift=SHIFT)


def test_double_checkout():
    rules = AttendanceDayRules()
    record = rules.check_out(_checked_in(_t(9, 0)), now=_t(18, 0), shift=SHIFT).record

    with pytest.raises(AlreadyCheckedOutError):
        rules.check_out(record, now=_t(18, 5), shift=SHIFT)


def test_break_requires_open_day():
    rules = AttendanceDayRules()
    with pytest.raises(NotCheckedInError):
        rules.start_break(None, now=_t(12, 0), break_type=BreakType.LUNCH)

    done = rules.check_out(_checked_in(_t(9, 0)), now=_t(18, 0), shift=SHIFT).record
    with pytest.raises(AlreadyCheckedOutError):
        rules.start_break(done, now=_t(18, 5), break_type=BreakType.TEA)


def test_failed_transition_leaves_record_untouched():
    rules = AttendanceDayRules()
    record = rules.check_in(None, now=_t(9, 0), shift=SHIFT).record

    with pytest.raises(ValidationError):
        rules.check_out(record, now=_t(9, 0), shift=SHIFT)

    assert record.logout_time is None
    assert record.hours_worked is None


def test_check_in_rejects_inverted_shift():
    with pytest.raises(ValidationError):
        AttendanceDayRules().check_in(None, now=_t(22, 0), shift=ShiftTiming("22:00", "06:00"))
