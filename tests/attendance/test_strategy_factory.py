from attendance_payroll.attendance.factory import AttendanceStrategyFactory
from attendance_payroll.attendance.strategies.base import CheckInFacts, CheckOutFacts
from attendance_payroll.attendance.strategies.early_strategy import EarlyLeaveStrategy
from attendance_payroll.attendance.strategies.half_day_strategy import HalfDayStrategy
from attendance_payroll.attendance.strategies.late_strategy import LateStrategy
from attendance_payroll.attendance.strategies.normal_strategy import NormalStrategy
from attendance_payroll.attendance.strategies.overtime_strategy import OvertimeStrategy
from attendance_payroll.core.enums import AttendanceStatus


def test_factory_checkin_on_time_within_threshold():
    strategy = AttendanceStrategyFactory().for_checkin(CheckInFacts(late_minutes=15))

    assert isinstance(strategy, NormalStrategy)


def test_factory_checkin_late_after_threshold():
    strategy = AttendanceStrategyFactory().for_checkin(CheckInFacts(late_minutes=16))

    assert isinstance(strategy, LateStrategy)


def test_overtime_wins_over_early_leave():
    facts = CheckOutFacts(hours_worked=9.6, overtime_hours=0.6, early_leave_minutes=40, current=AttendanceStatus.LATE)

    strategy = AttendanceStrategyFactory().for_checkout(facts)

    assert isinstance(strategy, OvertimeStrategy)
    assert strategy.decide_checkout(facts).status == AttendanceStatus.OVERTIME


def test_early_leave_wins_over_half_day():
    facts = CheckOutFacts(hours_worked=3.0, overtime_hours=0, early_leave_minutes=31, current=AttendanceStatus.PRESENT)

    strategy = AttendanceStrategyFactory().for_checkout(facts)
    decision = strategy.decide_checkout(facts)

    assert isinstance(strategy, EarlyLeaveStrategy)
    assert decision.early_leave_minutes == 31


def test_half_day_when_short_and_not_early():
    facts = CheckOutFacts(hours_worked=3.9, overtime_hours=0, early_leave_minutes=30, current=AttendanceStatus.LATE)

    assert isinstance(AttendanceStrategyFactory().for_checkout(facts), HalfDayStrategy)


def test_checkout_keeps_checkin_status_otherwise():
    facts = CheckOutFacts(hours_worked=8.5, overtime_hours=0.5, early_leave_minutes=0, current=AttendanceStatus.LATE)

    strategy = AttendanceStrategyFactory().for_checkout(facts)

    assert isinstance(strategy, NormalStrategy)
    assert strategy.decide_checkout(facts).status == AttendanceStatus.LATE


def test_checkout_only_strategies_give_a_neutral_checkin_decision():
    facts = CheckInFacts(late_minutes=0)

    for strategy in (EarlyLeaveStrategy(), HalfDayStrategy(), OvertimeStrategy()):
        assert strategy.decide_checkin(facts).status == AttendanceStatus.PRESENT
