from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.numbers import round_half_up
from ..common.validators import parse_coordinate, require_break_type
from ..core.constants import BULK_CHECKIN_ADDRESS, BULK_CHECKIN_LIMIT, DEFAULT_WORK_LOCATION, SAVE_ATTEMPTS
from ..core.enums import AttendanceStatus
from ..core.exceptions import (
    ConcurrentUpdateError,
    DomainError,
    InactiveEmployeeError,
    NotFoundError,
    StorageFailure,
    ValidationError,
)
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..stats.aggregator import PeriodAggregator
from ..stats.model import PeriodStats, PeriodWindow
from .day import AttendanceDayRules, Transition
from .locks import KeyedLocks
from .model import AttendanceDay, GeoPoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceEvent:
    employee: Employee
    record: AttendanceDay
    message: str


@dataclass(frozen=True)
class BulkFailure:
    employee_id: str
    name: Optional[str]
    error: str
    kind: str


@dataclass
class BulkCheckInResult:
    total: int
    successful: list[AttendanceEvent] = field(default_factory=list)
    failed: list[BulkFailure] = field(default_factory=list)

    @property
    def success_rate(self) -> int:
        if self.total <= 0:
            return 0
        return round_half_up(len(self.successful) / self.total * 100)


@dataclass(frozen=True)
class EmployeeAttendance:
    employee: Employee
    period: str
    records: list[AttendanceDay]
    stats: PeriodStats


def parse_location(data: Optional[Mapping[str, Any]], *, default_address: str = "") -> Optional[GeoPoint]:
    """Build a GeoPoint when both coordinates are given."""
    if not data:
        return None
    lat, lng = data.get("latitude"), data.get("longitude")
    if lat in (None, "") or lng in (None, ""):
        return None
    return GeoPoint(
        latitude=parse_coordinate(lat, "latitude"),
        longitude=parse_coordinate(lng, "longitude"),
        address=data.get("address") or default_address,
    )


class AttendanceService:
    def __init__(
        self,
        employees: EmployeeRepository,
        *,
        rules: Optional[AttendanceDayRules] = None,
        aggregator: Optional[PeriodAggregator] = None,
        clock: Callable[[], datetime] = now_local,
        locks: Optional[KeyedLocks] = None,
    ):
        self._employees = employees
        self._rules = rules or AttendanceDayRules()
        self._aggregator = aggregator or PeriodAggregator()
        self._clock = clock
        self._locks = locks or KeyedLocks()

    def _get_employee(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def _apply(self, employee_id: str, action: str, step: Callable[[Employee, datetime], Transition]) -> AttendanceEvent:
        """Load, transition and save one employee's day under its lock.

        The lock covers this process only; a version conflict on save means
        another worker got there first, so the transition is re-run on a
        fresh load.
        """
        with self._locks.hold(employee_id):
            attempt = 0
            while True:
                attempt += 1
                employee = self._get_employee(employee_id)
                now = self._clock()
                try:
                    transition = step(employee, now)
                except DomainError as e:
                    logger.info("%s rejected for employee %s: %s", action, employee_id, e.kind)
                    raise
                updated = employee.with_day(transition.record)
                try:
                    self._employees.save(updated)
                except ConcurrentUpdateError:
                    if attempt >= SAVE_ATTEMPTS:
                        logger.warning("%s gave up for employee %s after %d conflicts", action, employee_id, attempt)
                        raise
                    logger.info("%s conflicted for employee %s, retrying", action, employee_id)
                    continue
                except StorageFailure:
                    logger.exception("%s could not be saved for employee %s", action, employee_id)
                    raise
                break
            logger.info("%s for employee %s (status=%s)", action, employee_id, transition.record.status.value)
            note = transition.decision.note if transition.decision else None
            return AttendanceEvent(employee=updated, record=transition.record, message=note or "")

    def check_in(
        self,
        employee_id: str,
        *,
        work_location: str = DEFAULT_WORK_LOCATION,
        location: Optional[GeoPoint] = None,
        override: bool = False,
    ) -> AttendanceEvent:
        def step(employee: Employee, now: datetime) -> Transition:
            if not employee.is_active:
                raise InactiveEmployeeError("Cannot check in inactive employee")
            return self._rules.check_in(
                employee.day(now.date()),
                now=now,
                shift=employee.shift_timing,
                work_location=work_location,
                location=location,
                override=override,
            )

        return self._apply(employee_id, "Check-in", step)

    def start_break(self, employee_id: str, break_type: Any = None) -> AttendanceEvent:
        kind = require_break_type(break_type)

        def step(employee: Employee, now: datetime) -> Transition:
            return self._rules.start_break(employee.day(now.date()), now=now, break_type=kind)

        event = self._apply(employee_id, "Break start", step)
        return AttendanceEvent(event.employee, event.record, f"{kind.value.capitalize()} break started")

    def end_break(self, employee_id: str) -> AttendanceEvent:
        def step(employee: Employee, now: datetime) -> Transition:
            return self._rules.end_break(employee.day(now.date()), now=now)

        event = self._apply(employee_id, "Break end", step)
        closed = event.record.breaks[-1] if event.record.breaks else None
        label = closed.type.value.capitalize() if closed else "Break"
        return AttendanceEvent(event.employee, event.record, f"{label} break ended")

    def check_out(self, employee_id: str, *, location: Optional[GeoPoint] = None) -> AttendanceEvent:
        def step(employee: Employee, now: datetime) -> Transition:
            return self._rules.check_out(
                employee.day(now.date()),
                now=now,
                shift=employee.shift_timing,
                location=location,
            )

        event = self._apply(employee_id, "Check-out", step)
        message = "Check-out successful"
        if event.message:
            message = f"{message} ({event.message})"
        return AttendanceEvent(event.employee, event.record, message)

    def bulk_check_in(
        self,
        employee_ids: Sequence[str],
        *,
        work_location: str = DEFAULT_WORK_LOCATION,
        location: Optional[Mapping[str, Any]] = None,
    ) -> BulkCheckInResult:
        """Check in many employees; each one succeeds or fails on its own."""
        if not isinstance(employee_ids, (list, tuple)) or not employee_ids:
            raise ValidationError("Employee IDs array is required")
        if len(employee_ids) > BULK_CHECKIN_LIMIT:
            raise ValidationError(f"Maximum {BULK_CHECKIN_LIMIT} employees can be processed at once")

        point = parse_location(location, default_address=BULK_CHECKIN_ADDRESS)
        result = BulkCheckInResult(total=len(employee_ids))
        for employee_id in employee_ids:
            try:
                event = self.check_in(str(employee_id), work_location=work_location, location=point)
            except DomainError as e:
                known = self._employees.get_by_id(str(employee_id))
                result.failed.append(
                    BulkFailure(
                        employee_id=str(employee_id),
                        name=known.name if known else None,
                        error=str(e),
                        kind=e.kind,
                    )
                )
            else:
                result.successful.append(event)

        logger.info(
            "Bulk check-in: %d successful, %d failed of %d",
            len(result.successful),
            len(result.failed),
            result.total,
        )
        return result

    def attendance_for(self, employee_id: str, window: PeriodWindow) -> EmployeeAttendance:
        employee = self._get_employee(employee_id)
        today = self._clock().date()
        records = [r for r in employee.records() if window.contains(r.date)]
        return EmployeeAttendance(
            employee=employee,
            period=window.label,
            records=records,
            stats=self._aggregator.aggregate(records, window, today=today),
        )

    def today_overview(self, *, department: Optional[str] = None, role: Optional[str] = None) -> dict:
        today: date = self._clock().date()
        employees = self._employees.list_active(department=department, role=role)

        policy = self._rules.policy
        rows = []
        departments: dict[str, dict] = {}
        for emp in employees:
            day = emp.day(today)
            row = {
                "id": emp.employee_id,
                "name": emp.name,
                "employeeId": emp.employee_code,
                "role": emp.role,
                "department": emp.department,
                "isPresent": bool(day and day.is_present),
                "loginTime": day.login_time.isoformat() if day and day.login_time else None,
                "logoutTime": day.logout_time.isoformat() if day and day.logout_time else None,
                "hoursWorked": (day and day.hours_worked) or 0,
                "overtimeHours": (day and day.overtime_hours) or 0,
                "status": day.status.value if day else AttendanceStatus.ABSENT.value,
                "lateMinutes": day.late_minutes if day else 0,
                "onBreak": bool(day and day.on_break),
                "totalBreakTime": day.total_break_minutes if day else 0,
                "shiftStart": policy.expected_start(emp.shift_timing),
                "shiftEnd": policy.expected_end(emp.shift_timing),
            }
            rows.append(row)

            dept = departments.setdefault(emp.department, {"total": 0, "present": 0, "absent": 0})
            dept["total"] += 1
            dept["present" if row["isPresent"] else "absent"] += 1

        total = len(rows)
        present = sum(1 for r in rows if r["isPresent"])
        return {
            "date": today.isoformat(),
            "attendanceSummary": rows,
            "summary": {
                "present": present,
                "absent": total - present,
                "late": sum(1 for r in rows if r["status"] == AttendanceStatus.LATE.value),
                "overtime": sum(1 for r in rows if r["overtimeHours"] > 0),
                "onBreak": sum(1 for r in rows if r["onBreak"]),
                "total": total,
                "attendancePercentage": round_half_up(present / total * 100) if total > 0 else 0,
            },
            "departmentSummary": departments,
        }
