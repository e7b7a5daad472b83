from __future__ import annotations

import json
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..attendance.model import AttendanceDay
from ..attendance.serialization import break_from_wire, break_to_wire, geo_from_wire, geo_to_wire
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConcurrentUpdateError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, format_mysql_time
from ..shifts.model import ShiftTiming
from .model import Employee, SalaryConfig
from .repository import EmployeeRepository

_EMPLOYEE_FIELDS = (
    "employee_code",
    "name",
    "role",
    "department",
    "is_active",
    "shift_start",
    "shift_end",
    "salary_base",
    "salary_overtime_rate",
    "salary_bonus",
    "salary_deductions",
    "hourly_rate",
)

_EMPLOYEE_COLUMNS = ", ".join(("employee_id",) + _EMPLOYEE_FIELDS + ("version",))

DAY_FIELDS = (
    "employee_id",
    "work_date",
    "login_time",
    "logout_time",
    "is_present",
    "status",
    "late_minutes",
    "early_leave_minutes",
    "work_location",
    "check_in_location",
    "check_out_location",
    "breaks",
    "total_break_time",
    "hours_worked",
    "overtime_hours",
)

_DAY_COLUMNS = ", ".join(DAY_FIELDS)


def _json(value: Any) -> Optional[str]:
    return json.dumps(value) if value is not None else None


def _load_json(value: Any) -> Any:
    if value is None or isinstance(value, (dict, list)):
        return value
    return json.loads(value)


def _decimal(value: Any) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


def day_to_row(employee_id: str, d: AttendanceDay) -> tuple:
    """Parameters for one ``attendance_days`` row, in DAY_FIELDS order."""
    return (
        employee_id,
        d.date,
        d.login_time,
        d.logout_time,
        1 if d.is_present else 0,
        d.status.value,
        d.late_minutes,
        d.early_leave_minutes,
        d.work_location,
        _json(geo_to_wire(d.check_in_location)),
        _json(geo_to_wire(d.check_out_location)),
        json.dumps([break_to_wire(b) for b in d.breaks]),
        d.total_break_minutes,
        d.hours_worked,
        d.overtime_hours,
    )


def day_from_row(r: dict) -> AttendanceDay:
    return AttendanceDay(
        date=r["work_date"],
        login_time=r.get("login_time"),
        logout_time=r.get("logout_time"),
        is_present=bool(r["is_present"]),
        status=AttendanceStatus(r["status"]),
        late_minutes=int(r["late_minutes"] or 0),
        early_leave_minutes=r.get("early_leave_minutes"),
        work_location=r.get("work_location") or "",
        check_in_location=geo_from_wire(_load_json(r.get("check_in_location"))),
        check_out_location=geo_from_wire(_load_json(r.get("check_out_location"))),
        breaks=tuple(break_from_wire(b) for b in _load_json(r["breaks"]) or ()),
        total_break_minutes=int(r["total_break_time"] or 0),
        hours_worked=r.get("hours_worked"),
        overtime_hours=r.get("overtime_hours"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    """Employees plus their attendance days.

    ``save`` is a compare-and-swap on ``employees.version`` so that writers in
    different processes cannot silently overwrite each other.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_EMPLOYEE_COLUMNS} FROM employees WHERE employee_id=%s", (str(employee_id),))
            row = fetchone(cur)
            if not row:
                return None
            return self._to_employee(row, self._load_days(cur, [row["employee_id"]]))

    def list_active(self, *, department: Optional[str] = None, role: Optional[str] = None) -> Sequence[Employee]:
        sql = f"SELECT {_EMPLOYEE_COLUMNS} FROM employees WHERE is_active=1"
        params: list[Any] = []
        if department:
            sql += " AND department=%s"
            params.append(department)
        if role:
            sql += " AND role=%s"
            params.append(role)
        sql += " ORDER BY employee_code"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            rows = fetchall(cur)
            days = self._load_days(cur, [r["employee_id"] for r in rows])
            return [self._to_employee(r, days) for r in rows]

    def save(self, employee: Employee) -> None:
        values = self._employee_params(employee)
        with db_cursor(self._conn_factory) as (_, cur):
            assignments = ", ".join(f"{c}=%s" for c in _EMPLOYEE_FIELDS)
            cur.execute(
                f"UPDATE employees SET {assignments}, version=version+1 WHERE employee_id=%s AND version=%s",
                values + (employee.employee_id, employee.version),
            )
            if cur.rowcount == 0:
                cur.execute("SELECT version FROM employees WHERE employee_id=%s FOR UPDATE", (employee.employee_id,))
                if fetchone(cur) is not None or employee.version != 0:
                    raise ConcurrentUpdateError(f"Employee {employee.employee_id} was modified concurrently")
                marks = ",".join(["%s"] * (len(_EMPLOYEE_FIELDS) + 2))
                cur.execute(
                    f"INSERT INTO employees({_EMPLOYEE_COLUMNS}) VALUES({marks})",
                    (employee.employee_id,) + values + (1,),
                )

            rows = [day_to_row(employee.employee_id, d) for d in employee.records()]
            if rows:
                marks = ",".join(["%s"] * len(DAY_FIELDS))
                updates = ", ".join(f"{c}=VALUES({c})" for c in DAY_FIELDS[2:])
                cur.executemany(
                    f"INSERT INTO attendance_days({_DAY_COLUMNS}) VALUES({marks}) ON DUPLICATE KEY UPDATE {updates}",
                    rows,
                )

    @staticmethod
    def _employee_params(employee: Employee) -> tuple:
        salary = employee.salary
        shift = employee.shift_timing
        return (
            employee.employee_code,
            employee.name,
            employee.role,
            employee.department,
            1 if employee.is_active else 0,
            shift.start_time if shift else None,
            shift.end_time if shift else None,
            salary.base if salary else None,
            salary.overtime_rate_per_hour if salary else None,
            salary.bonus if salary else 0,
            salary.deductions if salary else 0,
            salary.hourly_rate if salary else None,
        )

    @staticmethod
    def _load_days(cur, employee_ids: list[str]) -> dict[str, dict]:
        by_employee: dict[str, dict] = {str(i): {} for i in employee_ids}
        if not employee_ids:
            return by_employee
        marks = ",".join(["%s"] * len(employee_ids))
        cur.execute(
            f"SELECT {_DAY_COLUMNS} FROM attendance_days WHERE employee_id IN ({marks}) ORDER BY work_date",
            tuple(employee_ids),
        )
        for r in fetchall(cur):
            day = day_from_row(r)
            by_employee[str(r["employee_id"])][day.date] = day
        return by_employee

    @staticmethod
    def _to_employee(r: dict, days: dict[str, dict]) -> Employee:
        shift = None
        if r.get("shift_start") is not None or r.get("shift_end") is not None:
            shift = ShiftTiming(
                start_time=format_mysql_time(r.get("shift_start")),
                end_time=format_mysql_time(r.get("shift_end")),
            )
        return Employee(
            employee_id=str(r["employee_id"]),
            name=r["name"],
            employee_code=r["employee_code"],
            role=r["role"],
            department=r["department"],
            is_active=bool(r["is_active"]),
            shift_timing=shift,
            salary=SalaryConfig(
                base=_decimal(r.get("salary_base")),
                overtime_rate_per_hour=_decimal(r.get("salary_overtime_rate")),
                bonus=_decimal(r.get("salary_bonus")) or Decimal("0"),
                deductions=_decimal(r.get("salary_deductions")) or Decimal("0"),
                hourly_rate=_decimal(r.get("hourly_rate")),
            ),
            attendance=days.get(str(r["employee_id"]), {}),
            version=int(r.get("version") or 0),
        )
