from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from attendance_payroll.attendance.model import AttendanceDay, BreakInterval, GeoPoint
from attendance_payroll.core.enums import AttendanceStatus, BreakType
from attendance_payroll.core.exceptions import ConcurrentUpdateError
from attendance_payroll.employees.mysql_employee_repository import MySQLEmployeeRepository


def _columns(sql: str) -> list[str]:
    inner = sql[sql.index("(") + 1 : sql.index(")")]
    return [c.strip() for c in inner.split(",")]


class FakeTables:
    """Just enough of the two tables for the repository's statements."""

    def __init__(self):
        self.employees: dict[str, dict] = {}
        self.days: dict[tuple, dict] = {}

    def execute(self, sql: str, params: tuple) -> tuple[int, list[dict]]:
        sql = " ".join(sql.split())
        if sql.startswith("UPDATE employees SET"):
            assignments = sql[len("UPDATE employees SET ") : sql.index(" WHERE")].split(", ")
            fields = [a.split("=")[0] for a in assignments if a.endswith("=%s")]
            employee_id, version = params[-2], params[-1]
            row = self.employees.get(employee_id)
            if row is None or row["version"] != version:
                return 0, []
            row.update(zip(fields, params))
            row["version"] += 1
            return 1, []
        if sql.startswith("SELECT version FROM employees"):
            row = self.employees.get(params[0])
            return 0, [{"version": row["version"]}] if row else []
        if sql.startswith("INSERT INTO employees"):
            row = dict(zip(_columns(sql), params))
            self.employees[row["employee_id"]] = row
            return 1, []
        if sql.startswith("SELECT") and "FROM employees WHERE employee_id=%s" in sql:
            row = self.employees.get(params[0])
            return 0, [dict(row)] if row else []
        if sql.startswith("SELECT") and "FROM employees WHERE is_active=1" in sql:
            rows = [dict(r) for r in self.employees.values() if r["is_active"]]
            return 0, sorted(rows, key=lambda r: r["employee_code"])
        if sql.startswith("SELECT") and "FROM attendance_days" in sql:
            rows = [dict(r) for r in self.days.values() if r["employee_id"] in params]
            return 0, sorted(rows, key=lambda r: r["work_date"])
        raise AssertionError(f"unexpected statement: {sql}")

    def executemany(self, sql: str, rows: list[tuple]) -> None:
        cols = _columns(sql)
        for params in rows:
            row = dict(zip(cols, params))
            self.days[(row["employee_id"], row["work_date"])] = row


class FakeCursor:
    def __init__(self, tables: FakeTables):
        self._tables = tables
        self._result: list[dict] = []
        self.rowcount = -1

    def execute(self, sql, params=()):
        self.rowcount, self._result = self._tables.execute(sql, tuple(params))

    def executemany(self, sql, rows):
        self._tables.executemany(" ".join(sql.split()), list(rows))

    def fetchone(self):
        return self._result[0] if self._result else None

    def fetchall(self):
        return list(self._result)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, tables: FakeTables, log: list[str]):
        self._tables = tables
        self._log = log

    def cursor(self, dictionary=False):
        return FakeCursor(self._tables)

    def commit(self):
        self._log.append("commit")

    def rollback(self):
        self._log.append("rollback")

    def close(self):
        pass


class FakeConnectionFactory:
    def __init__(self):
        self.tables = FakeTables()
        self.log: list[str] = []

    def connect(self, *, with_database: bool = True):
        return FakeConnection(self.tables, self.log)


def _worked_day() -> AttendanceDay:
    d = date(2026, 10, 14)
    return AttendanceDay(
        date=d,
        login_time=datetime(2026, 10, 14, 9, 20),
        logout_time=datetime(2026, 10, 14, 17, 0),
        is_present=True,
        status=AttendanceStatus.EARLY_LEAVE,
        late_minutes=20,
        early_leave_minutes=60,
        work_location="kitchen",
        check_in_location=GeoPoint(12.97, 77.59, "Gate 2"),
        check_out_location=None,
        breaks=(
            BreakInterval(
                type=BreakType.LUNCH,
                start_time=datetime(2026, 10, 14, 13, 0),
                end_time=datetime(2026, 10, 14, 13, 30),
                duration_minutes=30,
            ),
        ),
        total_break_minutes=30,
        hours_worked=7.17,
        overtime_hours=0.0,
    )


def test_saved_employee_loads_back_equal(make_employee):
    factory = FakeConnectionFactory()
    repo = MySQLEmployeeRepository(factory)
    day = _worked_day()

    repo.save(make_employee("e1").with_day(day))
    loaded = repo.get_by_id("e1")

    assert loaded.day(day.date) == day
    assert loaded.shift_timing.start_time == "09:00"
    assert loaded.salary.base == Decimal("30000")
    assert loaded.salary.overtime_rate_per_hour == Decimal("200")
    assert loaded.version == 1
    assert factory.log[-1] == "commit"


def test_day_columns_use_json_for_breaks_and_locations(make_employee):
    factory = FakeConnectionFactory()
    MySQLEmployeeRepository(factory).save(make_employee("e1").with_day(_worked_day()))

    row = factory.tables.days[("e1", date(2026, 10, 14))]
    assert row["status"] == "early-leave"
    assert row["is_present"] == 1
    assert row["check_out_location"] is None
    assert '"address": "Gate 2"' in row["check_in_location"]
    assert '"duration": 30' in row["breaks"]
    assert row["total_break_time"] == 30


def test_second_save_updates_in_place(make_employee):
    repo = MySQLEmployeeRepository(FakeConnectionFactory())
    repo.save(make_employee("e1"))

    loaded = repo.get_by_id("e1")
    repo.save(loaded.with_day(_worked_day()))

    again = repo.get_by_id("e1")
    assert again.version == 2
    assert list(again.attendance) == [date(2026, 10, 14)]


def test_stale_save_from_another_worker_is_rejected(make_employee):
    factory = FakeConnectionFactory()
    repo = MySQLEmployeeRepository(factory)
    repo.save(make_employee("e1"))

    first = repo.get_by_id("e1")
    second = repo.get_by_id("e1")
    repo.save(first.with_day(_worked_day()))

    late_day = AttendanceDay(
        date=date(2026, 10, 14),
        login_time=datetime(2026, 10, 14, 9, 21),
        is_present=True,
        status=AttendanceStatus.LATE,
        late_minutes=21,
    )
    with pytest.raises(ConcurrentUpdateError):
        repo.save(second.with_day(late_day))

    assert factory.log[-1] == "rollback"
    assert repo.get_by_id("e1").day(date(2026, 10, 14)) == _worked_day()


def test_list_active_attaches_each_employees_days(make_employee):
    repo = MySQLEmployeeRepository(FakeConnectionFactory())
    repo.save(make_employee("e2", name="Ben Ortiz"))
    repo.save(make_employee("e1").with_day(_worked_day()))
    repo.save(make_employee("e3", is_active=False))

    active = repo.list_active()

    assert [e.employee_id for e in active] == ["e1", "e2"]
    assert len(active[0].attendance) == 1
    assert active[1].attendance == {}
