from __future__ import annotations

from .connection import DatabaseConnection
from .mysql_base import db_cursor

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS employees (
        employee_id VARCHAR(64) PRIMARY KEY,
        employee_code VARCHAR(64) NOT NULL UNIQUE,
        name VARCHAR(200) NOT NULL,
        role VARCHAR(100) NOT NULL,
        department VARCHAR(100) NOT NULL,
        is_active TINYINT(1) NOT NULL DEFAULT 1,
        shift_start TIME NULL,
        shift_end TIME NULL,
        salary_base DECIMAL(14, 2) NULL,
        salary_overtime_rate DECIMAL(14, 2) NULL,
        salary_bonus DECIMAL(14, 2) NOT NULL DEFAULT 0,
        salary_deductions DECIMAL(14, 2) NOT NULL DEFAULT 0,
        hourly_rate DECIMAL(14, 2) NULL,
        version INT NOT NULL DEFAULT 0
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS attendance_days (
        employee_id VARCHAR(64) NOT NULL,
        work_date DATE NOT NULL,
        login_time DATETIME NULL,
        logout_time DATETIME NULL,
        is_present TINYINT(1) NOT NULL DEFAULT 0,
        status VARCHAR(20) NOT NULL,
        late_minutes INT NOT NULL DEFAULT 0,
        early_leave_minutes INT NULL,
        work_location VARCHAR(100) NOT NULL DEFAULT '',
        check_in_location JSON NULL,
        check_out_location JSON NULL,
        breaks JSON NOT NULL,
        total_break_time INT NOT NULL DEFAULT 0,
        hours_worked DOUBLE NULL,
        overtime_hours DOUBLE NULL,
        PRIMARY KEY (employee_id, work_date),
        CONSTRAINT fk_attendance_employee FOREIGN KEY (employee_id) REFERENCES employees(employee_id)
    )
    """,
)


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection) -> None:
    """Create the tables if missing (idempotent)."""
    ensure_database_exists(conn_factory)
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        for stmt in SCHEMA:
            cur.execute(stmt)
