"""Wire shape of an attendance day shared with storage and API collaborators."""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..core.enums import AttendanceStatus, BreakType
from ..core.exceptions import ValidationError
from .model import AttendanceDay, BreakInterval, GeoPoint


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _parse_dt(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        raise ValidationError(f"Invalid timestamp: {value!r}")


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return _parse_dt(value).date()


def geo_to_wire(point: Optional[GeoPoint]) -> Optional[dict]:
    if point is None:
        return None
    return {"latitude": point.latitude, "longitude": point.longitude, "address": point.address}


def geo_from_wire(data: Optional[Mapping[str, Any]]) -> Optional[GeoPoint]:
    if not data:
        return None
    return GeoPoint(
        latitude=float(data["latitude"]),
        longitude=float(data["longitude"]),
        address=data.get("address") or "",
    )


def break_to_wire(b: BreakInterval) -> dict:
    return {
        "startTime": _iso(b.start_time),
        "endTime": _iso(b.end_time),
        "duration": b.duration_minutes,
        "type": b.type.value,
    }


def break_from_wire(data: Mapping[str, Any]) -> BreakInterval:
    return BreakInterval(
        type=BreakType(data.get("type") or BreakType.OTHER.value),
        start_time=_parse_dt(data["startTime"]),
        end_time=_parse_dt(data.get("endTime")),
        duration_minutes=data.get("duration"),
    )


def day_to_wire(day: AttendanceDay) -> dict:
    return {
        "date": day.date.isoformat(),
        "loginTime": _iso(day.login_time),
        "logoutTime": _iso(day.logout_time),
        "isPresent": day.is_present,
        "status": day.status.value,
        "lateMinutes": day.late_minutes,
        "earlyLeaveMinutes": day.early_leave_minutes,
        "workLocation": day.work_location,
        "checkInLocation": geo_to_wire(day.check_in_location),
        "checkOutLocation": geo_to_wire(day.check_out_location),
        "breaks": [break_to_wire(b) for b in day.breaks],
        "totalBreakTime": day.total_break_minutes,
        "hoursWorked": day.hours_worked,
        "overtimeHours": day.overtime_hours,
    }


def day_from_wire(data: Mapping[str, Any]) -> AttendanceDay:
    return AttendanceDay(
        date=_parse_date(data["date"]),
        login_time=_parse_dt(data.get("loginTime")),
        logout_time=_parse_dt(data.get("logoutTime")),
        is_present=bool(data.get("isPresent", False)),
        status=AttendanceStatus(data.get("status") or AttendanceStatus.ABSENT.value),
        late_minutes=int(data.get("lateMinutes") or 0),
        early_leave_minutes=data.get("earlyLeaveMinutes"),
        work_location=data.get("workLocation") or "",
        check_in_location=geo_from_wire(data.get("checkInLocation")),
        check_out_location=geo_from_wire(data.get("checkOutLocation")),
        breaks=tuple(break_from_wire(b) for b in data.get("breaks") or ()),
        total_break_minutes=int(data.get("totalBreakTime") or 0),
        hours_worked=data.get("hoursWorked"),
        overtime_hours=data.get("overtimeHours"),
    )
