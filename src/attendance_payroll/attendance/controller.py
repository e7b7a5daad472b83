from __future__ import annotations

from flask import Flask, request

from ..attendance.serialization import day_to_wire
from ..common.datetime_utils import parse_iso_date
from ..common.responses import fail, ok
from ..common.validators import optional_bool, optional_int, require_mapping
from ..core.constants import DEFAULT_WORK_LOCATION
from ..core.exceptions import DomainError, ValidationError
from ..stats.model import DateRange, MonthWindow
from .service import AttendanceEvent, BulkCheckInResult, parse_location


def _event_data(event: AttendanceEvent) -> dict:
    return {"employeeId": event.employee.employee_code, **day_to_wire(event.record)}


def _bulk_data(result: BulkCheckInResult) -> dict:
    return {
        "successful": [
            {
                "employeeId": e.employee.employee_code,
                "name": e.employee.name,
                "loginTime": e.record.login_time.isoformat(),
                "status": e.record.status.value,
                "lateMinutes": e.record.late_minutes,
            }
            for e in result.successful
        ],
        "failed": [
            {"employeeId": f.employee_id, "name": f.name, "error": f.error, "kind": f.kind}
            for f in result.failed
        ],
        "summary": {
            "total": result.total,
            "successful": len(result.successful),
            "failed": len(result.failed),
            "successRate": result.success_rate,
        },
    }


def register(app: Flask, container) -> None:
    service = container.attendance_service

    def _body() -> dict:
        return dict(require_mapping(request.get_json(silent=True), "body"))

    @app.route("/employees/<employee_id>/checkin", methods=["POST"], endpoint="checkin")
    def checkin(employee_id: str):
        try:
            body = _body()
            event = service.check_in(
                employee_id,
                work_location=body.get("workLocation") or DEFAULT_WORK_LOCATION,
                location=parse_location(body),
                override=optional_bool(body.get("override"), "override"),
            )
            return ok(f"Check-in successful. {event.message}".strip(), _event_data(event))
        except DomainError as e:
            return fail(e)

    @app.route("/employees/<employee_id>/checkout", methods=["POST"], endpoint="checkout")
    def checkout(employee_id: str):
        try:
            event = service.check_out(employee_id, location=parse_location(_body()))
            return ok(event.message, _event_data(event))
        except DomainError as e:
            return fail(e)

    @app.route("/employees/<employee_id>/break/start", methods=["POST"], endpoint="break_start")
    def break_start(employee_id: str):
        try:
            event = service.start_break(employee_id, _body().get("type"))
            return ok(event.message, _event_data(event))
        except DomainError as e:
            return fail(e)

    @app.route("/employees/<employee_id>/break/end", methods=["POST"], endpoint="break_end")
    def break_end(employee_id: str):
        try:
            event = service.end_break(employee_id)
            return ok(event.message, _event_data(event))
        except DomainError as e:
            return fail(e)

    @app.route("/employees/bulk/checkin", methods=["POST"], endpoint="bulk_checkin")
    def bulk_checkin():
        try:
            body = _body()
            result = service.bulk_check_in(
                body.get("employeeIds"),
                work_location=body.get("workLocation") or DEFAULT_WORK_LOCATION,
                location=require_mapping(body.get("location"), "location"),
            )
            return ok("Bulk check-in completed", _bulk_data(result))
        except DomainError as e:
            return fail(e)

    @app.route("/employees/attendance/today", methods=["GET"], endpoint="attendance_today")
    def attendance_today():
        try:
            data = service.today_overview(
                department=request.args.get("department") or None,
                role=request.args.get("role") or None,
            )
            return ok("Today's attendance retrieved successfully", data)
        except DomainError as e:
            return fail(e)

    @app.route("/employees/<employee_id>/attendance", methods=["GET"], endpoint="employee_attendance")
    def employee_attendance(employee_id: str):
        try:
            start = request.args.get("startDate")
            end = request.args.get("endDate")
            if start and end:
                window = DateRange(start=parse_iso_date(start), end=parse_iso_date(end))
            elif start or end:
                raise ValidationError("Both startDate and endDate are required")
            else:
                today = container.clock().date()
                window = MonthWindow(
                    month=optional_int(request.args.get("month"), "month") or today.month,
                    year=optional_int(request.args.get("year"), "year") or today.year,
                )
            report = service.attendance_for(employee_id, window)
            return ok(
                "Attendance retrieved successfully",
                {
                    "employee": {
                        "id": report.employee.employee_id,
                        "name": report.employee.name,
                        "employeeId": report.employee.employee_code,
                        "role": report.employee.role,
                        "department": report.employee.department,
                    },
                    "period": report.period,
                    "attendance": [day_to_wire(r) for r in report.records],
                    **report.stats.to_dict(),
                },
            )
        except DomainError as e:
            return fail(e)
