from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.responses import fail, ok
from ..common.validators import optional_int
from ..core.enums import ReportType
from ..core.exceptions import DomainError, ValidationError


def register(app: Flask, container) -> None:
    service = container.analytics_service

    @app.route("/employees/stats/attendance", methods=["GET"], endpoint="attendance_stats")
    def attendance_stats():
        try:
            data = service.attendance_stats(
                month=optional_int(request.args.get("month"), "month"),
                year=optional_int(request.args.get("year"), "year"),
                department=request.args.get("department") or None,
                role=request.args.get("role") or None,
            )
            return ok("Attendance statistics retrieved successfully", data)
        except DomainError as e:
            return fail(e)

    @app.route("/employees/reports/comprehensive", methods=["GET"], endpoint="comprehensive_report")
    def comprehensive_report():
        try:
            start = request.args.get("startDate")
            end = request.args.get("endDate")
            if not start or not end:
                raise ValidationError("Start date and end date are required")
            try:
                report_type = ReportType(request.args.get("reportType", ReportType.SUMMARY.value))
            except ValueError:
                raise ValidationError("reportType must be 'summary' or 'detailed'")
            data = service.comprehensive_report(
                start=parse_iso_date(start),
                end=parse_iso_date(end),
                department=request.args.get("department") or None,
                role=request.args.get("role") or None,
                report_type=report_type,
            )
            return ok("Comprehensive report generated successfully", data)
        except DomainError as e:
            return fail(e)
