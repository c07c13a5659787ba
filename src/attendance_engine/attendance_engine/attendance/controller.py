from __future__ import annotations

import logging
from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import DomainError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def _error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def _optional_employee_id(value):
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Mã nhân viên không hợp lệ: {value!r}") from None


def _date_range(source) -> tuple[date, date]:
    start = source.get("start")
    end = source.get("end")
    if not start:
        raise ValidationError("Vui lòng nhập ngày bắt đầu")
    start_date = parse_iso_date(start)
    end_date = parse_iso_date(end) if end else start_date
    return start_date, end_date


def register(app: Flask, container: Container) -> None:
    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        return _error(str(e), 400)

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        logger.exception("Request failed: %s", e)
        return _error("Lỗi hệ thống khi xử lý chấm công", 500)

    @app.route("/api/scan", methods=["POST"], endpoint="api_scan")
    def api_scan():
        """Record one badge/face scan; the kind is decided server-side."""
        data = request.get_json(silent=True) or {}
        if "employee_id" not in data:
            return _error("Vui lòng cung cấp employee_id", 400)

        result = container.attendance_processor.process_scan(data["employee_id"])
        return jsonify({"success": True, "data": result.as_dict()})

    @app.route("/api/attendance/<employee_id>/<work_date>", methods=["GET"], endpoint="api_daily_attendance")
    def api_daily_attendance(employee_id: str, work_date: str):
        day = parse_iso_date(work_date)
        records = container.attendance_store.list_events_for_day(
            container.attendance_processor.require_employee_id(employee_id), day
        )
        return jsonify(
            {
                "success": True,
                "data": [
                    {
                        "record_id": r.record_id,
                        "kind": r.kind.value,
                        "clock_time": r.clock_time.isoformat(),
                        "date": r.work_date.isoformat(),
                        "regular_hours": r.regular_hours,
                        "overtime_hours": r.overtime_hours,
                        "is_late": r.is_late,
                        "anomalous": r.anomalous,
                    }
                    for r in records
                ],
            }
        )

    @app.route("/api/summary", methods=["GET"], endpoint="api_summary")
    def api_summary():
        start, end = _date_range(request.args)
        employee_id = _optional_employee_id(request.args.get("employee_id"))
        data = container.summary_service.build_summary(start=start, end=end, employee_id=employee_id)
        return jsonify({"success": True, "rows": data.rows, "summary": data.summary})

    @app.route("/api/validate", methods=["POST"], endpoint="api_validate")
    def api_validate():
        data = request.get_json(silent=True) or {}
        start, end = _date_range(data)
        report = container.validation_service.validate(
            start_date=start,
            end_date=end,
            employee_id=_optional_employee_id(data.get("employee_id")),
            auto_correct=bool(data.get("auto_correct", True)),
        )
        return jsonify({"success": True, "data": report.as_dict()})
