from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request, session

from ..common.web import (
    admin_required,
    current_employee_id,
    current_role,
    date_arg,
    handle_domain_errors,
    int_field,
    json_body,
    login_required,
    position_from_request,
)
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError


def register(app: Flask, container: Container) -> None:
    def _ok(record, message: str, status: int = 200):
        return jsonify({"success": True, "message": message, "record": record.to_dict()}), status

    @app.route("/api/location", methods=["GET", "POST"], endpoint="location_check")
    @login_required
    @handle_domain_errors
    def location_check():
        check = container.location_gate.check_employee(current_employee_id(), position=position_from_request())
        return jsonify({"success": True, "location": check.to_dict()})

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="checkin")
    @login_required
    @handle_domain_errors
    def checkin():
        record = container.attendance_service.check_in(current_employee_id(), position=position_from_request())
        return _ok(record, f"Checked in at {record.in_time.strftime('%H:%M:%S')}", 201)

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="checkout")
    @login_required
    @handle_domain_errors
    def checkout():
        record = container.attendance_service.check_out(current_employee_id(), position=position_from_request())
        return _ok(record, f"Checked out at {record.out_time.strftime('%H:%M:%S')}")

    @app.route("/api/attendance/break/start", methods=["POST"], endpoint="break_start")
    @login_required
    @handle_domain_errors
    def break_start():
        record = container.attendance_service.start_break(current_employee_id(), position=position_from_request())
        return _ok(record, "Break started")

    @app.route("/api/attendance/break/end", methods=["POST"], endpoint="break_end")
    @login_required
    @handle_domain_errors
    def break_end():
        record = container.attendance_service.end_break(current_employee_id(), position=position_from_request())
        return _ok(record, "Break ended")

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    @handle_domain_errors
    def attendance_today():
        data = container.review_service.employee_today(current_employee_id())
        return jsonify({"success": True, **data})

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    @handle_domain_errors
    def attendance_history():
        limit = request.args.get("limit", type=int) or 30
        rows = container.attendance_service.get_recent(current_employee_id(), limit=min(limit, 366))
        return jsonify({"success": True, "rows": [r.to_dict() for r in rows]})

    @app.route("/api/attendance/<int:employee_id>/<date_s>", methods=["GET"], endpoint="attendance_for_date")
    @login_required
    @handle_domain_errors
    def attendance_for_date(employee_id: int, date_s: str):
        if current_role() != Role.ADMIN and employee_id != current_employee_id():
            raise AuthorizationError("You can only view your own attendance")

        record = container.attendance_service.get_for_date(employee_id, date_arg(date_s, None))
        return jsonify({"success": True, "record": record.to_dict() if record else None})

    @app.route("/api/admin/attendance", methods=["GET"], endpoint="admin_attendance")
    @admin_required
    @handle_domain_errors
    def admin_attendance():
        work_date = date_arg(request.args.get("date"), date.today())
        data = container.review_service.admin_day_view(current_role=current_role(), work_date=work_date)
        return jsonify({"success": True, **data})

    @app.route("/api/admin/attendance", methods=["POST"], endpoint="admin_attendance_record")
    @admin_required
    @handle_domain_errors
    def admin_attendance_record():
        data = json_body()
        record = container.attendance_service.admin_record(
            current_role=current_role(),
            employee_id=int_field(data.get("employee_id"), "Employee id"),
            work_date=date_arg(data.get("date"), date.today()),
            status=data.get("status") or "present",
            in_time=data.get("in_time"),
            out_time=data.get("out_time"),
            notes=data.get("notes"),
        )
        app.logger.info("Attendance record %s saved by user %s", record.attendance_id, session.get("user_id"))
        return _ok(record, "Attendance record saved")
