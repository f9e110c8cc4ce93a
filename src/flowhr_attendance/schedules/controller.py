from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.web import (
    admin_required,
    current_employee_id,
    current_role,
    date_arg,
    handle_domain_errors,
    int_field,
    json_body,
    login_required,
)
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/schedule", methods=["GET"], endpoint="resolve_schedule")
    @login_required
    @handle_domain_errors
    def resolve_schedule():
        employee_id = request.args.get("employee_id", type=int) or current_employee_id()
        if current_role() != Role.ADMIN and employee_id != current_employee_id():
            raise AuthorizationError("You can only view your own schedule")

        work_date = date_arg(request.args.get("date"), date.today())
        schedule = container.schedule_resolver.resolve_for_employee(employee_id, work_date)
        return jsonify(
            {
                "success": True,
                "employee_id": employee_id,
                "date": work_date.strftime("%Y-%m-%d"),
                "schedule": schedule.to_dict() if schedule else None,
            }
        )

    @app.route("/api/admin/duty-schedules", methods=["GET"], endpoint="admin_duty_schedules")
    @admin_required
    @handle_domain_errors
    def admin_duty_schedules():
        include_inactive = request.args.get("include_inactive", "1") != "0"
        templates = container.duty_schedule_service.list_templates(include_inactive=include_inactive)
        return jsonify({"success": True, "templates": [t.to_dict() for t in templates]})

    @app.route("/api/admin/duty-schedules", methods=["POST"], endpoint="admin_duty_schedule_create")
    @admin_required
    @handle_domain_errors
    def admin_duty_schedule_create():
        data = json_body()
        template_id = container.duty_schedule_service.create_template(
            current_role=current_role(),
            name=data.get("name"),
            shift_type=data.get("shift_type") or "regular",
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
            work_days=data.get("work_days") or [],
            is_active=bool(data.get("is_active", True)),
        )
        return jsonify({"success": True, "template_id": template_id}), 201

    @app.route("/api/admin/duty-schedules/<int:template_id>", methods=["PUT"], endpoint="admin_duty_schedule_update")
    @admin_required
    @handle_domain_errors
    def admin_duty_schedule_update(template_id: int):
        data = json_body()
        container.duty_schedule_service.update_template(
            current_role=current_role(),
            template_id=template_id,
            name=data.get("name"),
            shift_type=data.get("shift_type") or "regular",
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
            work_days=data.get("work_days") or [],
        )
        return jsonify({"success": True})

    @app.route(
        "/api/admin/duty-schedules/<int:template_id>/active",
        methods=["POST"],
        endpoint="admin_duty_schedule_active",
    )
    @admin_required
    @handle_domain_errors
    def admin_duty_schedule_active(template_id: int):
        data = json_body()
        container.duty_schedule_service.set_active(
            current_role=current_role(),
            template_id=template_id,
            is_active=bool(data.get("is_active", True)),
        )
        return jsonify({"success": True})

    @app.route(
        "/api/admin/employees/<int:employee_id>/schedule",
        methods=["PUT"],
        endpoint="admin_employee_schedule",
    )
    @admin_required
    @handle_domain_errors
    def admin_employee_schedule(employee_id: int):
        data = json_body()
        template_id = data.get("template_id")
        container.duty_schedule_service.assign(
            current_role=current_role(),
            employee_id=employee_id,
            template_id=int_field(template_id, "Template id") if template_id is not None else None,
            custom_start_time=data.get("custom_work_start_time"),
            custom_end_time=data.get("custom_work_end_time"),
        )
        return jsonify({"success": True})
