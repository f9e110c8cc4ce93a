from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import (
    admin_required,
    current_employee_id,
    current_role,
    date_arg,
    handle_domain_errors,
    json_body,
    login_required,
)
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/early-checkout", methods=["POST"], endpoint="early_checkout_submit")
    @login_required
    @handle_domain_errors
    def early_checkout_submit():
        data = json_body()
        req = container.early_checkout_service.submit(
            employee_id=current_employee_id(),
            reason=data.get("reason"),
            requested_time=data.get("requested_checkout_time"),
            work_date=date_arg(data.get("date"), None),
        )
        return jsonify({"success": True, "request": req.to_dict()}), 201

    @app.route("/api/early-checkout", methods=["GET"], endpoint="early_checkout_mine")
    @login_required
    @handle_domain_errors
    def early_checkout_mine():
        rows = container.early_checkout_service.list_for_employee(current_employee_id())
        return jsonify({"success": True, "requests": [r.to_dict() for r in rows]})

    @app.route("/api/admin/early-checkout", methods=["GET"], endpoint="admin_early_checkout_pending")
    @admin_required
    @handle_domain_errors
    def admin_early_checkout_pending():
        rows = container.early_checkout_service.list_pending(current_role=current_role())
        return jsonify({"success": True, "requests": [r.to_dict() for r in rows]})

    @app.route(
        "/api/admin/early-checkout/<int:request_id>/review",
        methods=["POST"],
        endpoint="admin_early_checkout_review",
    )
    @admin_required
    @handle_domain_errors
    def admin_early_checkout_review(request_id: int):
        data = json_body()
        req = container.early_checkout_service.review(
            current_role=current_role(),
            reviewer_id=int(session["user_id"]),
            request_id=request_id,
            decision=data.get("decision") or "",
            notes=data.get("notes"),
        )
        return jsonify({"success": True, "request": req.to_dict()})
