"""Helpers shared by the Flask controllers."""

from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    DomainError,
    LocationDeniedError,
    NotFoundError,
    StateConflictError,
    ValidationError,
)
from ..location.geo import GeoPosition
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify({"success": False, "message": "You do not have permission"}), 403
        return view(*args, **kwargs)

    return wrapper


def current_role() -> Role:
    try:
        return Role(session.get("role"))
    except ValueError:
        return Role.EMPLOYEE


def current_employee_id() -> int:
    employee_id = session.get("employee_id")
    if not employee_id:
        raise AuthorizationError("No employee profile is linked to this account")
    return int(employee_id)


def error_response(exc: DomainError):
    """Map a domain error to a JSON response with the matching HTTP status."""

    body = {"success": False, "error": type(exc).__name__, "message": str(exc)}
    if isinstance(exc, LocationDeniedError):
        body["location"] = exc.check.to_dict()
        return jsonify(body), 403
    if isinstance(exc, StateConflictError):
        return jsonify(body), 409
    if isinstance(exc, NotFoundError):
        return jsonify(body), 404
    if isinstance(exc, AuthorizationError):
        return jsonify(body), 403
    # ValidationError, DataAnomalyError
    return jsonify(body), 400


def handle_domain_errors(view):
    """Turn domain errors into JSON; anything else is logged and becomes a 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return jsonify({"success": False, "message": "Internal error, please try again"}), 500

    return wrapper


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def position_from_request():
    """Optional browser geolocation sent with an attendance action."""

    data = json_body()
    lat = data.get("latitude", data.get("lat"))
    lng = data.get("longitude", data.get("lng"))
    if lat is None or lng is None:
        return None
    try:
        accuracy = data.get("accuracy")
        return GeoPosition(
            latitude=float(lat),
            longitude=float(lng),
            accuracy=float(accuracy) if accuracy is not None else None,
        )
    except (TypeError, ValueError):
        raise ValidationError("Invalid coordinates")


def date_arg(value: str | None, default):
    if not value:
        return default
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError("Invalid date (expected YYYY-MM-DD)")


def int_field(value, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number")
