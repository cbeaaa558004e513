from __future__ import annotations

from functools import wraps

from flask import Flask, g, jsonify, request, session

from ..common.validators import optional_datetime, require_date, require_datetime, require_positive_int
from ..core.constants import SESSION_COMPANY_ID, SESSION_NAME, SESSION_ROLE, SESSION_USER_ID
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from ..container import Container
from ..users.model import AuthenticatedUser
from .serializers import break_to_dict, record_to_dict


def _session_identity() -> AuthenticatedUser:
    if SESSION_USER_ID not in session:
        raise AuthenticationError("Authentication required.")
    try:
        role = Role(session.get(SESSION_ROLE))
    except ValueError:
        raise AuthorizationError("Unknown role.")
    company_id = session.get(SESSION_COMPANY_ID)
    return AuthenticatedUser(
        user_id=int(session[SESSION_USER_ID]),
        company_id=int(company_id) if company_id is not None else None,
        role=role,
        name=session.get(SESSION_NAME),
    )


def _json_body() -> dict:
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object.")
    return body


def register(app: Flask, container: Container) -> None:
    records = container.time_record_service
    corrections = container.admin_correction_service

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.current_user = _session_identity()
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = _session_identity()
            if not user.is_admin:
                raise AuthorizationError("Administrator role required.")
            g.current_user = user
            return view(*args, **kwargs)

        return wrapper

    @app.route("/time-records/punch", methods=["POST"], endpoint="punch")
    @login_required
    def punch():
        record = records.punch(g.current_user)
        return jsonify(record_to_dict(record)), 200

    @app.route("/time-records/me", methods=["GET"], endpoint="my_records")
    @login_required
    def my_records():
        rows = records.list_for_user(g.current_user.user_id)
        return jsonify([record_to_dict(r) for r in rows]), 200

    @app.route("/time-records/me/<date_s>", methods=["GET"], endpoint="my_record_by_date")
    @login_required
    def my_record_by_date(date_s: str):
        work_date = require_date(date_s, "date")
        record = records.get_for_user_and_date(g.current_user.user_id, work_date)
        return jsonify(record_to_dict(record)), 200

    @app.route("/time-records", methods=["GET"], endpoint="company_records")
    @admin_required
    def company_records():
        rows = records.list_for_company(g.current_user)
        return jsonify([record_to_dict(r, admin_view=True) for r in rows]), 200

    @app.route("/time-records/<int:record_id>", methods=["GET"], endpoint="company_record")
    @admin_required
    def company_record(record_id: int):
        record = records.get_in_company(g.current_user, record_id)
        return jsonify(record_to_dict(record, admin_view=True)), 200

    @app.route("/time-records", methods=["POST"], endpoint="admin_create_record")
    @admin_required
    def admin_create_record():
        body = _json_body()
        record = corrections.create_record(
            g.current_user,
            user_id=require_positive_int(body.get("userId"), "userId"),
            clock_in=require_datetime(body.get("clockIn"), "clockIn"),
            clock_out=optional_datetime(body.get("clockOut"), "clockOut"),
        )
        return jsonify(record_to_dict(record, admin_view=True)), 201

    @app.route("/time-records/<int:record_id>/clock-out", methods=["PATCH"], endpoint="admin_set_clock_out")
    @admin_required
    def admin_set_clock_out(record_id: int):
        body = _json_body()
        record = corrections.set_clock_out(
            g.current_user,
            record_id,
            clock_out=require_datetime(body.get("clockOut"), "clockOut"),
        )
        return jsonify(record_to_dict(record, admin_view=True)), 200

    @app.route("/time-records/<int:record_id>/breaks", methods=["POST"], endpoint="admin_add_break")
    @admin_required
    def admin_add_break(record_id: int):
        body = _json_body()
        brk = corrections.add_break(
            g.current_user,
            record_id,
            started_at=require_datetime(body.get("startedAt"), "startedAt"),
            ended_at=optional_datetime(body.get("endedAt"), "endedAt"),
        )
        return jsonify(break_to_dict(brk)), 201

    @app.route(
        "/time-records/<int:record_id>/breaks/<int:break_id>",
        methods=["PATCH"],
        endpoint="admin_edit_break",
    )
    @admin_required
    def admin_edit_break(record_id: int, break_id: int):
        body = _json_body()
        brk = corrections.edit_break(
            g.current_user,
            record_id,
            break_id,
            started_at=optional_datetime(body.get("startedAt"), "startedAt"),
            ended_at=optional_datetime(body.get("endedAt"), "endedAt"),
        )
        return jsonify(break_to_dict(brk)), 200
