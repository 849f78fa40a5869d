from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local
from ..common.validators import optional_date, optional_month, require_history_range, require_period
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container

logger = logging.getLogger(__name__)

API_PREFIX = "/api/time-tracking"


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"message": "Authentication required"}), 401
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"message": "Authentication required"}), 401
            if session.get("role") != Role.ADMIN.value:
                return jsonify({"message": "Forbidden"}), 403
            return view(*args, **kwargs)

        return wrapper

    def json_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return jsonify({"message": str(e)}), 400
            except Exception:
                logger.exception("error in %s", request.path)
                return jsonify({"message": "Internal server error"}), 500

        return wrapper

    def _user_id() -> int:
        return int(session["user_id"])

    clock = container.clock_service
    pipeline = container.timesheet_pipeline

    @app.route(f"{API_PREFIX}/status", methods=["GET"], endpoint="time_tracking_status")
    @login_required
    @json_errors
    def status():
        return jsonify({"status": clock.current_status(_user_id()).value})

    @app.route(f"{API_PREFIX}/clock", methods=["POST"], endpoint="time_tracking_clock")
    @login_required
    @json_errors
    def clock_action():
        data = request.get_json(silent=True) or {}
        event = clock.clock(_user_id(), data.get("type"))
        word = "in" if event.is_in else "out"
        return jsonify({"message": f"Successfully clocked {word}", "event": event.to_payload()}), 201

    @app.route(f"{API_PREFIX}/events", methods=["GET"], endpoint="time_tracking_events")
    @login_required
    @json_errors
    def events():
        return jsonify([e.to_payload() for e in clock.events(_user_id())])

    @app.route(f"{API_PREFIX}/events/day", methods=["GET"], endpoint="time_tracking_events_day")
    @login_required
    @json_errors
    def events_day():
        day = optional_date(request.args.get("date"), "date")
        return jsonify([e.to_payload() for e in clock.day_events(_user_id(), day)])

    @app.route(f"{API_PREFIX}/events/user/<int:user_id>", methods=["GET"], endpoint="time_tracking_events_user")
    @admin_required
    @json_errors
    def events_for_user(user_id: int):
        return jsonify([e.to_payload() for e in clock.events(user_id)])

    @app.route(f"{API_PREFIX}/summary", methods=["GET"], endpoint="time_tracking_summary")
    @login_required
    @json_errors
    def summary():
        return jsonify(pipeline.summary(clock.events(_user_id()), now=now_local()).to_dict())

    @app.route(f"{API_PREFIX}/calendar", methods=["GET"], endpoint="time_tracking_calendar")
    @login_required
    @json_errors
    def calendar():
        month = optional_month(request.args.get("month"), "month")
        result = pipeline.attendance_calendar(clock.events(_user_id()), month=month, now=now_local())
        return jsonify(result.to_dict())

    @app.route(f"{API_PREFIX}/analytics", methods=["GET"], endpoint="time_tracking_analytics")
    @login_required
    @json_errors
    def analytics():
        period = require_period(request.args.get("period"))
        anchor = optional_date(request.args.get("anchor"), "anchor")
        buckets = pipeline.analytics(clock.events(_user_id()), period, now=now_local(), anchor=anchor)
        return jsonify({"period": period.value, "days": [b.to_dict() for b in buckets]})

    @app.route(f"{API_PREFIX}/history", methods=["GET"], endpoint="time_tracking_history")
    @login_required
    @json_errors
    def history():
        history_range = require_history_range(request.args.get("range"))
        days = pipeline.clock_history(clock.events(_user_id()), history_range, now=now_local())
        return jsonify({"range": history_range.value, "days": [d.to_dict() for d in days]})
