from __future__ import annotations

import logging

from flask import Flask, current_app, g, jsonify

from ..common.http import domain_error_response, int_arg, json_error, make_guards
from ..common.validators import require_positive
from ..core.exceptions import DomainError
from ..container import Container
from .service import record_to_dict

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    login_required, _ = make_guards(container)

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        try:
            view = container.attendance_service.get_today(g.current_user.user_id)
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Failed to load today's attendance")
            return json_error("System error while loading attendance", 500)
        return jsonify(view.to_dict())

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="checkin")
    @login_required
    def checkin():
        try:
            record = container.attendance_service.check_in(g.current_user.user_id)
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Check-in failed for user_id=%s", g.current_user.user_id)
            return json_error("System error while checking in", 500)
        return jsonify({"success": True, "message": "Your attendance has been recorded!", "record": record_to_dict(record)}), 201

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="checkout")
    @login_required
    def checkout():
        try:
            record = container.attendance_service.check_out(g.current_user.user_id)
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Check-out failed for user_id=%s", g.current_user.user_id)
            return json_error("System error while checking out", 500)
        return jsonify({"success": True, "message": "Have a great rest of your day!", "record": record_to_dict(record)})

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        try:
            limit = require_positive(int_arg("limit", current_app.config["HISTORY_LIMIT"]), "limit")
            rows = container.attendance_service.get_history_ui(g.current_user.user_id, limit=limit)
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Failed to load attendance history")
            return json_error("System error while loading history", 500)
        return jsonify({"records": rows})
