from __future__ import annotations

import logging

from flask import Flask, current_app, g, jsonify

from ..common.http import domain_error_response, int_arg, json_error, make_guards, optional_date_arg
from ..core.constants import DEFAULT_SIGNUP_LIMIT
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    _, admin_required = make_guards(container)
    stats = container.admin_stats_service

    def _run(build, what: str):
        try:
            return jsonify(build())
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Failed to build %s", what)
            return json_error(f"System error while loading {what}", 500)

    @app.route("/api/admin/overview", methods=["GET"], endpoint="admin_overview")
    @admin_required
    def admin_overview():
        return _run(lambda: stats.today_overview(g.current_user).to_dict(), "today's overview")

    @app.route("/api/admin/weekly", methods=["GET"], endpoint="admin_weekly")
    @admin_required
    def admin_weekly():
        def build():
            days = int_arg("days", current_app.config["REPORT_DAYS"])
            return {"days": [d.to_dict() for d in stats.weekly_counts(g.current_user, days=days)]}

        return _run(build, "weekly statistics")

    @app.route("/api/admin/total-hours", methods=["GET"], endpoint="admin_total_hours")
    @admin_required
    def admin_total_hours():
        def build():
            rows = stats.intern_total_hours(
                g.current_user,
                start=optional_date_arg("start"),
                end=optional_date_arg("end"),
            )
            return {"interns": [r.to_dict() for r in rows]}

        return _run(build, "intern total hours")

    @app.route("/api/admin/schools", methods=["GET"], endpoint="admin_schools")
    @admin_required
    def admin_schools():
        def build():
            return {"schools": [{"name": s.name, "count": s.count} for s in stats.school_distribution(g.current_user)]}

        return _run(build, "school distribution")

    @app.route("/api/admin/signups", methods=["GET"], endpoint="admin_signups")
    @admin_required
    def admin_signups():
        def build():
            limit = int_arg("limit", DEFAULT_SIGNUP_LIMIT)
            return {"profiles": [p.to_dict() for p in stats.recent_signups(g.current_user, limit=limit)]}

        return _run(build, "recent sign-ups")
