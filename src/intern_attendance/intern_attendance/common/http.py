from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import g, jsonify, request, session

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    DuplicateRecordError,
    OutsideWindowError,
    RecordNotFoundError,
    ValidationError,
)
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

# Most specific first: InvalidIntervalError is a ValidationError.
_STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (RecordNotFoundError, 404),
    (DuplicateRecordError, 409),
    (OutsideWindowError, 422),
    (ValidationError, 400),
    (DomainError, 400),
)


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def domain_error_response(e: DomainError):
    for kind, status in _STATUS_BY_ERROR:
        if isinstance(e, kind):
            return json_error(str(e), status)
    return json_error(str(e), 400)


def optional_date_arg(name: str) -> Optional[date]:
    value = request.args.get(name)
    return parse_iso_date(value) if value else None


def int_arg(name: str, default: int) -> int:
    value = request.args.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ValidationError(f"{name} must be an integer") from e


def make_guards(container):
    """Build view decorators bound to the container's session service."""

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return json_error("Please sign in to continue", 401)
            try:
                g.current_user = container.session_service.load(session["user_id"])
            except DomainError as e:
                return domain_error_response(e)
            except Exception:
                logger.exception("Failed to load session user")
                return json_error("System error while loading the session", 500)
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @login_required
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not g.current_user.is_admin:
                return json_error("Admin access required", 403)
            return view(*args, **kwargs)

        return wrapper

    return login_required, admin_required
