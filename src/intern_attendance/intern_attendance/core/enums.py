from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role tag carried by the session user."""

    ADMIN = "admin"
    USER = "user"


class AttendanceState(str, Enum):
    """Where a subject's record for one day stands."""

    NO_RECORD = "NO_RECORD"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"


class SessionProgress(str, Enum):
    """Sentinel returned instead of a duration while a session is open."""

    IN_PROGRESS = "In Progress"
