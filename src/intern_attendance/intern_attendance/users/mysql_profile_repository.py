from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SubjectProfile
from .repository import ProfileRepository

_COLUMNS = "user_id, full_name, email, school, created_at"


def _to_profile(row: Dict[str, Any]) -> SubjectProfile:
    return SubjectProfile(
        user_id=int(row["user_id"]),
        full_name=row.get("full_name") or "",
        email=row.get("email") or "",
        school=row.get("school"),
        created_at=row.get("created_at"),
    )


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[SubjectProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def get_profiles(self, user_ids: Iterable[int]) -> dict[int, SubjectProfile]:
        ids = sorted({int(i) for i in user_ids})
        if not ids:
            return {}

        placeholders = ", ".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM profiles WHERE user_id IN ({placeholders})",
                tuple(ids),
            )
            profiles = [_to_profile(r) for r in fetchall(cur)]
        return {p.user_id: p for p in profiles}

    def list_all(self) -> Sequence[SubjectProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles ORDER BY created_at DESC")
            return [_to_profile(r) for r in fetchall(cur)]

    def list_recent(self, limit: int) -> Sequence[SubjectProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM profiles ORDER BY created_at DESC LIMIT %s",
                (int(limit),),
            )
            return [_to_profile(r) for r in fetchall(cur)]
