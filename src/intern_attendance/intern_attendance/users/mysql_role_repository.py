from __future__ import annotations

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .repository import RoleRepository


class MySQLRoleRepository(RoleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_role(self, user_id: int) -> Role:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT role FROM user_roles WHERE user_id=%s", (int(user_id),))
            roles = {Role(r["role"]) for r in fetchall(cur)}
        # A user may hold both rows; admin wins.
        if Role.ADMIN in roles:
            return Role.ADMIN
        return Role.USER

    def count_with_role(self, role: Role) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM user_roles WHERE role=%s", (role.value,))
            rows = fetchall(cur)
            return int(rows[0]["n"]) if rows else 0
