from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.engine import AttendanceStateEngine
from .attendance.model import TimeWindow
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.clock import Clock, SystemClock
from .common.datetime_utils import load_timezone
from .core.constants import DEFAULT_CHECK_IN_WINDOW, DEFAULT_CHECK_OUT_WINDOW
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import AdminStatsService
from .users.mysql_profile_repository import MySQLProfileRepository
from .users.mysql_role_repository import MySQLRoleRepository
from .users.repository import ProfileRepository, RoleRepository
from .users.service import SessionService


@dataclass(frozen=True)
class Container:
    clock: Clock
    engine: AttendanceStateEngine

    attendance_repo: AttendanceRepository
    profiles_repo: ProfileRepository
    roles_repo: RoleRepository

    attendance_service: AttendanceService
    session_service: SessionService
    admin_stats_service: AdminStatsService

    conn: Optional[DatabaseConnection] = None


def build_engine(settings: Any) -> AttendanceStateEngine:
    return AttendanceStateEngine(
        check_in_window=TimeWindow.parse(getattr(settings, "CHECK_IN_WINDOW", DEFAULT_CHECK_IN_WINDOW)),
        check_out_window=TimeWindow.parse(getattr(settings, "CHECK_OUT_WINDOW", DEFAULT_CHECK_OUT_WINDOW)),
    )


def build_services(
    *,
    attendance_repo: AttendanceRepository,
    profiles_repo: ProfileRepository,
    roles_repo: RoleRepository,
    engine: AttendanceStateEngine,
    clock: Clock,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over the given repositories (MySQL in the app, fakes in tests)."""
    return Container(
        clock=clock,
        engine=engine,
        attendance_repo=attendance_repo,
        profiles_repo=profiles_repo,
        roles_repo=roles_repo,
        attendance_service=AttendanceService(attendance_repo, engine, clock=clock),
        session_service=SessionService(profiles_repo, roles_repo),
        admin_stats_service=AdminStatsService(attendance_repo, profiles_repo, roles_repo, engine, clock=clock),
        conn=conn,
    )


def build_container(*, settings: Any) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(getattr(settings, "DB_CONFIG")))
    tz = load_timezone(getattr(settings, "APP_TIMEZONE", ""))

    return build_services(
        attendance_repo=MySQLAttendanceRepository(conn, tz=tz),
        profiles_repo=MySQLProfileRepository(conn),
        roles_repo=MySQLRoleRepository(conn),
        engine=build_engine(settings),
        clock=SystemClock(tz),
        conn=conn,
    )
