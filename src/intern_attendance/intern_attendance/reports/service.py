from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from ..attendance.engine import AttendanceStateEngine
from ..attendance.model import AggregateRow, DailyCount
from ..attendance.repository import AttendanceRepository
from ..common.clock import Clock, SystemClock
from ..common.datetime_utils import first_of_month
from ..common.validators import require_at_most, require_date_range, require_positive
from ..core.constants import DEFAULT_REPORT_DAYS, DEFAULT_SIGNUP_LIMIT, MAX_REPORT_DAYS, UNKNOWN_SCHOOL
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..users.model import SessionUser, SubjectProfile
from ..users.repository import ProfileRepository, RoleRepository


@dataclass(frozen=True)
class TodayOverview:
    total_interns: int
    checked_in: int
    checked_out: int
    active: int
    average_duration: str
    records: list[dict]

    def to_dict(self) -> dict:
        return {
            "total_interns": self.total_interns,
            "checked_in": self.checked_in,
            "checked_out": self.checked_out,
            "active": self.active,
            "average_duration": self.average_duration,
            "records": self.records,
        }


@dataclass(frozen=True)
class SchoolCount:
    name: str
    count: int


class AdminStatsService:
    """Read-model behind the admin dashboard.

    Every public method takes the caller's SessionUser and refuses non-admins;
    the store may also filter rows per user, so this is not the only guard.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        profiles: ProfileRepository,
        roles: RoleRepository,
        engine: AttendanceStateEngine,
        *,
        clock: Optional[Clock] = None,
    ):
        self._attendance = attendance
        self._profiles = profiles
        self._roles = roles
        self._engine = engine
        self._clock = clock or SystemClock()

    @staticmethod
    def _require_admin(current: SessionUser) -> None:
        if current.role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

    def _today(self) -> date:
        return self._clock.now().date()

    def today_overview(self, current: SessionUser) -> TodayOverview:
        self._require_admin(current)
        today = self._today()

        records = list(self._attendance.list_between(start_date=today, end_date=today))
        records.sort(key=lambda r: r.check_in_time, reverse=True)
        profiles = self._profiles.get_profiles({r.user_id for r in records})

        rows = []
        for r in records:
            profile = profiles.get(r.user_id) or SubjectProfile.placeholder(r.user_id)
            rows.append(
                {
                    "record_id": r.record_id,
                    "user_id": r.user_id,
                    "full_name": profile.full_name,
                    "email": profile.email,
                    "school": profile.school or UNKNOWN_SCHOOL,
                    "check_in": r.check_in_time.strftime("%H:%M"),
                    "check_out": r.check_out_time.strftime("%H:%M") if r.check_out_time else "-",
                    "state": self._engine.state_of(r).value,
                }
            )

        checked_out = sum(1 for r in records if r.is_completed)
        return TodayOverview(
            total_interns=self._roles.count_with_role(Role.USER),
            checked_in=len(records),
            checked_out=checked_out,
            active=len(records) - checked_out,
            average_duration=str(self._engine.average_duration(records)),
            records=rows,
        )

    def weekly_counts(self, current: SessionUser, *, days: int = DEFAULT_REPORT_DAYS) -> list[DailyCount]:
        self._require_admin(current)
        days = require_at_most(days, MAX_REPORT_DAYS, "days")
        end = self._today()
        start = end - timedelta(days=days - 1)

        records = self._attendance.list_between(start_date=start, end_date=end)
        return self._engine.daily_counts(records, start, end)

    def intern_total_hours(
        self,
        current: SessionUser,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[AggregateRow]:
        self._require_admin(current)
        today = self._today()
        start = start or first_of_month(today)
        end = end or today
        require_date_range(start, end)

        records = self._attendance.list_between(start_date=start, end_date=end, completed_only=True)
        if not records:
            return []

        profiles = self._profiles.get_profiles({r.user_id for r in records})
        return self._engine.aggregate_durations(records, profiles, start, end)

    def school_distribution(self, current: SessionUser) -> list[SchoolCount]:
        self._require_admin(current)
        counts: dict[str, int] = {}
        for p in self._profiles.list_all():
            if not p.school:
                continue
            counts[p.school] = counts.get(p.school, 0) + 1

        out = [SchoolCount(name=name, count=count) for name, count in counts.items()]
        out.sort(key=lambda s: s.count, reverse=True)
        return out

    def recent_signups(self, current: SessionUser, *, limit: int = DEFAULT_SIGNUP_LIMIT) -> list[SubjectProfile]:
        self._require_admin(current)
        return list(self._profiles.list_recent(require_positive(limit, "limit")))
