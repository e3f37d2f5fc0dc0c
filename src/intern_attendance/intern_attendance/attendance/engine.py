from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Callable, Iterable, Mapping, Optional, Union

from ..common.datetime_utils import iter_dates
from ..core.constants import UNKNOWN_SCHOOL
from ..core.enums import AttendanceState, SessionProgress
from ..core.exceptions import InvalidIntervalError
from ..users.model import SubjectProfile
from .model import AggregateRow, AttendanceRecord, DailyCount, Duration, TimeWindow

IN_PROGRESS = SessionProgress.IN_PROGRESS

DurationResult = Union[Duration, SessionProgress]
ProfileLookup = Union[Mapping[int, SubjectProfile], Callable[[int], Optional[SubjectProfile]]]


def elapsed(check_in: datetime, check_out: datetime) -> timedelta:
    """Real time between two instants.

    Aware values are compared in UTC; subtracting two datetimes that share a
    tzinfo would otherwise ignore a DST offset change between them.
    """
    if check_in.tzinfo is not None and check_out.tzinfo is not None:
        check_in = check_in.astimezone(timezone.utc)
        check_out = check_out.astimezone(timezone.utc)
    delta = check_out - check_in
    if delta < timedelta(0):
        raise InvalidIntervalError(
            f"Check-out {check_out.isoformat()} is earlier than check-in {check_in.isoformat()}"
        )
    return delta


def to_duration(delta: timedelta) -> Duration:
    # Floor to whole minutes; seconds and microseconds are dropped, never rounded up.
    return Duration.from_total_minutes(int(delta // timedelta(minutes=1)))


def format_duration(result: DurationResult) -> str:
    if isinstance(result, SessionProgress):
        return result.value
    return str(result)


def _resolve_profile(profiles: ProfileLookup, user_id: int) -> SubjectProfile:
    if callable(profiles):
        profile = profiles(user_id)
    else:
        profile = profiles.get(user_id)
    return profile or SubjectProfile.placeholder(user_id)


class AttendanceStateEngine:
    """Rules for one check-in and one check-out per subject per day.

    Pure logic: every method works on the values passed in and never touches
    the clock or the store, so it is safe to share between threads.
    """

    def __init__(self, *, check_in_window: TimeWindow, check_out_window: TimeWindow):
        self.check_in_window = check_in_window
        self.check_out_window = check_out_window

    def state_of(self, record: Optional[AttendanceRecord]) -> AttendanceState:
        if record is None:
            return AttendanceState.NO_RECORD
        if not record.is_completed:
            return AttendanceState.CHECKED_IN
        return AttendanceState.CHECKED_OUT

    def can_check_in(
        self,
        now: datetime,
        existing: Optional[AttendanceRecord],
        window: Optional[TimeWindow] = None,
    ) -> bool:
        window = window or self.check_in_window
        return existing is None and window.contains(now)

    def can_check_out(
        self,
        now: datetime,
        existing: Optional[AttendanceRecord],
        window: Optional[TimeWindow] = None,
    ) -> bool:
        window = window or self.check_out_window
        if existing is None or existing.is_completed:
            return False
        return window.contains(now)

    def compute_duration(self, check_in: datetime, check_out: Optional[datetime]) -> DurationResult:
        if check_out is None:
            return IN_PROGRESS
        return to_duration(elapsed(check_in, check_out))

    def average_duration(self, records: Iterable[AttendanceRecord]) -> Duration:
        total = timedelta(0)
        completed = 0
        for r in records:
            if not r.is_completed:
                continue
            total += elapsed(r.check_in_time, r.check_out_time)
            completed += 1
        if not completed:
            return Duration(hours=0, minutes=0)
        return to_duration(total / completed)

    def aggregate_durations(
        self,
        records: Iterable[AttendanceRecord],
        profiles: ProfileLookup,
        from_date: date,
        to_date: date,
    ) -> list[AggregateRow]:
        totals: dict[int, timedelta] = {}
        for r in records:
            if not r.is_completed or not (from_date <= r.work_date <= to_date):
                continue
            totals[r.user_id] = totals.get(r.user_id, timedelta(0)) + elapsed(r.check_in_time, r.check_out_time)

        rows = []
        for user_id, total in totals.items():
            profile = _resolve_profile(profiles, user_id)
            rows.append(
                AggregateRow(
                    user_id=user_id,
                    full_name=profile.full_name,
                    email=profile.email,
                    school=profile.school or UNKNOWN_SCHOOL,
                    total=to_duration(total),
                )
            )

        # Whole hours only; equal hours keep input order (sort is stable).
        rows.sort(key=lambda row: row.total.hours, reverse=True)
        return rows

    def daily_counts(self, records: Iterable[AttendanceRecord], start: date, end: date) -> list[DailyCount]:
        check_ins: dict[date, int] = {}
        check_outs: dict[date, int] = {}
        for r in records:
            check_ins[r.work_date] = check_ins.get(r.work_date, 0) + 1
            if r.is_completed:
                check_outs[r.work_date] = check_outs.get(r.work_date, 0) + 1

        return [
            DailyCount(work_date=d, check_ins=check_ins.get(d, 0), check_outs=check_outs.get(d, 0))
            for d in iter_dates(start, end)
        ]
