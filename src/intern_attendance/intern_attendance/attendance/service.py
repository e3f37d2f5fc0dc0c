from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..common.clock import Clock, SystemClock
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceState
from ..core.exceptions import (
    DuplicateRecordError,
    InvalidIntervalError,
    OutsideWindowError,
    RecordNotFoundError,
    ValidationError,
)
from .engine import AttendanceStateEngine, elapsed, format_duration
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def record_to_dict(r: AttendanceRecord) -> dict:
    return {
        "record_id": r.record_id,
        "user_id": r.user_id,
        "date": r.work_date.isoformat(),
        "check_in": r.check_in_time.isoformat(),
        "check_out": r.check_out_time.isoformat() if r.check_out_time else None,
    }


@dataclass(frozen=True)
class TodayView:
    """What the dashboard needs to render today's card."""

    record: Optional[AttendanceRecord]
    state: AttendanceState
    can_check_in: bool
    can_check_out: bool
    check_in_window: str
    check_out_window: str

    def to_dict(self) -> dict:
        return {
            "record": record_to_dict(self.record) if self.record else None,
            "state": self.state.value,
            "can_check_in": self.can_check_in,
            "can_check_out": self.can_check_out,
            "check_in_window": self.check_in_window,
            "check_out_window": self.check_out_window,
        }


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        engine: AttendanceStateEngine,
        *,
        clock: Optional[Clock] = None,
    ):
        self._attendance = attendance
        self._engine = engine
        self._clock = clock or SystemClock()

    def _now(self) -> datetime:
        # DATETIME columns keep whole seconds; compare and store at that precision.
        return self._clock.now().replace(microsecond=0)

    def check_in(self, user_id: int) -> AttendanceRecord:
        now = self._now()
        today = now.date()

        existing = self._attendance.get_for_user_and_date(user_id, today)
        if existing:
            raise DuplicateRecordError("You have already checked in today")

        if not self._engine.can_check_in(now, existing):
            logger.info("Check-in outside window user_id=%s at=%s", user_id, now.isoformat())
            raise OutsideWindowError(f"Check-in is only allowed between {self._engine.check_in_window}")

        # A concurrent insert for the same day is rejected by the store's unique key.
        record = self._attendance.create_checkin(user_id=user_id, work_date=today, check_in_time=now)
        logger.info("Checked in user_id=%s record_id=%s", user_id, record.record_id)
        return record

    def check_out(self, user_id: int) -> AttendanceRecord:
        now = self._now()
        today = now.date()

        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record:
            raise RecordNotFoundError("You have not checked in today")
        if record.is_completed:
            raise ValidationError("You have already checked out today")

        if not self._engine.can_check_out(now, record):
            logger.info("Check-out outside window user_id=%s at=%s", user_id, now.isoformat())
            raise OutsideWindowError(f"Check-out is only allowed between {self._engine.check_out_window}")

        # Overlapping windows or a clock step back can put now at or before the check-in.
        if elapsed(record.check_in_time, now) <= timedelta(0):
            raise InvalidIntervalError("Check-out must be later than check-in")

        updated = self._attendance.update_checkout(record_id=record.record_id, check_out_time=now)
        if updated is None:
            raise ValidationError("You have already checked out today")
        logger.info("Checked out user_id=%s record_id=%s", user_id, updated.record_id)
        return updated

    def get_today(self, user_id: int) -> TodayView:
        now = self._clock.now()
        record = self._attendance.get_for_user_and_date(user_id, now.date())
        return TodayView(
            record=record,
            state=self._engine.state_of(record),
            can_check_in=self._engine.can_check_in(now, record),
            can_check_out=self._engine.can_check_out(now, record),
            check_in_window=str(self._engine.check_in_window),
            check_out_window=str(self._engine.check_out_window),
        )

    def get_history_ui(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict]:
        rows = self._attendance.get_recent_for_user(user_id, limit)
        return [self._to_ui(r) for r in rows]

    def _to_ui(self, r: AttendanceRecord) -> dict:
        return {
            "record_id": r.record_id,
            "date": r.work_date.strftime("%Y-%m-%d"),
            "check_in": r.check_in_time.strftime("%H:%M"),
            "check_out": r.check_out_time.strftime("%H:%M") if r.check_out_time else "-",
            "duration": format_duration(self._engine.compute_duration(r.check_in_time, r.check_out_time)),
        }
