from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Record store interface.

    Note: the store owns the (user_id, work_date) unique key. ``create_checkin``
    must raise DuplicateRecordError when it is violated.
    """

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_between(
        self,
        *,
        start_date: date,
        end_date: date,
        completed_only: bool = False,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(self, *, user_id: int, work_date: date, check_in_time: datetime) -> AttendanceRecord:
        raise NotImplementedError

    def update_checkout(self, *, record_id: int, check_out_time: datetime) -> Optional[AttendanceRecord]:
        """Set check-out on an open record; None when no open record matched."""

        raise NotImplementedError
