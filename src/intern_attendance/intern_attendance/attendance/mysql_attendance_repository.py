from __future__ import annotations

import logging
from datetime import date, datetime, tzinfo
from typing import Any, Dict, Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..common.datetime_utils import from_utc_naive, to_utc_naive
from ..core.exceptions import DuplicateRecordError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_COLUMNS = "record_id, user_id, work_date, check_in_time, check_out_time"


class MySQLAttendanceRepository(AttendanceRepository):
    """MySQL record store.

    With a zone configured, instants are kept as naive UTC in DATETIME columns
    and handed back as aware values in that zone.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, tz: Optional[tzinfo] = None):
        self._conn_factory = conn_factory
        self._tz = tz

    def _to_record(self, r: Dict[str, Any]) -> AttendanceRecord:
        return AttendanceRecord(
            record_id=int(r["record_id"]),
            user_id=int(r["user_id"]),
            work_date=r["work_date"],
            check_in_time=from_utc_naive(r["check_in_time"], self._tz),
            check_out_time=from_utc_naive(r.get("check_out_time"), self._tz),
        )

    def _store_time(self, value: datetime) -> datetime:
        # DATETIME(0) rounds fractions; drop them so the returned record matches the row.
        value = value.replace(microsecond=0)
        return to_utc_naive(value) if self._tz is not None else value

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (user_id, int(limit)),
            )
            return [self._to_record(r) for r in fetchall(cur)]

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND work_date=%s
                """,
                (user_id, work_date),
            )
            r = fetchone(cur)
            return self._to_record(r) if r else None

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE record_id=%s",
                (int(record_id),),
            )
            r = fetchone(cur)
            return self._to_record(r) if r else None

    def list_between(
        self,
        *,
        start_date: date,
        end_date: date,
        completed_only: bool = False,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["work_date BETWEEN %s AND %s"]
        if completed_only:
            clauses.append("check_out_time IS NOT NULL")
        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY work_date ASC, check_in_time ASC
                """,
                (start_date, end_date),
            )
            return [self._to_record(r) for r in fetchall(cur)]

    def create_checkin(self, *, user_id: int, work_date: date, check_in_time: datetime) -> AttendanceRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(user_id, work_date, check_in_time)
                    VALUES(%s,%s,%s)
                    """,
                    (user_id, work_date, self._store_time(check_in_time)),
                )
                record_id = int(cur.lastrowid)
        except IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                logger.info("Rejected duplicate check-in user_id=%s work_date=%s", user_id, work_date)
                raise DuplicateRecordError("You have already checked in today") from e
            raise

        return AttendanceRecord(
            record_id=record_id,
            user_id=user_id,
            work_date=work_date,
            check_in_time=check_in_time.replace(microsecond=0),
            check_out_time=None,
        )

    def update_checkout(self, *, record_id: int, check_out_time: datetime) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            # Only an open record may be closed; a racing second check-out matches no row.
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s
                WHERE record_id=%s AND check_out_time IS NULL
                """,
                (self._store_time(check_out_time), int(record_id)),
            )
            if cur.rowcount <= 0:
                return None

        return self.get_by_id(record_id)
