from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence, Tuple

import mysql.connector

from ..common.datetime_utils import from_utc_naive, to_utc_naive
from ..core.enums import DedupAction
from ..core.exceptions import StoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .dedup import DedupDecision
from .model import AttendanceRecord
from .repository import AttendanceRepository, DecideFn

logger = logging.getLogger(__name__)

_COLUMNS = "record_id, device_id, latitude, longitude, recorded_at_utc, tz_name"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        device_id=r["device_id"],
        latitude=float(r["latitude"]),
        longitude=float(r["longitude"]),
        recorded_at=from_utc_naive(r["recorded_at_utc"]),
        tz_name=r["tz_name"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_device_and_date(self, device_id: str, work_date: date) -> Sequence[AttendanceRecord]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                return self._select_day(cur, device_id, work_date, for_update=False)
        except mysql.connector.Error as e:
            raise StoreError(f"Failed to load records for {device_id}: {e}") from e

    def list_recent_for_device(self, device_id: str, limit: int) -> Sequence[AttendanceRecord]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM attendance_records
                    WHERE device_id=%s
                    ORDER BY work_date DESC, record_id DESC
                    LIMIT %s
                    """,
                    (device_id, int(limit)),
                )
                return [_to_record(r) for r in fetchall(cur)]
        except mysql.connector.Error as e:
            raise StoreError(f"Failed to load history for {device_id}: {e}") from e

    def apply_for_day(
        self, record: AttendanceRecord, decide: DecideFn
    ) -> Tuple[DedupDecision, Optional[AttendanceRecord]]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                # FOR UPDATE takes next-key locks on the (device_id, work_date) index range,
                # so a concurrent check-in for the same device/day waits for this transaction.
                existing = self._select_day(cur, record.device_id, record.work_date, for_update=True)
                decision = decide(existing)

                if decision.action == DedupAction.INSERT:
                    return decision, record.with_id(self._insert(cur, record))
                if decision.action == DedupAction.OVERWRITE_SECOND:
                    self._replace(cur, decision.record_id, record)
                    return decision, record.with_id(decision.record_id)
                return decision, None
        except mysql.connector.Error as e:
            raise StoreError(f"Failed to store record for {record.device_id}: {e}") from e

    def _select_day(self, cur, device_id: str, work_date: date, *, for_update: bool) -> list[AttendanceRecord]:
        lock = " FOR UPDATE" if for_update else ""
        cur.execute(
            f"""
            SELECT {_COLUMNS}
            FROM attendance_records
            WHERE device_id=%s AND work_date=%s
            ORDER BY record_id ASC{lock}
            """,
            (device_id, work_date),
        )
        return [_to_record(r) for r in fetchall(cur)]

    def _insert(self, cur, record: AttendanceRecord) -> int:
        cur.execute(
            """
            INSERT INTO attendance_records(device_id, latitude, longitude, recorded_at_utc, tz_name, work_date)
            VALUES(%s,%s,%s,%s,%s,%s)
            """,
            (
                record.device_id,
                record.latitude,
                record.longitude,
                to_utc_naive(record.recorded_at),
                record.tz_name,
                record.work_date,
            ),
        )
        return int(cur.lastrowid)

    def _replace(self, cur, record_id: int, record: AttendanceRecord) -> None:
        cur.execute(
            """
            UPDATE attendance_records
            SET device_id=%s, latitude=%s, longitude=%s, recorded_at_utc=%s, tz_name=%s, work_date=%s
            WHERE record_id=%s
            """,
            (
                record.device_id,
                record.latitude,
                record.longitude,
                to_utc_naive(record.recorded_at),
                record.tz_name,
                record.work_date,
                int(record_id),
            ),
        )
        if cur.rowcount == 0:
            # Identical values report 0 affected rows, so confirm the row is still there.
            cur.execute("SELECT 1 FROM attendance_records WHERE record_id=%s", (int(record_id),))
            if not cur.fetchone():
                raise StoreError(f"Record {record_id} disappeared before it could be overwritten")
        logger.debug("Overwrote record %s for device %s", record_id, record.device_id)
