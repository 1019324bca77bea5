from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

import mysql.connector
import pytest

from fakes import RecordingSink, make_record
from teamtime.attendance.dedup import DedupPolicy
from teamtime.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from teamtime.attendance.service import AttendanceService
from teamtime.core.enums import DedupAction
from teamtime.core.exceptions import StoreError
from teamtime.geofence.model import GeoPoint


def _row(record_id: int, utc: datetime, device_id: str = "abc") -> dict:
    return {
        "record_id": record_id,
        "device_id": device_id,
        "latitude": 26.8973744,
        "longitude": 75.7559854,
        "recorded_at_utc": utc,
        "tz_name": "Asia/Kolkata",
    }


class FakeCursor:
    def __init__(self, rows, *, fail_on=None):
        self.rows = rows
        self.fail_on = fail_on
        self.executed: list[tuple[str, tuple]] = []
        self.lastrowid = 41
        self.rowcount = 1
        self._pending = []

    def execute(self, sql, params=()):
        if self.fail_on and self.fail_on in sql:
            raise mysql.connector.errors.OperationalError("lost connection")
        self.executed.append((" ".join(sql.split()), params))
        self._pending = list(self.rows) if sql.lstrip().upper().startswith("SELECT") else []

    def fetchall(self):
        return self._pending

    def fetchone(self):
        return self._pending[0] if self._pending else None

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, cursor):
        self.connection = FakeConnection(cursor)

    def connect(self):
        return self.connection


def test_first_checkin_inserts_inside_locked_transaction():
    cur = FakeCursor(rows=[])
    factory = FakeConnFactory(cur)
    repo = MySQLAttendanceRepository(factory)
    record = make_record("abc", "2024-01-15 09:00:00")

    decision, stored = repo.apply_for_day(record, DedupPolicy().decide)

    assert decision.action == DedupAction.INSERT
    assert stored.record_id == 41
    select_sql, select_params = cur.executed[0]
    assert select_sql.endswith("FOR UPDATE")
    assert select_params == ("abc", date(2024, 1, 15))
    insert_sql, insert_params = cur.executed[1]
    assert insert_sql.startswith("INSERT INTO attendance_records")
    # 09:00 IST stored as 03:30 UTC
    assert insert_params[3] == datetime(2024, 1, 15, 3, 30)
    assert insert_params[4:] == ("Asia/Kolkata", date(2024, 1, 15))
    assert factory.connection.committed and factory.connection.closed


def test_third_checkin_updates_latest_row():
    cur = FakeCursor(rows=[_row(5, datetime(2024, 1, 15, 3, 30)), _row(9, datetime(2024, 1, 15, 12, 0))])
    repo = MySQLAttendanceRepository(FakeConnFactory(cur))

    decision, stored = repo.apply_for_day(make_record("abc", "2024-01-15 19:00:00"), DedupPolicy().decide)

    assert decision.action == DedupAction.OVERWRITE_SECOND
    assert stored.record_id == 9
    update_sql, update_params = cur.executed[1]
    assert update_sql.startswith("UPDATE attendance_records")
    assert update_params[-1] == 9


def test_reject_writes_nothing():
    rows = [_row(i, datetime(2024, 1, 15, 3, i)) for i in (1, 2, 3)]
    cur = FakeCursor(rows=rows)
    repo = MySQLAttendanceRepository(FakeConnFactory(cur))

    decision, stored = repo.apply_for_day(make_record("abc", "2024-01-15 19:00:00"), DedupPolicy().decide)

    assert decision.action == DedupAction.REJECT
    assert stored is None
    assert len(cur.executed) == 1


def test_driver_error_becomes_store_error_and_rolls_back():
    cur = FakeCursor(rows=[], fail_on="INSERT")
    factory = FakeConnFactory(cur)
    repo = MySQLAttendanceRepository(factory)

    with pytest.raises(StoreError):
        repo.apply_for_day(make_record("abc", "2024-01-15 09:00:00"), DedupPolicy().decide)

    assert factory.connection.rolled_back
    assert not factory.connection.committed


def test_list_for_device_and_date_maps_rows():
    cur = FakeCursor(rows=[_row(5, datetime(2024, 1, 15, 3, 30))])
    repo = MySQLAttendanceRepository(FakeConnFactory(cur))

    records = repo.list_for_device_and_date("abc", date(2024, 1, 15))

    assert len(records) == 1
    assert records[0].record_id == 5
    assert records[0].timestamp == "2024-01-15 09:00:00"
    assert "FOR UPDATE" not in cur.executed[0][0]


def test_checkin_writes_whole_second_utc_time(office_fence):
    cur = FakeCursor(rows=[])
    svc = AttendanceService(
        MySQLAttendanceRepository(FakeConnFactory(cur)), RecordingSink(), office_fence, tz_name="Asia/Kolkata"
    )
    late = datetime(2024, 1, 1, 23, 59, 59, 700000, tzinfo=ZoneInfo("Asia/Kolkata"))

    outcome = svc.check_in("abc", GeoPoint(26.8973744, 75.7559854), now=late)

    _, insert_params = cur.executed[1]
    assert insert_params[3] == datetime(2024, 1, 1, 18, 29, 59)
    assert insert_params[4:] == ("Asia/Kolkata", date(2024, 1, 1))
    assert outcome.record.recorded_at.microsecond == 0
