from __future__ import annotations

import threading
from datetime import date, datetime
from typing import Optional, Sequence
from zoneinfo import ZoneInfo

from teamtime.attendance.model import AttendanceRecord
from teamtime.core.enums import DedupAction
from teamtime.core.exceptions import SinkError, StoreError
from teamtime.geofence.model import GeoPoint

TZ = "Asia/Kolkata"
OFFICE = GeoPoint(26.8973681, 75.7559878)


class InMemoryAttendance:
    """Record store fake: dict keyed by id, one lock standing in for the DB transaction."""

    def __init__(self):
        self.records: dict[int, AttendanceRecord] = {}
        self.writes = 0
        self._id = 0
        self._lock = threading.Lock()

    def list_for_device_and_date(self, device_id: str, work_date: date) -> Sequence[AttendanceRecord]:
        items = [r for r in self.records.values() if r.device_id == device_id and r.work_date == work_date]
        return sorted(items, key=lambda r: r.record_id)

    def list_recent_for_device(self, device_id: str, limit: int):
        items = [r for r in self.records.values() if r.device_id == device_id]
        items.sort(key=lambda r: (r.work_date, r.record_id), reverse=True)
        return items[:limit]

    def apply_for_day(self, record: AttendanceRecord, decide):
        with self._lock:
            existing = self.list_for_device_and_date(record.device_id, record.work_date)
            decision = decide(existing)
            if decision.action == DedupAction.INSERT:
                self._id += 1
                stored = record.with_id(self._id)
            elif decision.action == DedupAction.OVERWRITE_SECOND:
                stored = record.with_id(decision.record_id)
            else:
                return decision, None
            self.records[stored.record_id] = stored
            self.writes += 1
            return decision, stored

    def seed(self, record: AttendanceRecord) -> AttendanceRecord:
        self._id += 1
        stored = record.with_id(self._id)
        self.records[self._id] = stored
        return stored


class FailingAttendance(InMemoryAttendance):
    def apply_for_day(self, record, decide):
        raise StoreError("connection refused")


class RecordingSink:
    def __init__(self):
        self.sent: list[AttendanceRecord] = []

    def send(self, record: AttendanceRecord) -> None:
        self.sent.append(record)


class FailingSink:
    def __init__(self):
        self.calls = 0

    def send(self, record: AttendanceRecord) -> None:
        self.calls += 1
        raise SinkError("HTTP 500")


def make_record(device_id: str, when: str, *, record_id: Optional[int] = None, tz_name: str = TZ) -> AttendanceRecord:
    return AttendanceRecord(
        device_id=device_id,
        latitude=OFFICE.latitude,
        longitude=OFFICE.longitude,
        recorded_at=datetime.strptime(when, "%Y-%m-%d %H:%M:%S").replace(tzinfo=ZoneInfo(tz_name)),
        tz_name=tz_name,
        record_id=record_id,
    )


