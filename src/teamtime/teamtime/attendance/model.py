from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import calendar_day, format_timestamp, get_zone
from ..core.enums import CheckInResult
from ..geofence.model import GeoPoint
from .dedup import DedupDecision


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one accepted check-in for a device.

    ``recorded_at`` is an absolute instant; ``tz_name`` is the zone used to decide
    which calendar day the record belongs to.
    """

    device_id: str
    latitude: float
    longitude: float
    recorded_at: datetime
    tz_name: str
    record_id: Optional[int] = None

    @property
    def local_time(self) -> datetime:
        return self.recorded_at.astimezone(get_zone(self.tz_name))

    @property
    def work_date(self) -> date:
        return calendar_day(self.recorded_at, self.tz_name)

    @property
    def timestamp(self) -> str:
        return format_timestamp(self.recorded_at, self.tz_name)

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)

    def with_id(self, record_id: int) -> "AttendanceRecord":
        return replace(self, record_id=record_id)

    def to_form(self) -> dict[str, str]:
        """Fields posted to the reporting webhook."""
        return {
            "deviceId": self.device_id,
            "latitude": str(self.latitude),
            "longitude": str(self.longitude),
            "time": self.timestamp,
        }

    def to_dict(self) -> dict:
        return {
            "record_id": self.record_id,
            "device_id": self.device_id,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "time": self.timestamp,
            "work_date": self.work_date.isoformat(),
            "timezone": self.tz_name,
        }


@dataclass(frozen=True)
class CheckInOutcome:
    result: CheckInResult
    record: AttendanceRecord
    distance_m: float
    decision: DedupDecision

    def to_dict(self) -> dict:
        return {
            "action": self.result.value,
            "record": self.record.to_dict(),
            "distance_m": round(self.distance_m, 2),
        }
