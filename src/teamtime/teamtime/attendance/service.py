from __future__ import annotations

import logging
from concurrent.futures import Executor
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import calendar_day, ensure_aware, get_zone, now_local
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_TIMEZONE
from ..core.enums import CheckInResult, DedupAction
from ..core.exceptions import DataIntegrityError, OutOfRangeError, SinkError, StoreError
from ..geofence.fence import GeoFence
from ..geofence.model import GeoPoint
from ..location.provider import LocationAcquirer
from ..reporting.sink import ReportingSink
from .dedup import DedupPolicy
from .model import AttendanceRecord, CheckInOutcome
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: a device taps "check in" from somewhere.

    The geofence gates everything. Past it, the record store and the reporting
    sink are independent side effects: the sink gets the record whatever the
    store did, and a sink failure never fails the check-in.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        sink: ReportingSink,
        geofence: GeoFence,
        *,
        policy: DedupPolicy | None = None,
        tz_name: str = DEFAULT_TIMEZONE,
        sink_executor: Executor | None = None,
    ):
        get_zone(tz_name)
        self._attendance = attendance
        self._sink = sink
        self._geofence = geofence
        self._policy = policy or DedupPolicy()
        self._tz_name = tz_name
        self._sink_executor = sink_executor

    @property
    def geofence(self) -> GeoFence:
        return self._geofence

    @property
    def tz_name(self) -> str:
        return self._tz_name

    def check_in(self, device_id: str, point: GeoPoint, *, now: datetime | None = None) -> CheckInOutcome:
        device_id = require_non_empty(device_id, "Device id")
        point = GeoPoint.parse(point.latitude, point.longitude)
        now = (ensure_aware(now, self._tz_name) if now else now_local(self._tz_name)).replace(microsecond=0)

        distance = self._geofence.distance_to(point)
        if distance > self._geofence.radius_m:
            logger.info("Device %s rejected: %.1f m from office (radius %.1f m)", device_id, distance, self._geofence.radius_m)
            raise OutOfRangeError(distance, self._geofence.radius_m)

        record = AttendanceRecord(
            device_id=device_id,
            latitude=point.latitude,
            longitude=point.longitude,
            recorded_at=now,
            tz_name=self._tz_name,
        )

        try:
            decision, stored = self._attendance.apply_for_day(record, self._policy.decide)
        except StoreError:
            logger.exception("Store write failed for device %s", device_id)
            raise
        finally:
            self._forward(record)

        if decision.action == DedupAction.REJECT or stored is None:
            logger.error(
                "Integrity error: %s records for device %s on %s, check-in rejected",
                decision.matches,
                device_id,
                record.work_date,
            )
            raise DataIntegrityError(device_id, record.work_date, decision.matches)

        result = CheckInResult.INSERTED if decision.action == DedupAction.INSERT else CheckInResult.OVERWRITTEN
        logger.info(
            "Device %s checked in (%s, record %s, %.1f m from office)",
            device_id,
            result.value,
            stored.record_id,
            distance,
        )
        return CheckInOutcome(result=result, record=stored, distance_m=distance, decision=decision)

    def check_in_with_location(
        self, device_id: str, locator: LocationAcquirer, *, now: datetime | None = None
    ) -> CheckInOutcome:
        point = locator.acquire()
        return self.check_in(device_id, point, now=now)

    def records_for_day(self, device_id: str, work_date: Optional[date] = None) -> Sequence[AttendanceRecord]:
        device_id = require_non_empty(device_id, "Device id")
        work_date = work_date or calendar_day(now_local(self._tz_name), self._tz_name)
        return self._attendance.list_for_device_and_date(device_id, work_date)

    def history(self, device_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        device_id = require_non_empty(device_id, "Device id")
        return self._attendance.list_recent_for_device(device_id, max(1, int(limit)))

    def _forward(self, record: AttendanceRecord) -> None:
        if self._sink_executor is not None:
            self._sink_executor.submit(self._send_to_sink, record)
        else:
            self._send_to_sink(record)

    def _send_to_sink(self, record: AttendanceRecord) -> None:
        try:
            self._sink.send(record)
        except SinkError as e:
            logger.error("Reporting sink failed for device %s @ %s: %s", record.device_id, record.timestamp, e)
        except Exception:
            logger.exception("Unexpected reporting sink error for device %s", record.device_id)
