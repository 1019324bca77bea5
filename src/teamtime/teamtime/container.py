from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from .attendance.dedup import DedupPolicy
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.device import resolve_device_id
from .core.constants import (
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_LOCATION_TIMEOUT_SECONDS,
    DEFAULT_TIMEZONE,
)
from .database.connection import DBConfig, DatabaseConnection
from .geofence.fence import GeoFence
from .geofence.model import GeoPoint
from .location.provider import LocationAcquirer, build_provider
from .reporting.sink import ReportingSink, build_sink


@dataclass(frozen=True)
class Container:
    attendance_repo: AttendanceRepository
    reporting_sink: ReportingSink
    geofence: GeoFence

    attendance_service: AttendanceService
    locator: LocationAcquirer
    device_id: str

    conn: Optional[DatabaseConnection] = None


def build_container(
    *,
    db_config: dict,
    geofence_config: dict,
    webhook_url: Optional[str] = None,
    http_timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
    tz_name: str = DEFAULT_TIMEZONE,
    location_provider: str = "static",
    static_location: Optional[tuple] = None,
    location_timeout: float = DEFAULT_LOCATION_TIMEOUT_SECONDS,
    device_id: Optional[str] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    attendance_repo = MySQLAttendanceRepository(conn)
    reporting_sink = build_sink(webhook_url, timeout=http_timeout)
    geofence = GeoFence.from_config(geofence_config)

    attendance_service = AttendanceService(
        attendance_repo,
        reporting_sink,
        geofence,
        policy=DedupPolicy(),
        tz_name=tz_name,
        sink_executor=ThreadPoolExecutor(max_workers=2, thread_name_prefix="report-sink"),
    )

    point = GeoPoint.parse(*static_location) if static_location else None
    locator = LocationAcquirer(
        build_provider(location_provider, static_point=point, timeout=location_timeout),
        timeout=location_timeout,
    )

    return Container(
        attendance_repo=attendance_repo,
        reporting_sink=reporting_sink,
        geofence=geofence,
        attendance_service=attendance_service,
        locator=locator,
        device_id=resolve_device_id(device_id),
        conn=conn,
    )


def build_container_from_settings(settings) -> Container:
    return build_container(
        db_config=dict(settings.DB_CONFIG),
        geofence_config=dict(settings.GEOFENCE_CONFIG),
        webhook_url=getattr(settings, "REPORT_WEBHOOK_URL", None),
        http_timeout=float(getattr(settings, "HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS)),
        tz_name=getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE),
        location_provider=getattr(settings, "LOCATION_PROVIDER", "static"),
        static_location=getattr(settings, "STATIC_LOCATION", None),
        location_timeout=float(getattr(settings, "LOCATION_TIMEOUT_SECONDS", DEFAULT_LOCATION_TIMEOUT_SECONDS)),
        device_id=getattr(settings, "DEVICE_ID", None),
    )
