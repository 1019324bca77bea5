from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.constants import DATE_FORMAT, TIMESTAMP_FORMAT
from ..core.exceptions import ValidationError


def get_zone(tz_name: str) -> ZoneInfo:
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValidationError(f"Unknown time zone: {tz_name!r}") from e


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as e:
        raise ValidationError(f"Invalid date: {value!r}") from e


def parse_timestamp(value: str, tz_name: str) -> datetime:
    """Parse a ``YYYY-MM-DD HH:MM:SS`` wall-clock string as an aware datetime in ``tz_name``."""
    try:
        naive = datetime.strptime(value, TIMESTAMP_FORMAT)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid timestamp: {value!r}") from e
    return naive.replace(tzinfo=get_zone(tz_name))


def ensure_aware(value: datetime, tz_name: str) -> datetime:
    """Attach ``tz_name`` to naive datetimes; aware datetimes are returned unchanged."""
    if value.tzinfo is None:
        return value.replace(tzinfo=get_zone(tz_name))
    return value


def format_timestamp(value: datetime, tz_name: str) -> str:
    return value.astimezone(get_zone(tz_name)).strftime(TIMESTAMP_FORMAT)


def calendar_day(value: datetime, tz_name: str) -> date:
    """Calendar date of an instant as seen in ``tz_name``."""
    return value.astimezone(get_zone(tz_name)).date()


def to_utc_naive(value: datetime) -> datetime:
    """MySQL DATETIME columns carry no zone, so instants are stored as naive UTC."""
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def from_utc_naive(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc)


def now_local(tz_name: str) -> datetime:
    """Current time in ``tz_name``.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(get_zone(tz_name))
