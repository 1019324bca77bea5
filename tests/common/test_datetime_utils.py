from datetime import date, datetime, timezone

import pytest

from teamtime.common.datetime_utils import (
    calendar_day,
    ensure_aware,
    format_timestamp,
    from_utc_naive,
    parse_iso_date,
    parse_timestamp,
    to_utc_naive,
)
from teamtime.common.device import resolve_device_id
from teamtime.core.exceptions import ValidationError


def test_parse_and_format_timestamp_round_trip_in_zone():
    value = parse_timestamp("2024-01-01 23:59:59", "Asia/Kolkata")
    assert value.utcoffset().total_seconds() == 5.5 * 3600
    assert format_timestamp(value, "Asia/Kolkata") == "2024-01-01 23:59:59"
    assert format_timestamp(value, "UTC") == "2024-01-01 18:29:59"


def test_calendar_day_depends_on_zone():
    instant = datetime(2024, 1, 1, 20, 0, tzinfo=timezone.utc)
    assert calendar_day(instant, "UTC") == date(2024, 1, 1)
    assert calendar_day(instant, "Asia/Kolkata") == date(2024, 1, 2)


def test_utc_naive_conversion():
    value = parse_timestamp("2024-01-02 01:30:00", "Asia/Kolkata")
    naive = to_utc_naive(value)
    assert naive == datetime(2024, 1, 1, 20, 0)
    assert from_utc_naive(naive) == value


def test_ensure_aware_keeps_aware_values():
    aware = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert ensure_aware(aware, "Asia/Kolkata") is aware
    assert ensure_aware(datetime(2024, 1, 1), "UTC").tzinfo is not None


@pytest.mark.parametrize("bad", ["2024-13-01 00:00:00", "2024-01-01T00:00:00", ""])
def test_parse_timestamp_rejects_bad_format(bad):
    with pytest.raises(ValidationError):
        parse_timestamp(bad, "UTC")


def test_unknown_zone_is_validation_error():
    with pytest.raises(ValidationError):
        parse_timestamp("2024-01-01 00:00:00", "Mars/Olympus_Mons")


def test_parse_iso_date():
    assert parse_iso_date("2024-02-29") == date(2024, 2, 29)
    with pytest.raises(ValidationError):
        parse_iso_date("2023-02-29")


def test_resolve_device_id():
    assert resolve_device_id("  kiosk-1 ") == "kiosk-1"
    generated = resolve_device_id(None)
    assert len(generated) == 16
    assert generated == resolve_device_id("")


def test_parse_timestamp_rejects_non_string():
    with pytest.raises(ValidationError):
        parse_timestamp(20240115, "Asia/Kolkata")
