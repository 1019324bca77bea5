from __future__ import annotations

import pytest

from fakes import OFFICE, InMemoryAttendance, RecordingSink
from teamtime.geofence.fence import GeoFence


@pytest.fixture
def office_fence() -> GeoFence:
    return GeoFence(center=OFFICE, radius_m=50.0)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
