from __future__ import annotations

from enum import Enum


class DedupAction(str, Enum):
    """What to do with a new check-in given the device's records for that day."""

    INSERT = "INSERT"
    OVERWRITE_SECOND = "OVERWRITE_SECOND"
    REJECT = "REJECT"


class CheckInResult(str, Enum):
    """Outcome of a successful check-in as seen by the caller."""

    INSERTED = "INSERTED"
    OVERWRITTEN = "OVERWRITTEN"
