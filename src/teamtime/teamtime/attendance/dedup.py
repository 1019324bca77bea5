"""Two-slot-per-day deduplication.

A device gets at most ``slots_per_day`` records per calendar day. Records are
inserted until the slots are full; after that every new check-in replaces the
most recently inserted record, so the first record of the day is never touched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from ..core.constants import RECORDS_PER_DAY
from ..core.enums import DedupAction

if TYPE_CHECKING:
    from .model import AttendanceRecord


@dataclass(frozen=True)
class DedupDecision:
    action: DedupAction
    record_id: Optional[int] = None
    matches: int = 0


class DedupPolicy:
    def __init__(self, slots_per_day: int = RECORDS_PER_DAY):
        if slots_per_day < 1:
            raise ValueError("slots_per_day must be at least 1")
        self._slots = int(slots_per_day)

    def decide(self, existing: Sequence["AttendanceRecord"]) -> DedupDecision:
        """Decide from the records already stored for the same device and day."""
        count = len(existing)
        if count < self._slots:
            return DedupDecision(action=DedupAction.INSERT, matches=count)
        if count == self._slots:
            # Later insertion order == higher store id; unsaved records keep input order.
            if any(r.record_id is None for r in existing):
                latest = existing[-1]
            else:
                latest = max(existing, key=lambda r: r.record_id)
            return DedupDecision(action=DedupAction.OVERWRITE_SECOND, record_id=latest.record_id, matches=count)
        return DedupDecision(action=DedupAction.REJECT, matches=count)

    @staticmethod
    def same_day(a: "AttendanceRecord", b: "AttendanceRecord") -> bool:
        """Same device and same calendar date, bucketed in ``a``'s zone."""
        if a.device_id != b.device_id:
            return False
        return a.work_date == b.recorded_at.astimezone(a.local_time.tzinfo).date()

    def matches_for(
        self, record: "AttendanceRecord", candidates: Iterable["AttendanceRecord"]
    ) -> list["AttendanceRecord"]:
        return [c for c in candidates if self.same_day(record, c)]

    def decide_for(self, record: "AttendanceRecord", candidates: Iterable["AttendanceRecord"]) -> DedupDecision:
        return self.decide(self.matches_for(record, candidates))
