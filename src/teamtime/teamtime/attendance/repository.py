from __future__ import annotations

from datetime import date
from typing import Callable, Optional, Protocol, Sequence, Tuple

from .dedup import DedupDecision
from .model import AttendanceRecord

DecideFn = Callable[[Sequence[AttendanceRecord]], DedupDecision]


class AttendanceRepository(Protocol):
    def list_for_device_and_date(self, device_id: str, work_date: date) -> Sequence[AttendanceRecord]:
        """Records of one device for one calendar day, in insertion order."""

        raise NotImplementedError

    def list_recent_for_device(self, device_id: str, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def apply_for_day(
        self, record: AttendanceRecord, decide: DecideFn
    ) -> Tuple[DedupDecision, Optional[AttendanceRecord]]:
        """Atomically read the device's records for ``record.work_date``, ask ``decide``
        what to do, and insert or overwrite accordingly.

        Returns the decision and the stored record (``None`` when rejected).
        """

        raise NotImplementedError
