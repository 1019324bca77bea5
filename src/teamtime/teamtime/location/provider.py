"""Single-shot location acquisition.

Providers are blocking; ``LocationAcquirer`` runs one on a worker thread and
waits at most ``timeout`` seconds, so callers get either a ``GeoPoint`` or a
``LocationUnavailableError``.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Optional, Protocol

from ..core.constants import DEFAULT_LOCATION_TIMEOUT_SECONDS
from ..core.exceptions import LocationUnavailableError, ValidationError
from ..geofence.model import GeoPoint

logger = logging.getLogger(__name__)


class LocationProvider(Protocol):
    def current_fix(self) -> GeoPoint:
        raise NotImplementedError


class StaticLocationProvider:
    """Always reports the same fix (fixed kiosk, manual coordinates)."""

    def __init__(self, point: Optional[GeoPoint]):
        self._point = point

    def current_fix(self) -> GeoPoint:
        if self._point is None:
            raise LocationUnavailableError("No static location configured")
        return self._point


class LocationAcquirer:
    def __init__(
        self,
        provider: LocationProvider,
        *,
        timeout: float = DEFAULT_LOCATION_TIMEOUT_SECONDS,
        executor: Optional[Executor] = None,
    ):
        self._provider = provider
        self._timeout = float(timeout)
        self._executor = executor

    def acquire(self) -> GeoPoint:
        # A provider call that overruns keeps its thread, so without an injected
        # executor every acquisition gets its own worker.
        executor = self._executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="location")
        try:
            future = executor.submit(self._provider.current_fix)
            try:
                return future.result(timeout=self._timeout)
            except FutureTimeoutError as e:
                future.cancel()
                logger.warning("Location provider gave no fix within %gs", self._timeout)
                raise LocationUnavailableError(f"No location fix within {self._timeout:g}s") from e
            except LocationUnavailableError:
                raise
            except Exception as e:
                logger.error("Location provider failed: %s", e)
                raise LocationUnavailableError(f"Location provider failed: {e}") from e
        finally:
            if executor is not self._executor:
                executor.shutdown(wait=False)


def build_provider(
    kind: str,
    *,
    static_point: Optional[GeoPoint] = None,
    timeout: float = DEFAULT_LOCATION_TIMEOUT_SECONDS,
) -> LocationProvider:
    kind = (kind or "static").lower()
    if kind == "static":
        return StaticLocationProvider(static_point)
    if kind == "ip":
        from .ip_provider import IpLocationProvider

        return IpLocationProvider(timeout=timeout)
    raise ValidationError(f"Unknown location provider: {kind!r}")
