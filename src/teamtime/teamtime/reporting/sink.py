"""Best-effort reporting sinks (spreadsheet webhook)."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import requests

from ..attendance.model import AttendanceRecord
from ..core.constants import DEFAULT_HTTP_TIMEOUT_SECONDS
from ..core.exceptions import SinkError

logger = logging.getLogger(__name__)


class ReportingSink(Protocol):
    def send(self, record: AttendanceRecord) -> None:
        """Forward one record. Raises SinkError on any failure."""

        raise NotImplementedError


class WebhookReportingSink:
    """POSTs records as ``application/x-www-form-urlencoded`` to a fixed URL."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self._url = url
        self._timeout = float(timeout)
        self._session = session or requests.Session()

    def send(self, record: AttendanceRecord) -> None:
        try:
            # data=dict makes requests form-encode the body and set the Content-Type.
            response = self._session.post(self._url, data=record.to_form(), timeout=self._timeout)
        except requests.exceptions.RequestException as e:
            raise SinkError(f"Webhook request failed: {e}") from e

        if response.status_code != 200:
            raise SinkError(f"Webhook returned HTTP {response.status_code}: {response.text[:200]}")
        logger.debug("Reported %s @ %s to webhook", record.device_id, record.timestamp)


class NullReportingSink:
    """Used when no webhook URL is configured."""

    def send(self, record: AttendanceRecord) -> None:
        logger.debug("Reporting webhook not configured, skipping %s @ %s", record.device_id, record.timestamp)


def build_sink(url: Optional[str], *, timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS) -> ReportingSink:
    if not url:
        logger.warning("REPORT_WEBHOOK_URL not set. Spreadsheet reporting is disabled.")
        return NullReportingSink()
    return WebhookReportingSink(url, timeout=timeout)
