from __future__ import annotations

import uuid
from typing import Optional


def resolve_device_id(configured: Optional[str] = None) -> str:
    """Stable per-device identifier.

    Uses ``DEVICE_ID`` from settings when present, otherwise the host's hardware
    address so the id survives restarts.
    """
    if configured and configured.strip():
        return configured.strip()
    return f"{uuid.getnode():016x}"
