"""Example: one check-in "tap" through the service layer (no Flask).

Acquires a location fix with the configured provider and checks this device in.
Controllers are only a thin layer; the business flow lives in AttendanceService.
"""

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src" / "teamtime"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from dotenv import load_dotenv

from config import get_settings_module

from teamtime.container import build_container_from_settings
from teamtime.core.exceptions import DomainError, LocationUnavailableError, OutOfRangeError
from teamtime.main import configure_logging


def main() -> int:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    container = build_container_from_settings(settings)

    try:
        outcome = container.attendance_service.check_in_with_location(container.device_id, container.locator)
    except LocationUnavailableError as e:
        print(f"Location Services Disabled: {e}. Please enable location services to proceed.")
        return 2
    except OutOfRangeError as e:
        print(f"You are not within {e.radius_m:g} meters of the office ({e.distance_m:.1f} m away).")
        return 1
    except DomainError as e:
        print(f"Check-in failed: {e}")
        return 1

    print(f"Done :) {outcome.result.value} {outcome.record.timestamp}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
