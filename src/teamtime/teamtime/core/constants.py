"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_KM = 6371.0

DEFAULT_OFFICE_LATITUDE = 26.8973681
DEFAULT_OFFICE_LONGITUDE = 75.7559878
DEFAULT_RADIUS_METERS = 50.0

# Check-in + check-out
RECORDS_PER_DAY = 2

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"
DEFAULT_TIMEZONE = "Asia/Kolkata"

DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0
DEFAULT_LOCATION_TIMEOUT_SECONDS = 10.0
DEFAULT_HISTORY_LIMIT = 15
