import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "teamtime_test"),
}

GEOFENCE_CONFIG = {
    "latitude": 26.8973681,
    "longitude": 75.7559878,
    "radius_m": 50.0,
}

REPORT_WEBHOOK_URL = ""
HTTP_TIMEOUT_SECONDS = 10.0

TIMEZONE = "Asia/Kolkata"

LOCATION_PROVIDER = "static"
STATIC_LOCATION = None
LOCATION_TIMEOUT_SECONDS = 1.0

DEVICE_ID = "test-device"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
