import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "teamtime"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "teamtime"),
}

GEOFENCE_CONFIG = {
    "latitude": float(os.getenv("OFFICE_LATITUDE", "26.8973681")),
    "longitude": float(os.getenv("OFFICE_LONGITUDE", "75.7559878")),
    "radius_m": float(os.getenv("GEOFENCE_RADIUS_M", "50")),
}

REPORT_WEBHOOK_URL = os.getenv("REPORT_WEBHOOK_URL", "")
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))

TIMEZONE = os.getenv("TIMEZONE", "Asia/Kolkata")

LOCATION_PROVIDER = os.getenv("LOCATION_PROVIDER", "static")
STATIC_LOCATION = (
    (os.getenv("STATIC_LATITUDE"), os.getenv("STATIC_LONGITUDE"))
    if os.getenv("STATIC_LATITUDE") and os.getenv("STATIC_LONGITUDE")
    else None
)
LOCATION_TIMEOUT_SECONDS = float(os.getenv("LOCATION_TIMEOUT_SECONDS", "10"))

DEVICE_ID = os.getenv("DEVICE_ID")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
