import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "teamtime"),
}

# Office geofence
GEOFENCE_CONFIG = {
    "latitude": float(os.getenv("OFFICE_LATITUDE", "26.8973681")),
    "longitude": float(os.getenv("OFFICE_LONGITUDE", "75.7559878")),
    "radius_m": float(os.getenv("GEOFENCE_RADIUS_M", "50")),
}

# Spreadsheet webhook (Apps Script web app). Empty disables reporting.
REPORT_WEBHOOK_URL = os.getenv("REPORT_WEBHOOK_URL", "")
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))

TIMEZONE = os.getenv("TIMEZONE", "Asia/Kolkata")

# "static" uses STATIC_LATITUDE/STATIC_LONGITUDE, "ip" asks an IP geolocation service.
LOCATION_PROVIDER = os.getenv("LOCATION_PROVIDER", "static")
STATIC_LOCATION = (
    (os.getenv("STATIC_LATITUDE"), os.getenv("STATIC_LONGITUDE"))
    if os.getenv("STATIC_LATITUDE") and os.getenv("STATIC_LONGITUDE")
    else None
)
LOCATION_TIMEOUT_SECONDS = float(os.getenv("LOCATION_TIMEOUT_SECONDS", "10"))

DEVICE_ID = os.getenv("DEVICE_ID")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
