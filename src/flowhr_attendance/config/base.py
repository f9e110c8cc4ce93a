"""Settings shared by every environment.

Environment modules import everything from here and override what differs.
"""

import os

from ..core.constants import (
    DEFAULT_GEOFENCE_RADIUS_METERS,
    DEFAULT_HALF_DAY_THRESHOLD_MINUTES,
    DEFAULT_ORIGIN_LOOKUP_TIMEOUT_SECONDS,
    DEFAULT_ORIGIN_LOOKUP_URL,
)

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "flowhr_attendance"),
}

DEBUG = bool(int(os.getenv("DEBUG", "0")))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

# 'request': origin is the HTTP client address; 'http': ask ORIGIN_LOOKUP_URL (kiosk deployments)
ORIGIN_LOOKUP = os.getenv("ORIGIN_LOOKUP", "request")
ORIGIN_LOOKUP_URL = os.getenv("ORIGIN_LOOKUP_URL", DEFAULT_ORIGIN_LOOKUP_URL)
ORIGIN_LOOKUP_TIMEOUT_SECONDS = float(
    os.getenv("ORIGIN_LOOKUP_TIMEOUT_SECONDS", str(DEFAULT_ORIGIN_LOOKUP_TIMEOUT_SECONDS))
)
TRUST_PROXY_HEADERS = bool(int(os.getenv("TRUST_PROXY_HEADERS", "0")))

# 'presence': status stays 'present'; 'hours': short days become 'half_day' at check-out
STATUS_POLICY = os.getenv("STATUS_POLICY", "presence")
HALF_DAY_THRESHOLD_MINUTES = int(
    os.getenv("HALF_DAY_THRESHOLD_MINUTES", str(DEFAULT_HALF_DAY_THRESHOLD_MINUTES))
)

DEFAULT_GEOFENCE_RADIUS = int(os.getenv("DEFAULT_GEOFENCE_RADIUS_METERS", str(DEFAULT_GEOFENCE_RADIUS_METERS)))
