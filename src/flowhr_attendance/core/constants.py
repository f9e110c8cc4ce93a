"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_GEOFENCE_RADIUS_METERS = 100
DEFAULT_HALF_DAY_THRESHOLD_MINUTES = 240
DEFAULT_ORIGIN_LOOKUP_TIMEOUT_SECONDS = 5.0
DEFAULT_ORIGIN_LOOKUP_URL = "https://api.ipify.org?format=json"
DEFAULT_HISTORY_LIMIT = 30
DEFAULT_PENDING_LIMIT = 500

MINUTES_PER_DAY = 24 * 60

WEEKDAY_NAMES = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)
