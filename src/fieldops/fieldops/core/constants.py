"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_GRACE_PERIOD_MINUTES = 30
DEFAULT_EARLY_CLOCK_IN_MINUTES = 10
DEFAULT_REPORT_DAYS = 30
DEFAULT_GEOFENCE_RADIUS_M = 100
DEFAULT_COUNTRY = "USA"
DEFAULT_BODY_OF_WATER = "Main pool"
DEFAULT_POSITION = "Employee"

INVITE_CODE_LENGTH = 16
INVITE_EXPIRY_DAYS = 7
TEMP_PASSWORD = "TempPassword123!"

MAX_CHEMICAL_READINGS = 10
MAX_LOCKBOX_LENGTH = 8
