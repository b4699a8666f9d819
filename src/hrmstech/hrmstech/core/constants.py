"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_EMPLOYEE_ID_FORMAT = "EMP{YYYY}-{###}"
DEFAULT_PREVIEW_COUNT = 5
MIN_PASSWORD_LENGTH = 6
DEFAULT_RESET_TTL_MINUTES = 60
INVITE_TTL_DAYS = 7

MAX_UPLOAD_BYTES = 10 * 1024 * 1024
ALLOWED_UPLOAD_TYPES = ("application/pdf", "image/jpeg", "image/jpg", "image/png")

SYSTEM_SYNC_USER = "system-sync"
