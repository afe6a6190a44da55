"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MAX_ACTIONS_PER_USER = 100
MAX_FAILED_LOGIN_ATTEMPTS = 3
DEFAULT_MAX_USERS = 50

USER_ID_PREFIX = "USR_"
USER_ID_SUFFIX_LENGTH = 8

MIN_FULL_NAME_LENGTH = 2
MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 4
USERNAME_PATTERN = r"^[A-Za-z0-9_]+$"

TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M:%S"
RECENT_ACTIONS_IN_SUMMARY = 3
