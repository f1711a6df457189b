"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_REPORT_DAYS = 7
DEFAULT_TOKEN_RETRY_LIMIT = 3
HOURS_PLACES = 2
