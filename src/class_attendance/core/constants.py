"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SUBMISSION_COOLDOWN_SECONDS = 60 * 60

# Time-of-day split, keyed off the hour a record was created.
MORNING_END_HOUR = 12
MIDDAY_END_HOUR = 16

REPORT_PAGE_SIZE = 35
REPORT_PAGE_SIZE_COMPACT = 10

WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

ABSENCE_RUN_LABELS = ("1 Day", "2 Days", "3 Days", "4+ Days")

# Live analytics cache.
ANALYTICS_MAX_AGE_SECONDS = 30
MAX_WATCHED_SELECTIONS = 256
