"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SHIFT_START = "09:00"
DEFAULT_SHIFT_END = "18:00"
DEFAULT_WORK_LOCATION = "dining"
BULK_CHECKIN_ADDRESS = "Bulk check-in location"

LATE_THRESHOLD_MINUTES = 15
EARLY_LEAVE_THRESHOLD_MINUTES = 30
OVERTIME_THRESHOLD_HOURS = 0.5
HALF_DAY_HOURS = 4

BULK_CHECKIN_LIMIT = 50

DASHBOARD_TOP_N = 5
DASHBOARD_AT_RISK_LIMIT = 10
REPORT_TOP_N = 10
FULL_TIME_MONTH_HOURS = 160
SAVE_ATTEMPTS = 3
