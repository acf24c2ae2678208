"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_GRACE_MINUTES = 30
DEFAULT_REFRESH_INTERVAL_SECONDS = 60
DEFAULT_API_TIMEOUT_SECONDS = 15

# Per-user tracker cache in the web process.
TRACKER_IDLE_SECONDS = 8 * 60 * 60
TRACKER_DATES_PER_USER = 3

# (label, name, start_hour, end_hour)
DEFAULT_PERIODS = (
    ("9am-12pm", "Morning Session", 9, 12),
    ("12pm-3pm", "Afternoon Session", 12, 15),
    ("3pm-6pm", "Evening Session", 15, 18),
)

DEFAULT_DAILY_TARGET_PLANNED = "Auto-generated from hourly session activities"

SUMMARY_MAX_LENGTH = 500
SUMMARY_PREVIEW_LENGTH = 100
