"""Centralized constants for the ariba application.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Time ----------
SECONDS_PER_DAY = 86400

# ---------- SM-2 ----------
MIN_GRADE = 0
MAX_GRADE = 5
PASSING_GRADE = 3
MIN_EASINESS = 1.3
DEFAULT_EASINESS = 2.5
FIRST_INTERVAL = 1  # days
SECOND_INTERVAL = 6  # days

# ---------- Analytics ----------
MASTERY_EASINESS = 2.5  # strictly greater than
MASTERY_REPETITIONS = 5  # strictly greater than
STREAK_LOOKBACK_DAYS = 60
MAX_REVIEW_TIME = 253402300799  # 9999-12-31T23:59:59Z

# ---------- Export ----------
EXPORT_FORMAT_VERSION = 1
EXPORT_FORMATS = ("json", "yaml")
CARD_ID_PREFIX = "card_"
