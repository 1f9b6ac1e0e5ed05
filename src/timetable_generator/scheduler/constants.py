"""Constants for timetable generation."""

# Room type markers appended to room names, e.g. "101 (C)" or "Physics Lab (L)"
CLASSROOM_MARKER = "(C)"
LAB_MARKER = "(L)"

# Default working week
DEFAULT_WORKING_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]

# Default college timings (HH:MM, 24-hour; durations in minutes)
DEFAULT_TIME_SETTINGS = {
    "collegeStartTime": "09:00",
    "collegeEndTime": "16:00",
    "recessStartTime": "12:00",
    "recessDuration": 60,
    "lectureDuration": 60,
}

# A lab session always occupies two consecutive slots
LAB_SESSION_SLOTS = 2

# Multiplier for the lecture placement attempt cap (days x slots x factor)
ATTEMPT_CAP_FACTOR = 2

# Number of best-ranked candidates tried per lecture placement attempt
DEFAULT_TOP_CANDIDATES = 3

# Teacher preference defaults
DEFAULT_MAX_CONSECUTIVE_CLASSES = 3
DEFAULT_MAX_DAILY_CLASSES = 5
DEFAULT_MAX_WEEKLY_HOURS = 18
NEUTRAL_SUBJECT_SCORE = 5
MIN_SUBJECT_SCORE = 0
MAX_SUBJECT_SCORE = 10

# Preference bonus weights
PREFERENCE_WEIGHTS = {
    "blocked_slot": -9999,
    "preferred_slot": 30,
    "preferred_day": 15,
    "subject_multiplier": 2,
}

# Satisfaction grade thresholds (score >= threshold), checked in order
SATISFACTION_GRADES = [
    (80, "Excellent"),
    (60, "Good"),
    (40, "Fair"),
    (0, "Poor"),
]
