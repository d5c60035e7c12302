"""Application constants."""

# Plan shape
MIN_DAYS_PER_WEEK = 1
MAX_DAYS_PER_WEEK = 7
DEFAULT_DAYS_PER_WEEK = 4

# Baseline for the first set added to an empty exercise slot
DEFAULT_SET_PERCENTAGE = 50.0  # % of training max
DEFAULT_SET_REPS = 10

# Rest timer
REST_TIMER_MIN_SECONDS = 1
REST_TIMER_TICK_SECONDS = 1.0
VIBRATION_PATTERN = (200, 100, 200)  # ms: short-long-short pulse

# Stored rest-timer preference bounds
REST_TIMER_SETTING_MIN_SECONDS = 30
REST_TIMER_SETTING_MAX_SECONDS = 600
REST_TIMER_SETTING_DEFAULT_SECONDS = 180

# Catalog keys with a fixed exercise class
UPPER_BODY_EXERCISES = frozenset({"bench", "ohp"})
LOWER_BODY_EXERCISES = frozenset({"squat", "deadlift"})

# Fallback label when a slot's exercise is not in the catalog
UNKNOWN_EXERCISE_NAME = "Exercise"
