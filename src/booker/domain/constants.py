"""Centralized constants for Booker.

Schedule shape and display defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Repetition schedule ----------
# Days from the completion of a stage to the next review (delta, not cumulative).
STAGE_INTERVALS: dict[int, int] = {
    0: 1,
    1: 1,
    2: 5,
    3: 7,
    4: 11,
}
INITIAL_STAGE = 1  # Logging an item counts as the first exposure
FINAL_STAGE = 5
MAX_PROJECTION_STEPS = 5

# ---------- Time split ----------
FLUENCY_SHARE = 0.3

# ---------- Durations ----------
DEFAULT_DURATION = 30
TIME_OPTIONS: tuple[tuple[str, int], ...] = (
    ("10 min", 10),
    ("15 min", 15),
    ("20 min", 20),
    ("30 min", 30),
    ("1h", 60),
    ("1.5h", 90),
    ("2h", 120),
)

# ---------- Labels ----------
RELATIVE_DAY_LABELS: dict[int, str] = {
    0: "Today",
    1: "Tomorrow",
    2: "Day after tomorrow",
}
INVALID_DATE_LABEL = "invalid date"

# ---------- Notifications ----------
NOTIFICATION_TITLE = "Booker: today's plan"
NOTIFICATION_BODY = "You have {count} reviews due today.\nEstimated time: {time_string}"

# ---------- Storage ----------
ITEM_ID_PREFIX = "item_"
