"""
Configuration constants for the training adaptation engine.

All adjustable parameters are centralized here for easy tuning.
"""

import calendar
from typing import Final

# =============================================================================
# MESOCYCLE CALENDAR
# =============================================================================

REST_WEEKDAY: Final[int] = calendar.THURSDAY  # date.weekday() value of the rest day
LIFT_DAYS_PER_WEEK: Final[int] = 6  # W1D1..W1D6, then W2D1
FALLBACK_WEEK: Final[int] = 1  # Label used before an anchor exists
FALLBACK_DAY: Final[int] = 1

# Key-value slots holding the anchor (date as proleptic ordinal, day number)
ANCHOR_DATE_KEY: Final[str] = "meso.anchorDate"
ANCHOR_DAY_NUMBER_KEY: Final[str] = "meso.anchorDayNumber"

# =============================================================================
# PROGRESSION (three-to-grow)
# =============================================================================

INCREASE_PERCENT: Final[float] = 0.05  # All sets at top of range
DECREASE_PERCENT: Final[float] = 0.05  # Major rep drop
MAJOR_REP_DROP: Final[int] = 2  # First-to-last set drop that triggers a decrease

# =============================================================================
# READINESS (1-5 stars)
# =============================================================================

READINESS_STARS_MIN: Final[int] = 1
READINESS_STARS_MAX: Final[int] = 5
READINESS_LOAD_MODIFIERS: Final[dict[int, float]] = {
    1: -0.10,
    2: -0.05,
    3: 0.0,
    4: 0.0,
    5: 0.0,
}
TEST_SET_MIN_STARS: Final[int] = 5  # Peak readiness required for a test set

# =============================================================================
# WARM-UP RAMP
# =============================================================================

ROUNDING_STEPS: Final[dict[str, float]] = {
    "barbell": 5.0,
    "dumbbell": 2.5,
    "machine": 2.5,  # pin/cable stacks
}

# (label, fraction of top load, rep text)
RAMP_TIERS: Final[list[tuple[str, float, str]]] = [
    ("Ramp 1", 0.50, "8–10"),
    ("Ramp 2", 0.70, "4–6"),
    ("Ramp 3", 0.85, "1–3"),
]
CRANKY_JOINT_FRACTION: Final[float] = 0.40
CRANKY_JOINT_GUIDANCE: Final[str] = "~35–40%"
CRANKY_JOINT_REPS: Final[str] = "8"

BASE_WARMUP_STEPS: Final[list[str]] = [
    "2 min easy cardio (bike / incline walk)",
    "Scap push-ups ×10",
    "Band pull-aparts ×15",
    "Bodyweight RDL / hip hinge ×10",
    "Squat-to-stand ×6 (or squat pry 20s)",
    "Dead bug ×6/side (or plank 20–30s)",
]
RAMP_REST_NOTE: Final[str] = "Rest: 30–60s early, then 90–150s before your first work set."

# =============================================================================
# PROGRESSION ENGINE (load + set count, RIR-aware)
# =============================================================================

# Target RIR drift per meso phase
MID_PHASE_RIR_DROP: Final[float] = 0.3
MID_PHASE_RIR_FLOOR: Final[float] = 1.5
LATE_PHASE_RIR_DROP: Final[float] = 1.0
LATE_PHASE_RIR_FLOOR: Final[float] = 1.0
DELOAD_RIR_RISE: Final[float] = 1.0

# RIR bands around the effective target
STRONG_RIR_MARGIN: Final[float] = 0.3  # top of range and this far above target → add load
ADD_SET_RIR_MARGIN: Final[float] = 0.7  # ... and this far above → also add a set
ON_TARGET_RIR_BAND: Final[float] = 0.5
VERY_LOW_RIR_MARGIN: Final[float] = 1.0

# Week → phase map for the 11-week block (10 working weeks + deload)
EARLY_PHASE_WEEKS: Final[range] = range(1, 4)
MID_PHASE_WEEKS: Final[range] = range(4, 7)
LATE_PHASE_WEEKS: Final[range] = range(7, 11)

# =============================================================================
# HOST DEFAULTS
# =============================================================================

DEFAULT_ROUNDING: Final[str] = "barbell"
DEFAULT_ANCHOR_WEEK: Final[int] = 1
DEFAULT_ANCHOR_DAY: Final[int] = 1
