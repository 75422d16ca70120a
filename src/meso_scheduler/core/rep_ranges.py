"""
Rep-range rulebook.

Only a single target rep count is logged per exercise; the allowed range
is computed at runtime from the movement pattern. Its upper bound is the
target_upper fed to the progression rules.
"""

from enum import Enum

from .models import RepRange


class LiftPattern(str, Enum):
    COMPOUND_PRESS = "compound_press"
    PULL = "pull"
    SQUAT_PATTERN = "squat_pattern"
    HINGE_SPINE_SENSITIVE = "hinge_spine_sensitive"
    HAM_CURL_LEG_EXT = "ham_curl_leg_ext"
    LATERAL_REAR_DELT = "lateral_rear_delt"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    CALVES = "calves"
    ABS = "abs"
    UNKNOWN = "unknown"


PATTERN_RANGES: dict[LiftPattern, RepRange] = {
    LiftPattern.COMPOUND_PRESS: RepRange(8, 12),
    LiftPattern.PULL: RepRange(10, 15),
    LiftPattern.SQUAT_PATTERN: RepRange(8, 12),
    LiftPattern.HINGE_SPINE_SENSITIVE: RepRange(8, 12),
    LiftPattern.HAM_CURL_LEG_EXT: RepRange(10, 15),
    LiftPattern.LATERAL_REAR_DELT: RepRange(15, 25),
    LiftPattern.BICEPS: RepRange(10, 15),
    LiftPattern.TRICEPS: RepRange(10, 15),
    LiftPattern.CALVES: RepRange(10, 20),
    LiftPattern.ABS: RepRange(12, 20),
    LiftPattern.UNKNOWN: RepRange(8, 12),
}

# Hinges collapse to a fixed 10 when the back is fussy
SPINE_SENSITIVE_HINGE_RANGE = RepRange(10, 10)

# Checked in order; first match wins
_ID_KEYWORDS: list[tuple[LiftPattern, tuple[str, ...]]] = [
    (LiftPattern.SQUAT_PATTERN, ("hack", "leg_press", "squat")),
    (LiftPattern.HINGE_SPINE_SENSITIVE, ("rdl", "deadlift", "pull_through", "hinge")),
    (LiftPattern.PULL, ("pulldown", "pull_down", "row", "chin", "pullup", "pull_up")),
    (LiftPattern.COMPOUND_PRESS, ("bench", "press", "dip")),
    (LiftPattern.HAM_CURL_LEG_EXT, ("leg_curl", "ham", "leg_extension")),
    (LiftPattern.LATERAL_REAR_DELT, ("lateral", "rear_delt", "reverse_fly", "rear_fly")),
    (LiftPattern.BICEPS, ("curl",)),
    (LiftPattern.TRICEPS, ("tricep", "pressdown", "pushdown", "overhead")),
    (LiftPattern.CALVES, ("calf",)),
    (LiftPattern.ABS, ("crunch", "hanging", "ab")),
]

_NAME_KEYWORDS: list[tuple[LiftPattern, tuple[str, ...]]] = [
    (LiftPattern.PULL, ("pulldown", "row")),
    (LiftPattern.COMPOUND_PRESS, ("press", "bench")),
    (LiftPattern.SQUAT_PATTERN, ("hack", "leg press", "squat")),
    (LiftPattern.HINGE_SPINE_SENSITIVE, ("rdl", "deadlift")),
    (LiftPattern.BICEPS, ("curl",)),
    (LiftPattern.TRICEPS, ("tricep", "pushdown")),
    (LiftPattern.CALVES, ("calf",)),
    (LiftPattern.ABS, ("crunch", "hanging")),
]


def _match(text: str, table: list[tuple[LiftPattern, tuple[str, ...]]]) -> LiftPattern | None:
    for pattern, keywords in table:
        if any(k in text for k in keywords):
            return pattern
    return None


def infer_pattern(exercise_id: str, exercise_name: str | None = None) -> LiftPattern:
    """
    Infer the lift pattern from an exercise id, then from its display name.

    Unknown exercises fall back to compound-friendly defaults.
    """
    pattern = _match(exercise_id.lower(), _ID_KEYWORDS)
    if pattern is None:
        pattern = _match((exercise_name or "").lower(), _NAME_KEYWORDS)
    return pattern or LiftPattern.UNKNOWN


def range_for(pattern: LiftPattern, spine_sensitive: bool = False) -> RepRange:
    """Rep range for a lift pattern."""
    if pattern is LiftPattern.HINGE_SPINE_SENSITIVE and spine_sensitive:
        return SPINE_SENSITIVE_HINGE_RANGE
    return PATTERN_RANGES[pattern]


def range_for_exercise(
    exercise_id: str,
    exercise_name: str | None = None,
    spine_sensitive: bool = False,
) -> RepRange:
    """Rep range for an exercise id/name."""
    return range_for(infer_pattern(exercise_id, exercise_name), spine_sensitive)


def display(target_reps: int, rep_range: RepRange) -> str:
    """Human-friendly target with range, e.g. `10 (8–12)`."""
    return f"{target_reps} ({rep_range.min}–{rep_range.max})"
