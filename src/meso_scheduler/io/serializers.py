"""
Parsing and validation of user-supplied values.

Handles conversion of CLI strings into the engine's value types.
"""

import re
from datetime import date, datetime

from ..core.config import READINESS_STARS_MAX, READINESS_STARS_MIN
from ..core.models import ExerciseCluster, RoundingPolicy, SetSnapshot


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_date(date_str: str) -> str:
    """
    Validate and normalize date string to ISO format.

    Args:
        date_str: Date string to validate

    Returns:
        Normalized YYYY-MM-DD string

    Raises:
        ValidationError: If date format is invalid
    """
    if not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e

    return date_str


def parse_date(date_str: str) -> date:
    """Parse a YYYY-MM-DD string into a date."""
    return datetime.strptime(validate_date(date_str), "%Y-%m-%d").date()


def parse_reps(reps_str: str) -> list[int]:
    """
    Parse a rep list such as "12,12,11" or "12 12 11".

    Raises:
        ValidationError: If any entry is not a non-negative integer or the list is empty
    """
    parts = [p for p in re.split(r"[,\s]+", reps_str.strip()) if p]
    if not parts:
        raise ValidationError("Enter at least one set, e.g. 12,12,11")

    reps: list[int] = []
    for part in parts:
        if not part.isdigit():
            raise ValidationError(f"Invalid rep count: {part!r}")
        reps.append(int(part))
    return reps


def parse_snapshot_sets(sets_str: str) -> list[SetSnapshot]:
    """
    Parse logged working sets with load and optional RIR.

    Per-set formats (comma-separated):
        reps@load/rir   e.g. "8@100/2"    canonical
        reps@load       e.g. "8@100"      RIR not logged
        reps load rir   e.g. "8 100 2"    space-separated
        reps load       e.g. "8 100"      space, RIR not logged

    Args:
        sets_str: Sets string to parse

    Returns:
        List of SetSnapshot in logged order

    Raises:
        ValidationError: If the string is empty or any set is malformed
    """
    if not sets_str or not sets_str.strip():
        raise ValidationError("Sets string cannot be empty")

    sets: list[SetSnapshot] = []
    for part in (p.strip() for p in sets_str.split(",")):
        if not part:
            continue
        match_at = re.match(r"^(\d+)@(\d+\.?\d*)(?:/(\d+\.?\d*))?$", part)
        match_sp = re.match(r"^(\d+)\s+(\d+\.?\d*)(?:\s+(\d+\.?\d*))?$", part)
        match = match_at or match_sp
        if match is None:
            raise ValidationError(
                f"Invalid set format: {part!r}. Expected reps@load/rir, e.g. 8@100/2"
            )
        reps, load, rir = match.groups()
        sets.append(SetSnapshot(
            load=float(load),
            reps=int(reps),
            rir=float(rir) if rir is not None else None,
        ))

    if not sets:
        raise ValidationError("Sets string cannot be empty")
    return sets


def validate_cluster(cluster: str) -> ExerciseCluster:
    """
    Resolve an exercise cluster name (dashes or underscores).

    Raises:
        ValidationError: If the name is not a known cluster
    """
    try:
        return ExerciseCluster(cluster.strip().lower().replace("-", "_"))
    except ValueError as e:
        valid = ", ".join(c.value for c in ExerciseCluster)
        raise ValidationError(f"Unknown cluster '{cluster}'. Valid: {valid}") from e


def validate_stars(stars: int) -> int:
    """
    Check a readiness rating is within 1-5 stars.

    Raises:
        ValidationError: If stars is out of range
    """
    if not READINESS_STARS_MIN <= stars <= READINESS_STARS_MAX:
        raise ValidationError(
            f"Readiness must be between {READINESS_STARS_MIN} and {READINESS_STARS_MAX} stars"
        )
    return stars


def validate_rounding(rounding: str) -> RoundingPolicy:
    """
    Resolve a rounding policy name.

    Raises:
        ValidationError: If the name is not barbell, dumbbell or machine
    """
    try:
        return RoundingPolicy(rounding.strip().lower())
    except ValueError as e:
        valid = ", ".join(p.value for p in RoundingPolicy)
        raise ValidationError(f"Unknown rounding '{rounding}'. Valid: {valid}") from e


def validate_positive(value: int | float, name: str) -> int | float:
    """
    Validate that a value is positive.

    Raises:
        ValidationError: If value is not positive
    """
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    return value
