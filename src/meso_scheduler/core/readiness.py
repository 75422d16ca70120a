"""Readiness lookups driven by the 1-5 star pre-session rating."""

from .config import (
    READINESS_LOAD_MODIFIERS,
    READINESS_STARS_MAX,
    READINESS_STARS_MIN,
    TEST_SET_MIN_STARS,
)


def load_modifier(stars: int) -> float:
    """
    Load adjustment for a readiness rating.

    1 star: -10%, 2 stars: -5%, 3-5 stars: 0%. Readiness only ever
    suppresses load. Ratings below 1 are treated as 1, above 5 as 5.
    """
    clamped = min(max(stars, READINESS_STARS_MIN), READINESS_STARS_MAX)
    return READINESS_LOAD_MODIFIERS[clamped]


def allow_test_set(stars: int) -> bool:
    """A rep/load test set is only allowed at peak (5-star) readiness."""
    return stars >= TEST_SET_MIN_STARS
