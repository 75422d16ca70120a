"""Pure decision logic: calendar, progression, readiness, warm-up."""

from .meso_calendar import MesoCalendar
from .progression import decide_adjustment
from .progression_engine import suggest_next
from .readiness import allow_test_set, load_modifier

__all__ = [
    "MesoCalendar",
    "allow_test_set",
    "decide_adjustment",
    "load_modifier",
    "suggest_next",
]
