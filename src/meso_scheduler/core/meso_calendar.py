"""
Mesocycle calendar: maps calendar dates to W{week}D{day} labels.

A mesocycle is a run of 6-day lift microcycles with one fixed rest weekday
(Thursday). The position of every date is derived from a single anchor: a
known date paired with its training-day number. Only lift days advance the
training-day number.
"""

import logging
from datetime import date, datetime, timedelta

from .config import (
    ANCHOR_DATE_KEY,
    ANCHOR_DAY_NUMBER_KEY,
    FALLBACK_DAY,
    FALLBACK_WEEK,
    LIFT_DAYS_PER_WEEK,
    REST_WEEKDAY,
)
from .models import Anchor, TrainingDayLabel
from .store import SettingsStore

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


def start_of_day(value: date | datetime) -> date:
    """
    Normalize a date or datetime to its calendar day.

    Aware datetimes keep their own wall-clock date; no timezone conversion
    is applied.
    """
    if isinstance(value, datetime):
        return value.date()
    return value


def is_lift_day(day: date) -> bool:
    """Every weekday except the rest weekday is a lift day."""
    return day.weekday() != REST_WEEKDAY


def lift_day_delta(from_day: date, to_day: date) -> int:
    """
    Count lift days between two calendar days.

    Steps one calendar day at a time from `from_day` towards `to_day`,
    counting each stepped-to lift day (`to_day` included, `from_day`
    excluded). Positive when `to_day` is later, negative when earlier.
    """
    if from_day == to_day:
        return 0

    count = 0
    cur = from_day
    if to_day > from_day:
        while cur < to_day:
            cur += ONE_DAY
            if is_lift_day(cur):
                count += 1
    else:
        while cur > to_day:
            cur -= ONE_DAY
            if is_lift_day(cur):
                count -= 1
    return count


def training_day_number(week: int, day: int) -> int:
    """Convert a clamped (week, day) pair to its 1-based training-day number."""
    week = max(1, week)
    day = min(max(1, day), LIFT_DAYS_PER_WEEK)
    return (week - 1) * LIFT_DAYS_PER_WEEK + day


def label_from_number(number: int) -> TrainingDayLabel:
    """Convert a training-day number (floored at 1) to a (week, day) label."""
    number = max(1, number)
    return TrainingDayLabel(
        week=(number - 1) // LIFT_DAYS_PER_WEEK + 1,
        day=(number - 1) % LIFT_DAYS_PER_WEEK + 1,
    )


class MesoCalendar:
    """
    Calendar anchor tracker.

    The anchor lives in an injected SettingsStore under two slots: the
    anchor day as a proleptic ordinal (`date.toordinal()`, always >= 1)
    and its training-day number. A missing, None or zero slot means
    "not anchored".
    """

    def __init__(self, store: SettingsStore):
        self.store = store

    def anchor(self) -> Anchor | None:
        """Return the stored anchor, or None if either slot is absent."""
        raw_day = self.store.get(ANCHOR_DATE_KEY)
        raw_num = self.store.get(ANCHOR_DAY_NUMBER_KEY)
        try:
            ordinal = int(raw_day) if raw_day is not None else 0
            number = int(raw_num) if raw_num is not None else 0
            if ordinal <= 0 or number <= 0:
                return None
            anchor_date = date.fromordinal(ordinal)
        except (TypeError, ValueError, OverflowError):
            logger.debug("Ignoring malformed anchor slots: %r, %r", raw_day, raw_num)
            return None
        return Anchor(anchor_date=anchor_date, training_day_number=number)

    def set_anchor(self, week: int, day: int, on: date | datetime) -> Anchor:
        """
        Declare that `on` is training day W{week}D{day}.

        week is clamped to >= 1 and day to [1, 6]. Overwrites any existing
        anchor; both slots are written in one update.

        Example: set_anchor(2, 2, today) makes today W2D2 (day number 8).
        """
        anchor = Anchor(
            anchor_date=start_of_day(on),
            training_day_number=training_day_number(week, day),
        )
        self.store.set_many({
            ANCHOR_DATE_KEY: anchor.anchor_date.toordinal(),
            ANCHOR_DAY_NUMBER_KEY: anchor.training_day_number,
        })
        logger.debug(
            "Anchored %s as training day %d", anchor.anchor_date, anchor.training_day_number
        )
        return anchor

    def ensure_anchor(self, week: int, day: int, on: date | datetime) -> Anchor:
        """Set the anchor only if none is stored; return the effective anchor."""
        existing = self.anchor()
        if existing is not None:
            return existing
        return self.set_anchor(week, day, on)

    def clear_anchor(self) -> None:
        """Remove both anchor slots."""
        self.store.delete_many([ANCHOR_DATE_KEY, ANCHOR_DAY_NUMBER_KEY])

    def week_day(self, on: date | datetime) -> TrainingDayLabel:
        """
        Return the (week, day) label for a date.

        Falls back to W1D1 when not anchored. Dates far enough before the
        anchor floor at training day 1.
        """
        anchor = self.anchor()
        if anchor is None:
            return TrainingDayLabel(FALLBACK_WEEK, FALLBACK_DAY)

        delta = lift_day_delta(anchor.anchor_date, start_of_day(on))
        return label_from_number(anchor.training_day_number + delta)

    def label(self, on: date | datetime) -> str:
        """Format the label for a date as W{week}D{day}."""
        return str(self.week_day(on))
