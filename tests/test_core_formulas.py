"""
Formula-focused unit tests for the training adaptation engine.

Each test pins a specific rule: lift-day counting, anchor clamping,
progression decisions, readiness lookups, warm-up rounding.
Expected values are hand-computed from the rules.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from meso_scheduler.core.config import (
    ANCHOR_DATE_KEY,
    ANCHOR_DAY_NUMBER_KEY,
    DECREASE_PERCENT,
    INCREASE_PERCENT,
    REST_WEEKDAY,
)
from meso_scheduler.core.meso_calendar import (
    MesoCalendar,
    is_lift_day,
    label_from_number,
    lift_day_delta,
    start_of_day,
    training_day_number,
)
from meso_scheduler.core.models import (
    Anchor,
    Decrease,
    Hold,
    Increase,
    SetPerformance,
    TrainingDayLabel,
)
from meso_scheduler.core.progression import decide_adjustment, decide_for, next_load
from meso_scheduler.core.readiness import allow_test_set, load_modifier
from meso_scheduler.core.store import InMemorySettingsStore

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

# 2026-10-12 is a Monday; the rest day (Thursday) that week is 2026-10-15.
MON = date(2026, 10, 12)
TUE = date(2026, 10, 13)
WED = date(2026, 10, 14)
THU = date(2026, 10, 15)
FRI = date(2026, 10, 16)


def _calendar() -> MesoCalendar:
    return MesoCalendar(InMemorySettingsStore())


# ===========================================================================
# Lift days
# ===========================================================================


class TestLiftDays:
    def test_thursday_is_rest(self):
        assert REST_WEEKDAY == 3
        assert THU.weekday() == 3
        assert not is_lift_day(THU)

    @pytest.mark.parametrize("offset", [0, 1, 2, 4, 5, 6])
    def test_other_weekdays_are_lift_days(self, offset):
        assert is_lift_day(MON + timedelta(days=offset))

    def test_start_of_day_from_datetime(self):
        assert start_of_day(datetime(2026, 10, 12, 23, 59, 59)) == MON

    def test_start_of_day_keeps_aware_wall_clock_date(self):
        tz = timezone(timedelta(hours=-8))
        assert start_of_day(datetime(2026, 10, 12, 22, 0, tzinfo=tz)) == MON

    def test_start_of_day_passes_dates_through(self):
        assert start_of_day(MON) == MON


class TestLiftDayDelta:
    def test_same_day_is_zero(self):
        assert lift_day_delta(MON, MON) == 0

    def test_same_rest_day_is_zero(self):
        assert lift_day_delta(THU, THU) == 0

    def test_forward_counts_to_day_inclusive(self):
        # Tue, Wed = 2
        assert lift_day_delta(MON, WED) == 2

    def test_forward_skips_rest_day(self):
        # Tue, Wed, (Thu), Fri = 3
        assert lift_day_delta(MON, FRI) == 3

    def test_forward_onto_rest_day(self):
        # Tue, Wed, (Thu) = 2
        assert lift_day_delta(MON, THU) == 2

    def test_forward_from_rest_day(self):
        assert lift_day_delta(THU, FRI) == 1

    def test_backward_counts_negative(self):
        # Thu is skipped: Wed, Tue, Mon
        assert lift_day_delta(FRI, MON) == -3

    def test_backward_onto_rest_day(self):
        assert lift_day_delta(FRI, THU) == 0

    def test_full_week_is_six_lift_days(self):
        assert lift_day_delta(MON, MON + timedelta(days=7)) == 6
        assert lift_day_delta(MON + timedelta(days=7), MON) == -6

    def test_crosses_year_boundary(self):
        # 2025-12-30 (Tue) → 2026-01-02 (Fri): Wed, (Thu Jan 1), Fri = 2
        assert lift_day_delta(date(2025, 12, 30), date(2026, 1, 2)) == 2

    def test_crosses_dst_boundary(self):
        # US DST starts 2026-03-08; day stepping must not drift.
        # Sat 03-07 → Sat 03-14: one full week = 6 lift days
        assert lift_day_delta(date(2026, 3, 7), date(2026, 3, 14)) == 6

    def test_crosses_leap_day(self):
        # 2028-02-28 (Mon) → 2028-03-01 (Wed): Tue 29th, Wed 1st = 2
        assert lift_day_delta(date(2028, 2, 28), date(2028, 3, 1)) == 2

    def test_monotonic_non_decreasing_forward(self):
        previous = 0
        for offset in range(60):
            current = lift_day_delta(MON, MON + timedelta(days=offset))
            assert current >= previous
            previous = current


# ===========================================================================
# Anchor arithmetic
# ===========================================================================


class TestTrainingDayNumber:
    def test_w2d2_is_day_eight(self):
        assert training_day_number(2, 2) == 8

    def test_w1d1_is_day_one(self):
        assert training_day_number(1, 1) == 1

    def test_week_clamped_to_one(self):
        assert training_day_number(0, 3) == 3
        assert training_day_number(-4, 3) == 3

    def test_day_clamped_to_range(self):
        assert training_day_number(1, 0) == 1
        assert training_day_number(1, 9) == 6

    def test_label_from_number(self):
        assert label_from_number(1) == TrainingDayLabel(1, 1)
        assert label_from_number(6) == TrainingDayLabel(1, 6)
        assert label_from_number(7) == TrainingDayLabel(2, 1)
        assert label_from_number(8) == TrainingDayLabel(2, 2)

    def test_label_from_number_floors_at_one(self):
        assert label_from_number(-5) == TrainingDayLabel(1, 1)

    def test_label_str(self):
        assert str(TrainingDayLabel(3, 4)) == "W3D4"

    def test_anchor_rejects_zero_day_number(self):
        with pytest.raises(ValueError):
            Anchor(anchor_date=MON, training_day_number=0)


class TestMesoCalendar:
    def test_fallback_without_anchor(self):
        cal = _calendar()
        assert cal.anchor() is None
        assert cal.week_day(MON) == TrainingDayLabel(1, 1)
        assert cal.label(MON) == "W1D1"

    def test_set_anchor_then_same_day(self):
        cal = _calendar()
        cal.set_anchor(2, 2, MON)
        assert cal.week_day(MON) == TrainingDayLabel(2, 2)
        assert cal.label(MON) == "W2D2"

    def test_set_anchor_normalizes_datetime(self):
        cal = _calendar()
        cal.set_anchor(2, 2, datetime(2026, 10, 12, 18, 30))
        assert cal.anchor() == Anchor(MON, 8)
        assert cal.label(datetime(2026, 10, 12, 6, 0)) == "W2D2"

    def test_labels_advance_over_lift_days(self):
        cal = _calendar()
        cal.set_anchor(1, 1, MON)
        assert cal.label(TUE) == "W1D2"
        assert cal.label(WED) == "W1D3"
        # Thursday shares Wednesday's label
        assert cal.label(THU) == "W1D3"
        assert cal.label(FRI) == "W1D4"
        # Following Monday: Tue, Wed, Fri, Sat, Sun, Mon = +6 → day 7
        assert cal.label(MON + timedelta(days=7)) == "W2D1"

    def test_labels_before_anchor(self):
        cal = _calendar()
        cal.set_anchor(2, 2, FRI)  # day 8
        assert cal.label(WED) == "W2D1"  # Thu skipped: -1
        assert cal.label(MON) == "W1D5"  # -3

    def test_floor_at_day_one_before_anchor(self):
        cal = _calendar()
        cal.set_anchor(1, 2, FRI)
        assert cal.week_day(FRI - timedelta(days=30)) == TrainingDayLabel(1, 1)

    def test_anchor_on_rest_day(self):
        cal = _calendar()
        cal.set_anchor(1, 3, THU)
        assert cal.label(THU) == "W1D3"
        assert cal.label(FRI) == "W1D4"

    def test_week_day_is_idempotent(self):
        cal = _calendar()
        cal.set_anchor(3, 5, MON)
        target = MON + timedelta(days=40)
        assert cal.week_day(target) == cal.week_day(target)

    def test_set_anchor_overwrites(self):
        cal = _calendar()
        cal.set_anchor(1, 1, MON)
        cal.set_anchor(4, 1, MON)
        assert cal.label(MON) == "W4D1"

    def test_ensure_anchor_does_not_overwrite(self):
        cal = _calendar()
        cal.set_anchor(1, 1, MON)
        cal.ensure_anchor(3, 3, FRI)
        assert cal.label(MON) == "W1D1"
        assert cal.anchor() == Anchor(MON, 1)

    def test_ensure_anchor_sets_when_missing(self):
        cal = _calendar()
        anchor = cal.ensure_anchor(3, 3, FRI)
        assert anchor == Anchor(FRI, 15)
        assert cal.label(FRI) == "W3D3"

    def test_ensure_anchor_sets_when_one_slot_missing(self):
        store = InMemorySettingsStore({ANCHOR_DAY_NUMBER_KEY: 8})
        cal = MesoCalendar(store)
        cal.ensure_anchor(1, 1, MON)
        assert cal.anchor() == Anchor(MON, 1)

    def test_zero_slots_mean_absent(self):
        store = InMemorySettingsStore({ANCHOR_DATE_KEY: 0, ANCHOR_DAY_NUMBER_KEY: 0})
        cal = MesoCalendar(store)
        assert cal.anchor() is None
        assert cal.label(MON) == "W1D1"

    def test_malformed_slots_mean_absent(self):
        store = InMemorySettingsStore({ANCHOR_DATE_KEY: "soon", ANCHOR_DAY_NUMBER_KEY: 8})
        assert MesoCalendar(store).anchor() is None

    def test_slots_written_together(self):
        store = InMemorySettingsStore()
        MesoCalendar(store).set_anchor(2, 2, MON)
        data = store.as_dict()
        assert data[ANCHOR_DAY_NUMBER_KEY] == 8
        assert data[ANCHOR_DATE_KEY] == MON.toordinal()

    def test_epoch_day_anchor_is_stored(self):
        # 1970-01-01 is a Thursday; its slot value must not read back as "absent"
        epoch = date(1970, 1, 1)
        cal = _calendar()
        cal.set_anchor(2, 2, epoch)
        assert cal.anchor() == Anchor(epoch, 8)
        assert cal.label(epoch) == "W2D2"
        # Fri 1970-01-02 is the next lift day
        assert cal.label(date(1970, 1, 2)) == "W2D3"

    def test_ensure_anchor_keeps_epoch_day_anchor(self):
        cal = _calendar()
        cal.set_anchor(2, 2, date(1970, 1, 1))
        cal.ensure_anchor(5, 5, MON)
        assert cal.anchor() == Anchor(date(1970, 1, 1), 8)

    def test_clear_anchor(self):
        cal = _calendar()
        cal.set_anchor(2, 2, MON)
        cal.clear_anchor()
        assert cal.anchor() is None
        assert cal.label(MON) == "W1D1"


# ===========================================================================
# Progression
# ===========================================================================


class TestDecideAdjustment:
    def test_increase_when_all_sets_at_top(self):
        decision = decide_adjustment([12, 12, 12], target_upper=12, rep_drop=0)
        assert isinstance(decision, Increase)
        assert decision.percent == pytest.approx(0.05)

    def test_decrease_on_major_drop(self):
        decision = decide_adjustment([8, 6, 5], target_upper=12, rep_drop=2)
        assert isinstance(decision, Decrease)
        assert decision.percent == pytest.approx(0.05)

    def test_hold_otherwise(self):
        assert decide_adjustment([10, 10, 9], target_upper=12, rep_drop=1) == Hold()

    def test_empty_reps_hold(self):
        assert decide_adjustment([], target_upper=12, rep_drop=0) == Hold()

    def test_above_top_still_increase(self):
        assert decide_adjustment([14, 13, 12], 12, 2) == Increase(INCREASE_PERCENT)

    def test_one_set_short_is_not_increase(self):
        assert decide_adjustment([12, 12, 11], 12, 1) == Hold()

    def test_large_drop_decreases(self):
        assert decide_adjustment([12, 9, 6], 12, 6) == Decrease(DECREASE_PERCENT)

    def test_better_performance_never_worse_decision(self):
        order = {Decrease: 0, Hold: 1, Increase: 2}
        worse = decide_adjustment([10, 9, 8], 12, 2)
        better = decide_adjustment([10, 10, 9], 12, 1)
        best = decide_adjustment([12, 12, 12], 12, 0)
        assert order[type(worse)] <= order[type(better)] <= order[type(best)]

    def test_decide_for_performance(self):
        perf = SetPerformance.from_reps([8, 6, 5], target_upper=12)
        assert perf.rep_drop == 3
        assert decide_for(perf) == Decrease(0.05)

    def test_from_reps_single_set_has_no_drop(self):
        assert SetPerformance.from_reps([10], 12).rep_drop == 0


class TestAdjustmentValues:
    def test_signed_percent(self):
        assert Increase(0.05).signed_percent == pytest.approx(0.05)
        assert Decrease(0.05).signed_percent == pytest.approx(-0.05)
        assert Hold().signed_percent == 0.0

    def test_apply(self):
        assert Increase(0.05).apply(100.0) == pytest.approx(105.0)
        assert Decrease(0.05).apply(100.0) == pytest.approx(95.0)
        assert Hold().apply(100.0) == 100.0

    def test_next_load_without_readiness(self):
        assert next_load(100.0, Increase(0.05)) == pytest.approx(105.0)

    def test_next_load_adds_readiness_modifier(self):
        # 100 * (1 + 0.05 - 0.10)
        assert next_load(100.0, Increase(0.05), stars=1) == pytest.approx(95.0)
        assert next_load(100.0, Hold(), stars=2) == pytest.approx(95.0)
        assert next_load(100.0, Decrease(0.05), stars=5) == pytest.approx(95.0)


# ===========================================================================
# Readiness
# ===========================================================================


class TestReadiness:
    def test_load_modifier_low_stars(self):
        assert load_modifier(1) == pytest.approx(-0.10)
        assert load_modifier(2) == pytest.approx(-0.05)

    def test_load_modifier_neutral(self):
        assert load_modifier(3) == pytest.approx(0.0)
        assert load_modifier(4) == pytest.approx(0.0)
        assert load_modifier(5) == pytest.approx(0.0)

    def test_allow_test_set(self):
        assert allow_test_set(5)
        assert not allow_test_set(4)
        assert not allow_test_set(1)

    def test_out_of_range_follows_nearest_threshold(self):
        assert load_modifier(0) == pytest.approx(-0.10)
        assert load_modifier(-3) == pytest.approx(-0.10)
        assert load_modifier(6) == pytest.approx(0.0)
        assert allow_test_set(6)
        assert not allow_test_set(0)
