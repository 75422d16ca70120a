"""
RIR-aware progression engine: next load and set count per exercise.

Complements `progression.decide_adjustment` (percentage load change from
reps alone). This engine reads the last session's sets with their RIR,
the exercise's cluster profile and the meso phase, and suggests an
absolute next load, a set count and an action label with notes.

Rules, in order:
1. No sets → hold, pick a starting load
2. Deload phase → drop load by the small increment and one set
3. Low-back / stability profile → hold, or back off when RIR or reps slip
4. Top of rep range with RIR above target → add load (and maybe a set)
5. In range, RIR near target → hold
6. In range, RIR below target → drop a set
7. Below range or RIR far below target → reduce load (or sets)
8. Otherwise → hold
"""

from typing import Iterable, Sequence

from .config import (
    ADD_SET_RIR_MARGIN,
    DELOAD_RIR_RISE,
    EARLY_PHASE_WEEKS,
    LATE_PHASE_RIR_DROP,
    LATE_PHASE_RIR_FLOOR,
    LATE_PHASE_WEEKS,
    MID_PHASE_RIR_DROP,
    MID_PHASE_RIR_FLOOR,
    MID_PHASE_WEEKS,
    ON_TARGET_RIR_BAND,
    STRONG_RIR_MARGIN,
    VERY_LOW_RIR_MARGIN,
)
from .models import (
    ExerciseCluster,
    MesoPhase,
    ProgressionAction,
    ProgressionConfig,
    ProgressionDecision,
    RepRange,
    SetSnapshot,
)

# Cluster profiles for the 11-week chest/arms/low-back block.
CLUSTER_CONFIGS: dict[ExerciseCluster, ProgressionConfig] = {
    ExerciseCluster.PRIMARY_CHEST_PRESS: ProgressionConfig(
        rep_range=RepRange(6, 10),
        base_target_rir=2.5,
        primary_load_increment=5.0,
        secondary_load_increment=2.5,
        min_sets=3,
        max_sets=4,
        allow_set_increase=True,
        allow_load_decrease=True,
    ),
    ExerciseCluster.SECONDARY_PRESS_OR_ARMS: ProgressionConfig(
        rep_range=RepRange(8, 12),
        base_target_rir=2.5,
        primary_load_increment=5.0,
        secondary_load_increment=2.5,
        min_sets=2,
        max_sets=4,
        allow_set_increase=True,
        allow_load_decrease=True,
    ),
    ExerciseCluster.PRIMARY_LEG: ProgressionConfig(
        rep_range=RepRange(8, 12),
        base_target_rir=2.5,
        primary_load_increment=10.0,
        secondary_load_increment=5.0,
        min_sets=3,
        max_sets=4,
        allow_set_increase=False,  # volume already high
        allow_load_decrease=True,
    ),
    ExerciseCluster.PUMP_ISOLATION: ProgressionConfig(
        rep_range=RepRange(10, 15),
        base_target_rir=2.5,
        primary_load_increment=2.5,
        secondary_load_increment=1.0,
        min_sets=2,
        max_sets=4,
        allow_set_increase=True,
        allow_load_decrease=True,
    ),
    ExerciseCluster.LOW_BACK_STABILITY: ProgressionConfig(
        rep_range=RepRange(8, 15),
        base_target_rir=3.0,
        primary_load_increment=0.0,  # never chases load
        secondary_load_increment=2.5,
        min_sets=2,
        max_sets=3,
        allow_set_increase=False,
        allow_load_decrease=True,
        is_low_back_or_stability=True,
    ),
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def adjusted_target_rir(phase: MesoPhase, base: float) -> float:
    """
    Effective target RIR for a meso phase.

    early: base; mid: base - 0.3 (floor 1.5); late: base - 1.0 (floor 1.0);
    deload: base + 1.0.
    """
    if phase == MesoPhase.MID:
        return max(MID_PHASE_RIR_FLOOR, base - MID_PHASE_RIR_DROP)
    if phase == MesoPhase.LATE:
        return max(LATE_PHASE_RIR_FLOOR, base - LATE_PHASE_RIR_DROP)
    if phase == MesoPhase.DELOAD:
        return base + DELOAD_RIR_RISE
    return base


def average_rir(sets: Iterable[SetSnapshot]) -> float | None:
    """Mean RIR over the sets that logged one; None if none did."""
    values = [s.rir for s in sets if s.rir is not None]
    if not values:
        return None
    return sum(values) / len(values)


def best_performance_set(sets: Sequence[SetSnapshot]) -> SetSnapshot:
    """Heaviest set, ties broken by most reps (first one wins a full tie)."""
    return max(sets, key=lambda s: (s.load, s.reps))


def _fmt(value: float) -> str:
    return f"{value:.1f}"


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


def suggest_next(
    history: Sequence[SetSnapshot],
    current_sets: int,
    config: ProgressionConfig,
    phase: MesoPhase,
) -> ProgressionDecision:
    """
    Suggest the next session's load and set count for one exercise.

    Args:
        history: Working sets from the most recent session, in order
        current_sets: Working sets just performed
        config: Progression profile of the exercise
        phase: Current meso phase

    Returns:
        ProgressionDecision; the base load is the last set's load
    """
    rep_range = config.rep_range

    if not history:
        return ProgressionDecision(
            next_load=0.0,
            next_sets=max(config.min_sets, current_sets),
            action=ProgressionAction.HOLD_LOAD,
            notes=(
                "No prior data: pick a confident starting load and stay within "
                f"{rep_range.min}–{rep_range.max} reps.",
            ),
        )

    target = adjusted_target_rir(phase, config.base_target_rir)
    avg = average_rir(history)
    best = best_performance_set(history)
    current_load = history[-1].load

    if phase == MesoPhase.DELOAD:
        return ProgressionDecision(
            next_load=max(0.0, current_load - config.secondary_load_increment),
            next_sets=max(config.min_sets, current_sets - 1),
            action=ProgressionAction.DELOAD,
            notes=("Deload phase: reduce load and sets regardless of performance.",),
        )

    if config.is_low_back_or_stability:
        sets = min(current_sets, config.max_sets)
        # Without logged RIR the reps alone never trigger a back-off here
        slipped = avg is not None and (
            avg < target - ON_TARGET_RIR_BAND or best.reps < rep_range.min
        )
        if slipped:
            if config.allow_load_decrease:
                return ProgressionDecision(
                    next_load=max(0.0, current_load - config.secondary_load_increment),
                    next_sets=sets,
                    action=ProgressionAction.REDUCE_LOAD,
                    notes=("Low-back / stability day: prioritize control. "
                           "A slight load reduction is fine.",),
                )
            return ProgressionDecision(
                next_load=current_load,
                next_sets=sets,
                action=ProgressionAction.HOLD_LOAD,
                notes=("Low-back / stability day: prioritize control.",),
            )
        return ProgressionDecision(
            next_load=current_load,
            next_sets=sets,
            action=ProgressionAction.HOLD_LOAD,
            notes=(
                f"Low-back / stability day: hold load, keep reps in "
                f"{rep_range.min}–{rep_range.max} with {_fmt(target)} RIR.",
            ),
        )

    # Missing RIR counts as on target
    rir = avg if avg is not None else target
    in_range = rep_range.min <= best.reps <= rep_range.max

    if best.reps >= rep_range.max and rir >= target + STRONG_RIR_MARGIN:
        add_set = (
            config.allow_set_increase
            and current_sets < config.max_sets
            and rir >= target + ADD_SET_RIR_MARGIN
        )
        next_sets = current_sets + 1 if add_set else current_sets
        return ProgressionDecision(
            next_load=current_load + config.primary_load_increment,
            next_sets=next_sets,
            action=ProgressionAction.INCREASE_LOAD,
            notes=(
                f"Strong performance: top of rep range with RIR ~{_fmt(rir)} "
                f"(target {_fmt(target)}).",
                f"Increase load by {config.primary_load_increment:g}.",
                "Add one set." if add_set else "Keep set count the same.",
            ),
        )

    if in_range and abs(rir - target) <= ON_TARGET_RIR_BAND:
        return ProgressionDecision(
            next_load=current_load,
            next_sets=current_sets,
            action=ProgressionAction.HOLD_LOAD,
            notes=("Solid session: reps in range and RIR close to target. "
                   "Hold load and repeat.",),
        )

    if in_range and rir < target - ON_TARGET_RIR_BAND:
        drop_set = current_sets > config.min_sets
        return ProgressionDecision(
            next_load=current_load,
            next_sets=current_sets - 1 if drop_set else current_sets,
            action=ProgressionAction.REDUCE_SETS if drop_set else ProgressionAction.HOLD_LOAD,
            notes=(
                f"Session was harder than planned (RIR ~{_fmt(rir)} vs target {_fmt(target)}).",
                "Reduce one set next time to manage fatigue." if drop_set
                else "Keep sets the same but watch fatigue.",
            ),
        )

    if best.reps < rep_range.min or rir < target - VERY_LOW_RIR_MARGIN:
        fewer_sets = max(config.min_sets, current_sets - 1)
        if config.allow_load_decrease:
            return ProgressionDecision(
                next_load=max(0.0, current_load - config.secondary_load_increment),
                next_sets=fewer_sets,
                action=ProgressionAction.REDUCE_LOAD,
                notes=(
                    f"Performance dropped (reps < {rep_range.min} or RIR well below target).",
                    "Reduce load slightly and consider one fewer set.",
                ),
            )
        return ProgressionDecision(
            next_load=current_load,
            next_sets=fewer_sets,
            action=ProgressionAction.REDUCE_SETS,
            notes=(
                "Performance dropped but load reduction is disabled for this movement.",
                "Reduce set count to manage fatigue.",
            ),
        )

    return ProgressionDecision(
        next_load=current_load,
        next_sets=current_sets,
        action=ProgressionAction.HOLD_LOAD,
        notes=("Mixed signals: hold load and sets, gather more data next session.",),
    )


# ---------------------------------------------------------------------------
# Meso profile
# ---------------------------------------------------------------------------


def phase_for_week(week: int) -> MesoPhase:
    """
    Map a 1-based meso week to its phase.

    Weeks 1–3 early, 4–6 mid, 7–10 late; week 11 and anything outside
    1–10 (including 0 or negative) is deload.
    """
    if week in EARLY_PHASE_WEEKS:
        return MesoPhase.EARLY
    if week in MID_PHASE_WEEKS:
        return MesoPhase.MID
    if week in LATE_PHASE_WEEKS:
        return MesoPhase.LATE
    return MesoPhase.DELOAD


def config_for(cluster: ExerciseCluster) -> ProgressionConfig:
    """Progression profile for an exercise cluster."""
    return CLUSTER_CONFIGS[cluster]


def snapshots_from_logged(
    reps: Sequence[int],
    loads: Sequence[float],
    rirs: Sequence[float | None],
) -> list[SetSnapshot]:
    """
    Build snapshots from parallel per-set logs.

    Lists are truncated to the shortest one; sets without both reps and
    load (> 0) are skipped as half-logged.
    """
    return [
        SetSnapshot(load=float(load), reps=int(rep), rir=None if rir is None else float(rir))
        for rep, load, rir in zip(reps, loads, rirs)
        if rep > 0 and load > 0
    ]


def suggest_for_week(
    snapshots: Sequence[SetSnapshot],
    current_sets: int,
    week: int,
    cluster: ExerciseCluster,
) -> ProgressionDecision | None:
    """Run the engine with the week's phase and the cluster's profile; None without sets."""
    if not snapshots:
        return None
    return suggest_next(snapshots, current_sets, config_for(cluster), phase_for_week(week))
