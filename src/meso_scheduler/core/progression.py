"""
Progression rules: decide the next session's load from set performance.

Simplified three-to-grow logic: all working sets at the top of the rep
range earns a load increase, a major rep drop across sets costs a load
decrease, anything else holds.
"""

from typing import Sequence

from .config import DECREASE_PERCENT, INCREASE_PERCENT, MAJOR_REP_DROP
from .models import AdjustmentDecision, Decrease, Hold, Increase, SetPerformance
from .readiness import load_modifier


def decide_adjustment(
    actual_reps: Sequence[int],
    target_upper: int,
    rep_drop: int,
) -> AdjustmentDecision:
    """
    Decide how load should change for the next session.

    Rules, in order:
    1. No sets logged → Hold
    2. Every set reached target_upper → Increase(5%)
    3. rep_drop >= 2 → Decrease(5%)
    4. Otherwise → Hold

    Args:
        actual_reps: Reps completed in each working set, in order
        target_upper: Top of the prescribed rep range
        rep_drop: Fatigue signal, normally first set minus last set

    Returns:
        Increase, Decrease or Hold
    """
    if not actual_reps:
        return Hold()

    if all(reps >= target_upper for reps in actual_reps):
        return Increase(INCREASE_PERCENT)

    if rep_drop >= MAJOR_REP_DROP:
        return Decrease(DECREASE_PERCENT)

    return Hold()


def decide_for(performance: SetPerformance) -> AdjustmentDecision:
    """Decide the adjustment for a SetPerformance record."""
    return decide_adjustment(
        performance.actual_reps,
        performance.target_upper,
        performance.rep_drop,
    )


def next_load(load: float, decision: AdjustmentDecision, stars: int | None = None) -> float:
    """
    Compose a progression decision with the readiness modifier.

    The two percentages are added: 100 kg with Increase(5%) on a 2-star
    day gives 100 * (1 + 0.05 - 0.05) = 100 kg.

    Args:
        load: Load used this session
        decision: Output of decide_adjustment
        stars: Readiness rating for the coming session, if known

    Returns:
        Unrounded load for the next session
    """
    modifier = load_modifier(stars) if stars is not None else 0.0
    return load * (1 + decision.signed_percent + modifier)
