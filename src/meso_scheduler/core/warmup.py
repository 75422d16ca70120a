"""
Warm-up card: general base, movement primer, and ramp sets for the first lift.

Ramp loads are fractions of the planned top load, rounded to what the
equipment allows. Without a planned load the ramp falls back to
percentage guidance.
"""

import math

from .config import (
    BASE_WARMUP_STEPS,
    CRANKY_JOINT_FRACTION,
    CRANKY_JOINT_GUIDANCE,
    CRANKY_JOINT_REPS,
    RAMP_REST_NOTE,
    RAMP_TIERS,
)
from .models import RoundingPolicy, WarmupPlan, WarmupStep

CRANKY_JOINT_NOTE = "cranky-joint rule"
WORKING_SETS_LABEL = "→ then working sets"


def round_load(value: float, policy: RoundingPolicy) -> float:
    """
    Round a load to the nearest multiple of the policy step.

    Ties round up: 47.5 → 50 on a barbell, 46.25 → 47.5 on dumbbells.
    """
    step = policy.step
    return math.floor(value / step + 0.5) * step


def format_load(value: float) -> str:
    """Render whole loads without a decimal point, others with one decimal place."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.1f}"


def ramp_steps(
    top_load: float | None,
    policy: RoundingPolicy,
    cranky_joint: bool = False,
) -> list[WarmupStep]:
    """
    Build the ramp sets leading into the first working set.

    Args:
        top_load: Planned working load; None or <= 0 gives percentage guidance
        policy: Rounding policy for the equipment
        cranky_joint: Prepend an extra very light ramp

    Returns:
        Ordered ramp steps ending with the working-set line
    """
    steps: list[WarmupStep] = []

    if top_load is None or top_load <= 0:
        if cranky_joint:
            steps.append(WarmupStep(
                "Extra light ramp", CRANKY_JOINT_GUIDANCE, CRANKY_JOINT_REPS, CRANKY_JOINT_NOTE
            ))
        for label, fraction, reps in RAMP_TIERS:
            steps.append(WarmupStep(label, f"~{fraction:.0%}", reps))
        steps.append(WarmupStep(WORKING_SETS_LABEL))
        return steps

    if cranky_joint:
        light = format_load(round_load(top_load * CRANKY_JOINT_FRACTION, policy))
        steps.append(WarmupStep("Extra light ramp", light, CRANKY_JOINT_REPS, CRANKY_JOINT_NOTE))

    for label, fraction, reps in RAMP_TIERS:
        steps.append(WarmupStep(label, format_load(round_load(top_load * fraction, policy)), reps))

    working = format_load(round_load(top_load, policy))
    steps.append(WarmupStep(f"{WORKING_SETS_LABEL} @ {working}"))
    return steps


def base_steps() -> list[str]:
    """General warm-up done before every session."""
    return list(BASE_WARMUP_STEPS)


def primer_steps(exercise_name: str) -> list[str]:
    """Movement primer for the session's first exercise, matched by name keywords."""
    n = exercise_name.lower()

    if "bench" in n or "press" in n:
        return ["Cable/Band external rotations ×12/side (or light face pulls ×12)"]

    if "pulldown" in n or "pull down" in n:
        return ["Straight-arm pulldown (light) ×12 — shoulders down, lats on"]

    if "hack" in n and "squat" in n:
        return ["Ankle rocks ×10/side", "Glute bridge ×10 — knees track, hips online"]

    if "rdl" in n or "romanian" in n:
        return ["Hamstring floss ×8/side", "Hip hinge drill ×8 — brace + neutral spine"]

    return ["Do 1 light “patterning” set of the first lift ×10 (very easy)"]


def build_warmup_plan(
    exercise_name: str,
    top_load: float | None,
    policy: RoundingPolicy,
    cranky_joint: bool = False,
) -> WarmupPlan:
    """Assemble the full warm-up card for a session's first exercise."""
    return WarmupPlan(
        base=tuple(base_steps()),
        primer=tuple(primer_steps(exercise_name)),
        ramp=tuple(ramp_steps(top_load, policy, cranky_joint)),
        notes=(RAMP_REST_NOTE,),
    )
