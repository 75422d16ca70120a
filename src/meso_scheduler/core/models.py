"""
Data models for meso-scheduler.

Value types passed into and returned from the adaptation engine. All of
them are immutable; the engine never holds references between calls.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Sequence, Union

from .config import ROUNDING_STEPS


@dataclass(frozen=True)
class Anchor:
    """
    A known date paired with its training-day number.

    training_day_number counts lift days from the start of the mesocycle
    (W1D1 = 1, W2D2 = 8).
    """

    anchor_date: date
    training_day_number: int

    def __post_init__(self) -> None:
        if self.training_day_number < 1:
            raise ValueError("training_day_number must be >= 1")


@dataclass(frozen=True)
class TrainingDayLabel:
    """Mesocycle position of a calendar date."""

    week: int
    day: int

    def __str__(self) -> str:
        return f"W{self.week}D{self.day}"


@dataclass(frozen=True)
class SetPerformance:
    """
    Rep counts completed across the working sets of one exercise.

    rep_drop is the fatigue signal, normally first set minus last set.
    """

    actual_reps: tuple[int, ...]
    target_upper: int
    rep_drop: int = 0

    @classmethod
    def from_reps(cls, reps: Sequence[int], target_upper: int) -> "SetPerformance":
        """Build a performance record, deriving rep_drop from first and last set."""
        reps = tuple(reps)
        rep_drop = reps[0] - reps[-1] if len(reps) >= 2 else 0
        return cls(actual_reps=reps, target_upper=target_upper, rep_drop=rep_drop)


# =============================================================================
# Adjustment decision (closed set of outcomes)
# =============================================================================


@dataclass(frozen=True)
class Increase:
    """Raise load by `percent` of the current load next session."""

    percent: float

    @property
    def signed_percent(self) -> float:
        return self.percent

    def apply(self, load: float) -> float:
        return load * (1 + self.signed_percent)

    def __str__(self) -> str:
        return f"increase {self.percent:.0%}"


@dataclass(frozen=True)
class Decrease:
    """Lower load by `percent` of the current load next session."""

    percent: float

    @property
    def signed_percent(self) -> float:
        return -self.percent

    def apply(self, load: float) -> float:
        return load * (1 + self.signed_percent)

    def __str__(self) -> str:
        return f"decrease {self.percent:.0%}"


@dataclass(frozen=True)
class Hold:
    """Keep the current load."""

    @property
    def signed_percent(self) -> float:
        return 0.0

    def apply(self, load: float) -> float:
        return load

    def __str__(self) -> str:
        return "hold"


AdjustmentDecision = Union[Increase, Decrease, Hold]


# =============================================================================
# Warm-up
# =============================================================================


class RoundingPolicy(str, Enum):
    """How planned loads are rounded for the equipment in use."""

    BARBELL = "barbell"
    DUMBBELL = "dumbbell"
    MACHINE = "machine"  # pin/cable stacks

    @property
    def step(self) -> float:
        return ROUNDING_STEPS[self.value]


@dataclass(frozen=True)
class WarmupStep:
    """
    One line of the warm-up card.

    load_text is either a formatted load ("45", "47.5") or percentage
    guidance ("~50%"); it is None for steps without a load.
    """

    label: str
    load_text: str | None = None
    reps_text: str | None = None
    note: str | None = None

    def __str__(self) -> str:
        text = self.label
        if self.load_text is not None:
            text = f"{text}: {self.load_text}"
        if self.reps_text is not None:
            text = f"{text} ×{self.reps_text}"
        if self.note is not None:
            text = f"{text} ({self.note})"
        return text


@dataclass(frozen=True)
class WarmupPlan:
    """Full warm-up: general base, movement primer, and ramp sets."""

    base: tuple[str, ...]
    primer: tuple[str, ...]
    ramp: tuple[WarmupStep, ...]
    notes: tuple[str, ...] = field(default_factory=tuple)

    def ramp_lines(self) -> list[str]:
        return [str(step) for step in self.ramp]


@dataclass(frozen=True)
class RepRange:
    """Allowed rep range for an exercise."""

    min: int
    max: int

    def __post_init__(self) -> None:
        if self.min < 1 or self.max < self.min:
            raise ValueError(f"Invalid rep range {self.min}-{self.max}")


# =============================================================================
# Progression engine (load + set count)
# =============================================================================


@dataclass(frozen=True)
class SetSnapshot:
    """One logged working set: load, completed reps, and RIR if logged."""

    load: float
    reps: int
    rir: float | None = None


class MesoPhase(str, Enum):
    """Position within the mesocycle; shifts the target RIR."""

    EARLY = "early"
    MID = "mid"
    LATE = "late"
    DELOAD = "deload"


class ExerciseCluster(str, Enum):
    """How an exercise is treated by the progression engine."""

    PRIMARY_CHEST_PRESS = "primary_chest_press"  # bench, main incline
    SECONDARY_PRESS_OR_ARMS = "secondary_press_or_arms"  # machine press, dips
    PRIMARY_LEG = "primary_leg"  # hack squat, leg press
    PUMP_ISOLATION = "pump_isolation"  # flys, curls, raises, calves
    LOW_BACK_STABILITY = "low_back_stability"  # pull-throughs, back ext, carries


@dataclass(frozen=True)
class ProgressionConfig:
    """
    How an exercise (or cluster) should progress.

    base_target_rir applies to the early phase; later phases adjust it.
    primary_load_increment is the jump after a strong session,
    secondary_load_increment the step used when backing off.
    """

    rep_range: RepRange
    base_target_rir: float
    primary_load_increment: float
    secondary_load_increment: float
    min_sets: int
    max_sets: int
    allow_set_increase: bool
    allow_load_decrease: bool
    is_low_back_or_stability: bool = False


class ProgressionAction(str, Enum):
    INCREASE_LOAD = "Increase Load"
    HOLD_LOAD = "Hold Load"
    REDUCE_LOAD = "Reduce Load"
    REDUCE_SETS = "Reduce Sets"
    DELOAD = "Deload"


@dataclass(frozen=True)
class ProgressionDecision:
    """Suggested load and set count for the next session, with reasons."""

    next_load: float
    next_sets: int
    action: ProgressionAction
    notes: tuple[str, ...] = field(default_factory=tuple)
