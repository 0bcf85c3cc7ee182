"""Adaptive Difficulty Engine

Keeps a learner in a target accuracy band during a practice session.

Algorithm:
- Track rolling accuracy over the last N answers
- Step difficulty one level up or down when accuracy leaves the band
- Select the next exercise weighted toward the current difficulty

All transitions are pure: every call returns a new AdaptiveSessionState.
"""
import math
import random
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Literal, Protocol, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictBool
from pydantic import ValidationError as SchemaError

from core.errors import AppError, Ok, Result, invalid_json, validation_error
from core.logging import adaptive_logger
from languages.types import DifficultyLevel

if TYPE_CHECKING:
    from core.config import Settings

log = adaptive_logger()

DIFFICULTY_LEVELS: tuple[DifficultyLevel, ...] = ("easy", "medium", "hard")

Direction = Literal["up", "down", "none"]

BIAS_STEP = 0.3


@dataclass(frozen=True, slots=True)
class AdaptiveConfig:
    """Tuning for the adaptive engine. Trusted, not validated."""
    window_size: int = 5
    increase_threshold: float = 0.8
    decrease_threshold: float = 0.4
    max_adjustments: int = 3
    warmup_period: int = 3

    @classmethod
    def from_settings(cls, settings: "Settings") -> "AdaptiveConfig":
        return cls(
            window_size=settings.ADAPTIVE_WINDOW_SIZE,
            increase_threshold=settings.ADAPTIVE_INCREASE_THRESHOLD,
            decrease_threshold=settings.ADAPTIVE_DECREASE_THRESHOLD,
            max_adjustments=settings.ADAPTIVE_MAX_ADJUSTMENTS,
            warmup_period=settings.ADAPTIVE_WARMUP_PERIOD,
        )


DEFAULT_ADAPTIVE_CONFIG = AdaptiveConfig()


@dataclass(frozen=True, slots=True)
class DifficultyTransition:
    timestamp: int  # epoch milliseconds
    from_level: DifficultyLevel
    to_level: DifficultyLevel
    reason: str


@dataclass(frozen=True, slots=True)
class AdaptiveSessionState:
    """Per-session adaptive state. Owned and persisted by the caller."""
    recent_answers: tuple[bool, ...] = ()
    difficulty_bias: float = 0.0
    adjustments_made: int = 0
    current_difficulty: DifficultyLevel = "medium"
    difficulty_history: tuple[DifficultyTransition, ...] = ()


@dataclass(frozen=True, slots=True)
class AdjustmentDecision:
    should_adjust: bool
    direction: Direction
    reason: str


def create_adaptive_state(starting_difficulty: DifficultyLevel = "medium") -> AdaptiveSessionState:
    """Create initial adaptive session state."""
    return AdaptiveSessionState(current_difficulty=starting_difficulty)


def calculate_rolling_accuracy(
    answers: Sequence[bool],
    window_size: int = DEFAULT_ADAPTIVE_CONFIG.window_size,
) -> float:
    """Share of correct answers in the trailing window (0.5 when empty)."""
    if not answers:
        return 0.5
    recent = answers[-window_size:]
    return sum(1 for a in recent if a) / len(recent)


def _percent(accuracy: float) -> int:
    # half-up, so 0.625 reads as 63
    return math.floor(accuracy * 100 + 0.5)


def should_adjust_difficulty(
    state: AdaptiveSessionState,
    config: AdaptiveConfig = DEFAULT_ADAPTIVE_CONFIG,
) -> AdjustmentDecision:
    """Decide whether the current difficulty should move.

    Checks run in order: warmup, adjustment cap, boundary, up, down.
    """
    if len(state.recent_answers) < config.warmup_period:
        return AdjustmentDecision(False, "none", "Warmup period")

    if state.adjustments_made >= config.max_adjustments:
        return AdjustmentDecision(False, "none", "Max adjustments reached")

    accuracy = calculate_rolling_accuracy(state.recent_answers, config.window_size)

    if state.current_difficulty == "hard" and accuracy >= config.increase_threshold:
        return AdjustmentDecision(False, "none", "Already at max difficulty")
    if state.current_difficulty == "easy" and accuracy <= config.decrease_threshold:
        return AdjustmentDecision(False, "none", "Already at min difficulty")

    if accuracy >= config.increase_threshold:
        return AdjustmentDecision(True, "up", f"High accuracy ({_percent(accuracy)}%)")
    if accuracy <= config.decrease_threshold:
        return AdjustmentDecision(True, "down", f"Low accuracy ({_percent(accuracy)}%)")

    return AdjustmentDecision(False, "none", "Performance in target range")


def _step(current: DifficultyLevel, direction: Direction) -> DifficultyLevel:
    index = DIFFICULTY_LEVELS.index(current)
    if direction == "up":
        return DIFFICULTY_LEVELS[min(index + 1, len(DIFFICULTY_LEVELS) - 1)]
    return DIFFICULTY_LEVELS[max(index - 1, 0)]


def record_answer(
    state: AdaptiveSessionState,
    correct: bool,
    config: AdaptiveConfig = DEFAULT_ADAPTIVE_CONFIG,
    now: datetime | None = None,
) -> AdaptiveSessionState:
    """Record an answer and adjust difficulty when warranted.

    Args:
        state: Current session state (left untouched)
        correct: Whether the answer was correct
        config: Engine tuning
        now: Transition timestamp, defaults to current UTC time

    Returns:
        New session state
    """
    answers = (*state.recent_answers, bool(correct))[-config.window_size * 2:]
    updated = replace(state, recent_answers=answers)

    decision = should_adjust_difficulty(updated, config)
    if not decision.should_adjust or decision.direction == "none":
        return updated

    new_level = _step(state.current_difficulty, decision.direction)
    timestamp = int((now or datetime.now(timezone.utc)).timestamp() * 1000)

    if decision.direction == "up":
        bias = min(state.difficulty_bias + BIAS_STEP, 1.0)
    else:
        bias = max(state.difficulty_bias - BIAS_STEP, -1.0)

    log.info(
        "difficulty_adjusted",
        from_level=state.current_difficulty,
        to_level=new_level,
        reason=decision.reason,
        adjustments=state.adjustments_made + 1,
    )
    return replace(
        updated,
        current_difficulty=new_level,
        adjustments_made=state.adjustments_made + 1,
        difficulty_bias=bias,
        difficulty_history=(
            *state.difficulty_history,
            DifficultyTransition(timestamp, state.current_difficulty, new_level, decision.reason),
        ),
    )


# =============================================================================
# Exercise selection
# =============================================================================

class RandomSource(Protocol):
    def random(self) -> float: ...


@dataclass(frozen=True, slots=True)
class AdaptiveExercise:
    """Exercise with difficulty metadata."""
    id: str
    difficulty: DifficultyLevel | None = None
    adaptive_pool: tuple[str, ...] = ()


ExerciseT = TypeVar("ExerciseT", bound=AdaptiveExercise)

# target difficulty -> weight per tier
DIFFICULTY_WEIGHTS: dict[DifficultyLevel, dict[DifficultyLevel, float]] = {
    "easy": {"easy": 0.7, "medium": 0.2, "hard": 0.1},
    "medium": {"easy": 0.25, "medium": 0.7, "hard": 0.25},
    "hard": {"easy": 0.1, "medium": 0.2, "hard": 0.7},
}


def select_next_exercise(
    exercises: Sequence[ExerciseT],
    state: AdaptiveSessionState,
    used_ids: Sequence[str] | set[str] | frozenset[str] = (),
    rng: RandomSource | None = None,
) -> ExerciseT | None:
    """Pick the next exercise, weighted toward the current difficulty.

    Each tier contributes its first ceil(len * weight * 3) exercises
    (at most the whole tier) to a pool that is sampled uniformly.
    Exercises without a difficulty count as medium.
    """
    rng = rng or random
    used = set(used_ids)
    available = [e for e in exercises if e.id not in used]
    if not available:
        return None

    tiers: dict[DifficultyLevel, list[ExerciseT]] = {level: [] for level in DIFFICULTY_LEVELS}
    for exercise in available:
        tiers[exercise.difficulty or "medium"].append(exercise)

    weights = DIFFICULTY_WEIGHTS[state.current_difficulty]
    pool: list[ExerciseT] = []
    for level, tier in tiers.items():
        count = math.ceil(round(len(tier) * weights[level] * 3, 9))
        pool.extend(tier[:count])

    if not pool:
        pool = available

    choice = pool[int(rng.random() * len(pool))]
    log.debug(
        "exercise_selected",
        exercise_id=choice.id,
        target=state.current_difficulty,
        available=len(available),
        pool=len(pool),
    )
    return choice


def get_difficulty_label(difficulty: DifficultyLevel) -> str:
    return {"easy": "Beginner", "medium": "Intermediate", "hard": "Advanced"}[difficulty]


def get_difficulty_color(difficulty: DifficultyLevel) -> str:
    """Hex color for UI badges (green, amber, red)."""
    return {"easy": "#22c55e", "medium": "#f59e0b", "hard": "#ef4444"}[difficulty]


# =============================================================================
# Persistence helpers
# =============================================================================

class _TransitionRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    timestamp: int
    from_level: DifficultyLevel = Field(alias="from")
    to_level: DifficultyLevel = Field(alias="to")
    reason: str


class _StateRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    recent_answers: list[StrictBool] = Field(alias="recentAnswers")
    difficulty_bias: float = Field(alias="difficultyBias")
    adjustments_made: int = Field(alias="adjustmentsMade")
    current_difficulty: DifficultyLevel = Field(alias="currentDifficulty")
    difficulty_history: list[_TransitionRecord] = Field(alias="difficultyHistory")


def serialize_adaptive_state(state: AdaptiveSessionState) -> str:
    """Serialize state as camelCase JSON for the session store."""
    record = _StateRecord(
        recent_answers=list(state.recent_answers),
        difficulty_bias=state.difficulty_bias,
        adjustments_made=state.adjustments_made,
        current_difficulty=state.current_difficulty,
        difficulty_history=[
            _TransitionRecord(
                timestamp=t.timestamp,
                from_level=t.from_level,
                to_level=t.to_level,
                reason=t.reason,
            )
            for t in state.difficulty_history
        ],
    )
    return record.model_dump_json(by_alias=True)


def deserialize_adaptive_state_result(serialized: str) -> Result[AdaptiveSessionState, AppError]:
    """Parse stored state.

    Returns:
        Ok(AdaptiveSessionState) on success
        Err(AppError) with E2021 for malformed JSON, E2000 for a bad shape
    """
    try:
        record = _StateRecord.model_validate_json(serialized)
    except SchemaError as e:
        if any(err["type"] == "json_invalid" for err in e.errors()):
            return invalid_json(str(e.errors()[0]["msg"]), origin="adaptive_engine", cause=e)
        return validation_error(
            "Invalid adaptive session state",
            field=".".join(str(p) for p in e.errors()[0]["loc"]),
            origin="adaptive_engine",
            cause=e,
        )

    return Ok(AdaptiveSessionState(
        recent_answers=tuple(record.recent_answers),
        difficulty_bias=record.difficulty_bias,
        adjustments_made=record.adjustments_made,
        current_difficulty=record.current_difficulty,
        difficulty_history=tuple(
            DifficultyTransition(t.timestamp, t.from_level, t.to_level, t.reason)
            for t in record.difficulty_history
        ),
    ))


def deserialize_adaptive_state(serialized: str) -> AdaptiveSessionState | None:
    """Parse stored state, or None when it cannot be read."""
    result = deserialize_adaptive_state_result(serialized)
    if result.is_err():
        log.warning("adaptive_state_unreadable", error=str(result.unwrap_err()))
        return None
    return result.unwrap()
