"""Tests for the adaptive difficulty engine."""
import json
from datetime import datetime, timezone

import pytest

from core.config import Settings
from core.errors import ErrorCode
from engines.adaptive import (
    DEFAULT_ADAPTIVE_CONFIG,
    AdaptiveConfig,
    AdaptiveExercise,
    AdaptiveSessionState,
    DifficultyTransition,
    calculate_rolling_accuracy,
    create_adaptive_state,
    deserialize_adaptive_state,
    deserialize_adaptive_state_result,
    get_difficulty_color,
    get_difficulty_label,
    record_answer,
    select_next_exercise,
    serialize_adaptive_state,
    should_adjust_difficulty,
)

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def play(state, answers, config=DEFAULT_ADAPTIVE_CONFIG):
    for correct in answers:
        state = record_answer(state, correct, config, now=NOW)
    return state


class TestRollingAccuracy:
    def test_empty_history_is_neutral(self):
        assert calculate_rolling_accuracy([], 5) == 0.5

    def test_window_of_five(self):
        assert calculate_rolling_accuracy([True, True, True, True, False], 5) == 0.8

    def test_only_trailing_window_counts(self):
        assert calculate_rolling_accuracy([False] * 20 + [True] * 5, 5) == 1.0

    def test_short_history(self):
        assert calculate_rolling_accuracy([True, False], 5) == 0.5


class TestShouldAdjust:
    def state(self, answers, level="medium", adjustments=0):
        return AdaptiveSessionState(
            recent_answers=tuple(answers), adjustments_made=adjustments, current_difficulty=level,
        )

    def test_warmup(self):
        decision = should_adjust_difficulty(self.state([True, True]))
        assert (decision.should_adjust, decision.direction, decision.reason) == (False, "none", "Warmup period")

    def test_max_adjustments_precede_accuracy(self):
        decision = should_adjust_difficulty(self.state([True] * 5, adjustments=3))
        assert decision.reason == "Max adjustments reached"

    def test_boundaries(self):
        assert should_adjust_difficulty(self.state([True] * 5, "hard")).reason == "Already at max difficulty"
        assert should_adjust_difficulty(self.state([False] * 5, "easy")).reason == "Already at min difficulty"

    def test_up(self):
        decision = should_adjust_difficulty(self.state([True, True, True, True, False]))
        assert decision.should_adjust and decision.direction == "up"
        assert decision.reason == "High accuracy (80%)"

    def test_down(self):
        decision = should_adjust_difficulty(self.state([True, True, False, False, False]))
        assert decision.direction == "down"
        assert decision.reason == "Low accuracy (40%)"

    def test_target_range(self):
        decision = should_adjust_difficulty(self.state([True, True, False]))
        assert not decision.should_adjust
        assert decision.reason == "Performance in target range"

    def test_easy_can_still_move_up(self):
        assert should_adjust_difficulty(self.state([True] * 3, "easy")).direction == "up"

    def test_overlapping_thresholds_prefer_up(self):
        config = AdaptiveConfig(increase_threshold=0.3, decrease_threshold=0.6)
        decision = should_adjust_difficulty(self.state([True, False, True, False]), config)
        assert (decision.should_adjust, decision.direction) == (True, "up")
        assert decision.reason == "High accuracy (50%)"

    def test_overlapping_thresholds_at_boundaries(self):
        config = AdaptiveConfig(increase_threshold=0.3, decrease_threshold=0.6)
        answers = [True, False, True, False]
        easy = should_adjust_difficulty(self.state(answers, "easy"), config)
        assert (easy.should_adjust, easy.reason) == (False, "Already at min difficulty")
        hard = should_adjust_difficulty(self.state(answers, "hard"), config)
        assert (hard.should_adjust, hard.reason) == (False, "Already at max difficulty")


class TestRecordAnswer:
    def test_five_correct_from_medium_moves_up_once(self):
        state = play(create_adaptive_state("medium"), [True] * 5)
        assert state.current_difficulty == "hard"
        assert state.adjustments_made == 1
        assert len(state.difficulty_history) == 1
        assert state.difficulty_history[0] == DifficultyTransition(
            timestamp=1767225600000, from_level="medium", to_level="hard", reason="High accuracy (100%)",
        )

    def test_step_happens_when_warmup_ends(self):
        state = play(create_adaptive_state(), [True, True])
        assert state.current_difficulty == "medium"
        assert record_answer(state, True).current_difficulty == "hard"

    def test_adjustments_are_capped(self):
        state = play(create_adaptive_state("easy"), [True, True, True])
        assert state.current_difficulty == "medium"
        state = play(state, [True])
        assert state.current_difficulty == "hard"
        state = play(state, [False, False, False])
        assert state.current_difficulty == "medium"
        assert state.adjustments_made == 3

        state = play(state, [False] * 5)
        assert state.current_difficulty == "medium"
        assert state.adjustments_made == 3
        assert [(t.from_level, t.to_level) for t in state.difficulty_history] == [
            ("easy", "medium"), ("medium", "hard"), ("hard", "medium"),
        ]

    def test_history_capped_at_twice_window(self):
        state = play(create_adaptive_state(), [True, False] * 8)
        assert len(state.recent_answers) == 2 * DEFAULT_ADAPTIVE_CONFIG.window_size

    def test_bias_moves_and_clamps(self):
        up = play(create_adaptive_state(), [True] * 3)
        assert up.difficulty_bias == pytest.approx(0.3)

        near_top = AdaptiveSessionState(recent_answers=(True, True), difficulty_bias=0.9)
        assert record_answer(near_top, True).difficulty_bias == 1.0

        near_bottom = AdaptiveSessionState(recent_answers=(False, False), difficulty_bias=-0.9)
        assert record_answer(near_bottom, False).difficulty_bias == -1.0

    def test_input_state_untouched(self):
        before = play(create_adaptive_state(), [True, True])
        answers = before.recent_answers
        after = record_answer(before, True)
        assert after is not before
        assert before.recent_answers == answers == (True, True)
        assert before.current_difficulty == "medium"
        assert before.difficulty_history == ()

    def test_custom_config(self):
        config = AdaptiveConfig(window_size=3, warmup_period=1, max_adjustments=1)
        state = play(create_adaptive_state(), [True], config)
        assert state.current_difficulty == "hard"
        state = play(state, [False] * 3, config)
        assert state.current_difficulty == "hard"

    def test_config_from_settings(self):
        config = AdaptiveConfig.from_settings(Settings(ADAPTIVE_WINDOW_SIZE=8, ADAPTIVE_MAX_ADJUSTMENTS=5))
        assert config.window_size == 8
        assert config.max_adjustments == 5
        assert config.increase_threshold == 0.8


class TestSelectNextExercise:
    def test_empty_pool(self):
        assert select_next_exercise([], create_adaptive_state()) is None

    def test_everything_used(self, exercise_pool):
        used = {e.id for e in exercise_pool}
        assert select_next_exercise(exercise_pool, create_adaptive_state(), used) is None

    def test_used_ids_filtered(self, exercise_pool, rng_factory):
        used = [e.id for e in exercise_pool if e.id != "h2"]
        chosen = select_next_exercise(exercise_pool, create_adaptive_state("easy"), used, rng=rng_factory(0.99))
        assert chosen.id == "h2"

    def test_pool_weighted_toward_hard(self, rng_factory):
        exercises = [
            AdaptiveExercise(id=f"{level}-{i}", difficulty=level)
            for level in ("easy", "medium", "hard")
            for i in range(10)
        ]
        state = create_adaptive_state("hard")
        # easy 3, medium 6, hard 10
        picks = [
            select_next_exercise(exercises, state, rng=rng_factory((i + 0.5) / 19)).id
            for i in range(19)
        ]
        assert sum(p.startswith("easy") for p in picks) == 3
        assert sum(p.startswith("medium") for p in picks) == 6
        assert sum(p.startswith("hard") for p in picks) == 10
        assert picks[0] == "easy-0"

    def test_medium_target_weights(self, rng_factory):
        exercises = [
            AdaptiveExercise(id=f"{level}-{i}", difficulty=level)
            for level in ("easy", "medium", "hard")
            for i in range(4)
        ]
        state = create_adaptive_state("medium")
        # easy 3, medium 4, hard 3
        picks = [
            select_next_exercise(exercises, state, rng=rng_factory((i + 0.5) / 10)).id
            for i in range(10)
        ]
        assert sum(p.startswith("medium") for p in picks) == 4
        assert "easy-3" not in picks and "hard-3" not in picks

    def test_missing_difficulty_counts_as_medium(self, rng_factory):
        exercises = [AdaptiveExercise(id="plain"), AdaptiveExercise(id="hard", difficulty="hard")]
        chosen = select_next_exercise(exercises, create_adaptive_state(), rng=rng_factory(0.0))
        assert chosen.id == "plain"

    def test_default_random_source(self, exercise_pool):
        assert select_next_exercise(exercise_pool, create_adaptive_state()) in exercise_pool


class TestLabels:
    @pytest.mark.parametrize("level,label,color", [
        ("easy", "Beginner", "#22c55e"),
        ("medium", "Intermediate", "#f59e0b"),
        ("hard", "Advanced", "#ef4444"),
    ])
    def test_label_and_color(self, level, label, color):
        assert get_difficulty_label(level) == label
        assert get_difficulty_color(level) == color


class TestPersistence:
    def test_round_trip(self):
        state = play(create_adaptive_state("easy"), [True, True, True, True, False, False, False])
        restored = deserialize_adaptive_state(serialize_adaptive_state(state))
        assert restored == state

    def test_round_trip_fresh_state(self):
        state = create_adaptive_state()
        assert deserialize_adaptive_state(serialize_adaptive_state(state)) == state

    def test_camel_case_payload(self):
        state = play(create_adaptive_state(), [True] * 3)
        data = json.loads(serialize_adaptive_state(state))
        assert set(data) == {
            "recentAnswers", "difficultyBias", "adjustmentsMade", "currentDifficulty", "difficultyHistory",
        }
        assert data["difficultyHistory"][0]["from"] == "medium"
        assert data["difficultyHistory"][0]["to"] == "hard"

    @pytest.mark.parametrize("payload", [
        "not json",
        "",
        "[]",
        '{"recentAnswers": "yes"}',
        json.dumps({
            "recentAnswers": [], "difficultyBias": 0, "adjustmentsMade": 0,
            "currentDifficulty": "extreme", "difficultyHistory": [],
        }),
    ])
    def test_bad_payload_returns_none(self, payload):
        assert deserialize_adaptive_state(payload) is None

    def test_result_error_codes(self):
        assert deserialize_adaptive_state_result("{oops").unwrap_err().code == ErrorCode.E2021_INVALID_JSON
        assert deserialize_adaptive_state_result("{}").unwrap_err().code == ErrorCode.E2000_VALIDATION_GENERIC
