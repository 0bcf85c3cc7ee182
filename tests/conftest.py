"""Shared fixtures for the grammar and adaptive engine tests."""
import pytest

from core.logging import configure_logging
from engines.adaptive import AdaptiveExercise
from engines.grammar_rules import GrammarValidator
from languages.macedonian import LEXICON_PATH, Lexicon, load_lexicon


class SequenceRandom:
    """Deterministic stand-in for `random` that replays fixed values."""

    def __init__(self, *values: float):
        self._values = list(values) or [0.0]
        self.calls = 0

    def random(self) -> float:
        value = self._values[self.calls % len(self._values)]
        self.calls += 1
        return value


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    configure_logging(level="WARNING")


@pytest.fixture(scope="session")
def lexicon() -> Lexicon:
    return load_lexicon(LEXICON_PATH).unwrap()


@pytest.fixture
def validator(lexicon) -> GrammarValidator:
    return GrammarValidator(lexicon)


@pytest.fixture
def extended_validator(lexicon) -> GrammarValidator:
    return GrammarValidator.extended(lexicon)


@pytest.fixture
def rng_factory():
    return SequenceRandom


@pytest.fixture
def exercise_pool() -> list[AdaptiveExercise]:
    return [
        AdaptiveExercise(id="e1", difficulty="easy"),
        AdaptiveExercise(id="e2", difficulty="easy"),
        AdaptiveExercise(id="m1", difficulty="medium"),
        AdaptiveExercise(id="m2", difficulty="medium"),
        AdaptiveExercise(id="h1", difficulty="hard"),
        AdaptiveExercise(id="h2", difficulty="hard"),
    ]


@pytest.fixture
def house_metadata():
    """Predicate-position metadata for "куќата е <form>"."""

    def build(form: str) -> dict:
        return {
            "noun": {
                "lemma": "kuka",
                "lemmaCyrillic": "куќа",
                "gender": "feminine",
                "number": "singular",
                "definiteness": "indefinite",
            },
            "adjective": {"lemma": "голем", "form": form},
        }

    return build
