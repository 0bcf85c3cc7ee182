"""Abstract base class for language modules."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from engines.grammar_rules import GrammarValidator


@dataclass(frozen=True, slots=True)
class GenderConfig:
    """Configuration for a grammatical gender."""
    id: str
    label: str
    short: str  # Single letter abbreviation
    adjective_ending: str


@dataclass(frozen=True, slots=True)
class NumberConfig:
    """Configuration for grammatical number."""
    id: str
    label: str


@dataclass(frozen=True, slots=True)
class DefinitenessConfig:
    """Configuration for definiteness marking."""
    id: str
    label: str
    hint: str


@dataclass(slots=True)
class GrammarConfig:
    """Language grammar configuration for frontend."""
    genders: list[GenderConfig] = field(default_factory=list)
    numbers: list[NumberConfig] = field(default_factory=list)
    definiteness: list[DefinitenessConfig] = field(default_factory=list)
    has_declension: bool = False
    has_definite_article: bool = False

    def to_dict(self) -> dict:
        """Convert to dict for API response."""
        return {
            "genders": [
                {"id": g.id, "label": g.label, "short": g.short, "adjectiveEnding": g.adjective_ending}
                for g in self.genders
            ],
            "numbers": [{"id": n.id, "label": n.label} for n in self.numbers],
            "definiteness": [{"id": d.id, "label": d.label, "hint": d.hint} for d in self.definiteness],
            "hasDeclension": self.has_declension,
            "hasDefiniteArticle": self.has_definite_article,
        }


class LanguageModule(ABC):
    """Abstract base for language-specific functionality."""

    @property
    @abstractmethod
    def code(self) -> str:
        """ISO 639-1 language code (e.g., 'mk')."""
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable language name."""
        ...

    @property
    @abstractmethod
    def native_name(self) -> str:
        """Language name in the language itself."""
        ...

    @abstractmethod
    def get_grammar_config(self) -> GrammarConfig:
        """Get grammar configuration for frontend."""
        ...

    @abstractmethod
    def get_validator(self) -> "GrammarValidator":
        """Get the grammar agreement validator for this language."""
        ...
