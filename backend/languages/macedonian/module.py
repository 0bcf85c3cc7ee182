"""Macedonian language module implementation."""
from typing import TYPE_CHECKING

from languages.base import LanguageModule, GrammarConfig
from .grammar import MACEDONIAN_GRAMMAR_CONFIG
from .lexicon import Lexicon, default_lexicon

if TYPE_CHECKING:
    from engines.grammar_rules import GrammarValidator


class MacedonianModule(LanguageModule):
    """Macedonian language module with lexicon-backed agreement checks."""

    __slots__ = ("_lexicon", "_validator")

    def __init__(self, lexicon: Lexicon | None = None):
        self._lexicon = lexicon
        self._validator: "GrammarValidator | None" = None

    @property
    def code(self) -> str:
        return "mk"

    @property
    def name(self) -> str:
        return "Macedonian"

    @property
    def native_name(self) -> str:
        return "Македонски"

    def get_grammar_config(self) -> GrammarConfig:
        """Get grammar configuration for frontend."""
        return MACEDONIAN_GRAMMAR_CONFIG

    def get_lexicon(self) -> Lexicon:
        """Get the lexicon (lazy-loaded)."""
        if self._lexicon is None:
            self._lexicon = default_lexicon()
        return self._lexicon

    def get_validator(self) -> "GrammarValidator":
        """Get the grammar validator (lazy-loaded)."""
        if self._validator is None:
            from engines.grammar_rules import GrammarValidator
            self._validator = GrammarValidator(self.get_lexicon())
        return self._validator
