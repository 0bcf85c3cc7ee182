"""Macedonian language support."""
from .lexicon import AdjectiveEntry, NounEntry, Lexicon, load_lexicon, default_lexicon, LEXICON_PATH
from .morph import is_definite_noun, guess_noun_gender, build_agreement_type, parse_agreement_type
from .module import MacedonianModule

__all__ = [
    "AdjectiveEntry",
    "NounEntry",
    "Lexicon",
    "load_lexicon",
    "default_lexicon",
    "LEXICON_PATH",
    "is_definite_noun",
    "guess_noun_gender",
    "build_agreement_type",
    "parse_agreement_type",
    "MacedonianModule",
]
