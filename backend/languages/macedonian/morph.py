"""Macedonian surface-form heuristics.

Definiteness is read off the suffixed article, so these checks work for
words that are not in the lexicon. Suffix matching only: consonant-stem
feminines (ноќта) are missed and lemmas ending like an article (живот,
салата, лето) read as definite.
"""
import re

from languages.types import AgreementType, Definiteness, Gender, GrammaticalNumber
from .lexicon import Lexicon
from .maps import CONSONANTS, DEFINITENESS, GENDERS, NUMBERS

_DEFINITE_PATTERNS = (
    re.compile(f"[{CONSONANTS}]от$"),  # masculine: човекот, столот
    re.compile("[иј]от$"),              # masculine after soft stem: добриот, крајот
    re.compile("ј?ата$"),               # feminine: куќата, земјата
    re.compile("[ое]то$"),              # neuter: детето, селото
    re.compile("ите$"),                 # plural: столовите, куќите
)


def is_definite_noun(word: str) -> bool:
    """Check whether a surface form carries the definite article suffix."""
    if len(word) < 4:
        return False
    return any(p.search(word) for p in _DEFINITE_PATTERNS)


def guess_noun_gender(word: str, lexicon: Lexicon | None = None) -> Gender:
    """Resolve gender from the lexicon, falling back to word endings."""
    if lexicon is not None:
        entry = lexicon.find_noun_by_form(word)
        if entry:
            return entry.gender

    if word.endswith("а"):
        return "feminine"
    if word.endswith(("о", "е")):
        return "neuter"
    return "masculine"


def build_agreement_type(
    gender: Gender,
    number: GrammaticalNumber,
    definiteness: Definiteness,
) -> AgreementType:
    """Build the agreement tag from its components."""
    return f"{gender}_{number}_{definiteness}"  # type: ignore[return-value]


def parse_agreement_type(agreement: str) -> tuple[Gender, GrammaticalNumber, Definiteness]:
    """Split an agreement tag into (gender, number, definiteness)."""
    parts = agreement.split("_")
    if len(parts) != 3 or parts[0] not in GENDERS or parts[1] not in NUMBERS or parts[2] not in DEFINITENESS:
        raise ValueError(f"Invalid agreement type: {agreement!r}")
    return parts[0], parts[1], parts[2]  # type: ignore[return-value]
