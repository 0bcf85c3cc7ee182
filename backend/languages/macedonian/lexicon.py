"""Macedonian lexicon: adjective paradigms and noun gender data.

The lexicon is an immutable value constructed explicitly and handed to the
validator, so tests can substitute fixtures and several lexicon versions can
coexist. The packaged YAML lexicon is loaded once and cached.
"""
from dataclasses import dataclass, fields
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping

import yaml

from core.config import settings
from core.errors import (
    AppError,
    Ok,
    Result,
    file_not_found,
    file_read_error,
    invalid_format,
    validation_error,
)
from core.logging import engine_logger
from languages.types import Definiteness, Gender, GrammaticalNumber
from .maps import ADJECTIVE_FIELD_MAP, ADJECTIVE_FIELD_MAP_REV, GENDERS, PLURAL_SLOTS, SINGULAR_SLOTS

log = engine_logger()

LEXICON_PATH = Path(__file__).parent / "data" / "lexicon.yaml"


@dataclass(frozen=True, slots=True)
class AdjectiveEntry:
    """All eight surface forms of one adjective lemma."""
    lemma: str
    masc_sing_indef: str
    masc_sing_def: str
    fem_sing_indef: str
    fem_sing_def: str
    neut_sing_indef: str
    neut_sing_def: str
    plural_indef: str
    plural_def: str

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, str) or not value:
                raise ValueError(f"Adjective '{self.lemma}' has empty form '{f.name}'")

    def form(self, gender: Gender, number: GrammaticalNumber, definiteness: Definiteness) -> str | None:
        """Surface form for the given agreement features (plural ignores gender)."""
        if number == "plural":
            slot = PLURAL_SLOTS.get(definiteness)
        else:
            slot = SINGULAR_SLOTS.get((gender, definiteness))
        return getattr(self, slot) if slot else None

    @property
    def forms(self) -> tuple[str, ...]:
        return tuple(getattr(self, slot) for slot in ADJECTIVE_FIELD_MAP.values())

    def to_dict(self) -> dict:
        return {ADJECTIVE_FIELD_MAP_REV[slot]: getattr(self, slot) for slot in ADJECTIVE_FIELD_MAP.values()}


@dataclass(frozen=True, slots=True)
class NounEntry:
    """Gender and definite form of one noun lemma."""
    lemma: str
    gender: Gender
    definite_form: str
    plural_form: str | None = None

    def __post_init__(self):
        if self.gender not in GENDERS:
            raise ValueError(f"Noun '{self.lemma}' has invalid gender '{self.gender}'")
        if not self.definite_form:
            raise ValueError(f"Noun '{self.lemma}' has no definite form")


class Lexicon:
    """Immutable adjective and noun dictionary with form resolution."""

    __slots__ = ("_adjectives", "_nouns", "version")

    def __init__(
        self,
        adjectives: Mapping[str, AdjectiveEntry] | list[AdjectiveEntry],
        nouns: Mapping[str, NounEntry] | list[NounEntry],
        version: int = 1,
    ):
        if not isinstance(adjectives, Mapping):
            adjectives = {a.lemma: a for a in adjectives}
        if not isinstance(nouns, Mapping):
            nouns = {n.lemma: n for n in nouns}
        self._adjectives = MappingProxyType(dict(adjectives))
        self._nouns = MappingProxyType(dict(nouns))
        self.version = version

    @property
    def adjectives(self) -> Mapping[str, AdjectiveEntry]:
        return self._adjectives

    @property
    def nouns(self) -> Mapping[str, NounEntry]:
        return self._nouns

    def __repr__(self) -> str:
        return f"Lexicon(version={self.version}, adjectives={len(self._adjectives)}, nouns={len(self._nouns)})"

    def get_adjective(self, lemma: str) -> AdjectiveEntry | None:
        return self._adjectives.get(lemma)

    def get_noun(self, lemma: str) -> NounEntry | None:
        return self._nouns.get(lemma)

    def iter_nouns(self) -> Iterator[NounEntry]:
        return iter(self._nouns.values())

    def get_expected_adjective_form(
        self,
        lemma: str,
        gender: Gender,
        number: GrammaticalNumber,
        definiteness: Definiteness,
    ) -> str | None:
        """Get the adjective form that agrees with the given noun features.

        Returns None when the adjective is not in the lexicon.
        """
        entry = self._adjectives.get(lemma)
        if entry is None:
            return None
        return entry.form(gender, number, definiteness)

    def detect_noun_gender(self, lemma: str) -> Gender | None:
        """Look up a noun's gender; None for unknown nouns."""
        entry = self._nouns.get(lemma)
        return entry.gender if entry else None

    def get_correct_adjective_form(
        self,
        adjective_lemma: str,
        noun_lemma: str,
        is_definite: bool = False,
        is_plural: bool = False,
    ) -> str | None:
        """Get the correct adjective form for a given noun. Useful for content authoring."""
        gender = self.detect_noun_gender(noun_lemma)
        if gender is None:
            return None
        return self.get_expected_adjective_form(
            adjective_lemma,
            gender,
            "plural" if is_plural else "singular",
            "definite" if is_definite else "indefinite",
        )

    def find_noun_by_form(self, word: str) -> NounEntry | None:
        """Find the noun whose lemma or definite form is `word`."""
        entry = self._nouns.get(word)
        if entry:
            return entry
        for entry in self._nouns.values():
            if word == entry.definite_form:
                return entry
        return None

    def find_adjective_by_form(self, form: str) -> AdjectiveEntry | None:
        """Find the adjective that has `form` anywhere in its paradigm."""
        entry = self._adjectives.get(form)
        if entry:
            return entry
        for entry in self._adjectives.values():
            if form in entry.forms:
                return entry
        return None


def _parse_lexicon(data: dict) -> Lexicon:
    adjectives = []
    for lemma, raw in (data.get("adjectives") or {}).items():
        kwargs = {ADJECTIVE_FIELD_MAP[k]: v for k, v in raw.items() if k in ADJECTIVE_FIELD_MAP}
        adjectives.append(AdjectiveEntry(lemma=lemma, **kwargs))

    nouns = [
        NounEntry(
            lemma=lemma,
            gender=raw["gender"],
            definite_form=raw["definiteForm"],
            plural_form=raw.get("pluralForm"),
        )
        for lemma, raw in (data.get("nouns") or {}).items()
    ]
    return Lexicon(adjectives, nouns, version=data.get("version", 1))


def load_lexicon(path: Path | str) -> Result[Lexicon, AppError]:
    """Load and validate a lexicon YAML file."""
    path = Path(path)
    if not path.exists():
        return file_not_found(path, origin="lexicon")

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        return file_read_error(path, e, origin="lexicon")

    if not isinstance(data, dict):
        return invalid_format("lexicon", "mapping with 'adjectives' and 'nouns'", type(data).__name__, origin="lexicon")

    try:
        lexicon = _parse_lexicon(data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        return validation_error(f"Invalid lexicon entry: {e}", origin="lexicon", path=str(path), cause=e)

    log.debug("lexicon_loaded", path=str(path), adjectives=len(lexicon.adjectives), nouns=len(lexicon.nouns))
    return Ok(lexicon)


@lru_cache(maxsize=1)
def default_lexicon() -> Lexicon:
    """Load the configured lexicon (MK_LEXICON_PATH) or the packaged one."""
    path = Path(settings.MK_LEXICON_PATH) if settings.MK_LEXICON_PATH else LEXICON_PATH
    return load_lexicon(path).unwrap()
