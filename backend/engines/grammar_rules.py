"""Grammar Agreement Validation Engine

Rule-based checker for Macedonian adjective-noun agreement in gender, number
and definiteness. Each rule is an independent object with a
`validate(metadata) -> ValidationResult` capability; the validator runs an
ordered list of rules and concatenates their findings.

Failures are values, never exceptions: unknown lemmas yield warnings, wrong
forms yield ValidationError entries with the corrected form.

Predicate position ("Куќата е голема") takes the indefinite adjective even
though the noun is definite. The validator does not infer syntactic position;
it uses `noun.definiteness` exactly as supplied.
"""
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Literal, Sequence

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from core.logging import qa_logger
from languages.macedonian.lexicon import Lexicon
from languages.macedonian.morph import guess_noun_gender, is_definite_noun
from languages.types import (
    AgreementType,
    Definiteness,
    Gender,
    GrammaticalNumber,
    Person,
    Tense,
)

log = qa_logger()

GrammarRuleId = Literal[
    "adjective_agrees_with_noun_gender",
    "adjective_agrees_with_noun_number",
    "definiteness_suffix_rule",
    "verb_agrees_with_subject_number",
]


# =============================================================================
# Schemas
# =============================================================================

class CamelSchema(BaseModel):
    """Immutable schema serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class NounMetadata(CamelSchema):
    lemma: str
    lemma_cyrillic: str | None = None
    gender: Gender
    number: GrammaticalNumber
    definiteness: Definiteness
    inflected_form: str | None = None


class AdjectiveMetadata(CamelSchema):
    lemma: str
    lemma_cyrillic: str | None = None
    form: str
    agreement: AgreementType | None = None


class VerbMetadata(CamelSchema):
    lemma: str
    lemma_cyrillic: str | None = None
    tense: Tense
    person: Person
    number: GrammaticalNumber
    conjugated_form: str


class LinguisticMetadata(CamelSchema):
    """Validation request built by the content pipeline."""
    noun: NounMetadata | None = None
    adjective: AdjectiveMetadata | None = None
    verb: VerbMetadata | None = None
    notes: str | None = None


class ValidationError(CamelSchema):
    rule: GrammarRuleId
    message: str
    expected: str
    actual: str
    suggestion: str


class ValidationWarning(CamelSchema):
    rule: GrammarRuleId
    message: str
    suggestion: str | None = None


class ValidationResult(CamelSchema):
    valid: bool
    errors: list[ValidationError] = []
    warnings: list[ValidationWarning] = []

    @classmethod
    def from_findings(
        cls,
        errors: Sequence[ValidationError] = (),
        warnings: Sequence[ValidationWarning] = (),
    ) -> "ValidationResult":
        return cls(valid=not errors, errors=list(errors), warnings=list(warnings))

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


# =============================================================================
# Rules
# =============================================================================

class AgreementRule(ABC):
    """One grammar rule evaluated against linguistic metadata."""

    id: ClassVar[GrammarRuleId]
    name: ClassVar[str]
    description: ClassVar[str]

    __slots__ = ("_lexicon",)

    def __init__(self, lexicon: Lexicon):
        self._lexicon = lexicon

    @abstractmethod
    def validate(self, metadata: LinguisticMetadata) -> ValidationResult:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


class AdjectiveGenderAgreementRule(AgreementRule):
    id = "adjective_agrees_with_noun_gender"
    name = "Adjective-Noun Gender Agreement"
    description = "If noun is feminine, adjective must be feminine form (-а/-та)"

    __slots__ = ()

    def validate(self, metadata: LinguisticMetadata) -> ValidationResult:
        noun, adjective = metadata.noun, metadata.adjective
        if noun is None or adjective is None:
            return ValidationResult.from_findings()

        expected = self._lexicon.get_expected_adjective_form(
            adjective.lemma, noun.gender, noun.number, noun.definiteness
        )
        if expected is None:
            return ValidationResult.from_findings(warnings=[ValidationWarning(
                rule=self.id,
                message=f'Unknown adjective "{adjective.lemma}" - cannot validate gender agreement',
            )])

        if adjective.form == expected:
            return ValidationResult.from_findings()

        return ValidationResult.from_findings(errors=[ValidationError(
            rule=self.id,
            message=f'Adjective "{adjective.form}" does not agree with {noun.gender} noun',
            expected=expected,
            actual=adjective.form,
            suggestion=(
                f'Use "{expected}" instead of "{adjective.form}" '
                f"for {noun.gender} {noun.number} {noun.definiteness} nouns"
            ),
        )])


class AdjectiveNumberAgreementRule(AgreementRule):
    id = "adjective_agrees_with_noun_number"
    name = "Adjective-Noun Number Agreement"
    description = "If noun is plural, adjective must be plural form (-и/-ите)"

    __slots__ = ()

    def validate(self, metadata: LinguisticMetadata) -> ValidationResult:
        noun, adjective = metadata.noun, metadata.adjective
        if noun is None or adjective is None:
            return ValidationResult.from_findings()

        entry = self._lexicon.get_adjective(adjective.lemma)
        if entry is None:
            return ValidationResult.from_findings(warnings=[ValidationWarning(
                rule=self.id,
                message=f'Unknown adjective "{adjective.lemma}" - cannot validate number agreement',
            )])

        if noun.number != "plural":
            return ValidationResult.from_findings()

        expected = entry.form(noun.gender, "plural", noun.definiteness)
        if adjective.form == expected:
            return ValidationResult.from_findings()

        return ValidationResult.from_findings(errors=[ValidationError(
            rule=self.id,
            message="Adjective should be plural form for plural noun",
            expected=expected,
            actual=adjective.form,
            suggestion=f'Use plural form "{expected}"',
        )])


class DefinitenessAgreementRule(AgreementRule):
    """Advisory only: flags a definite noun paired with a non-matching form."""

    id = "definiteness_suffix_rule"
    name = "Definiteness Agreement"
    description = "If noun is definite, adjective should match definiteness pattern"

    __slots__ = ()

    def validate(self, metadata: LinguisticMetadata) -> ValidationResult:
        noun, adjective = metadata.noun, metadata.adjective
        if noun is None or adjective is None or noun.definiteness != "definite":
            return ValidationResult.from_findings()

        expected = self._lexicon.get_expected_adjective_form(
            adjective.lemma, noun.gender, noun.number, noun.definiteness
        )
        if expected is None or adjective.form == expected:
            return ValidationResult.from_findings()

        return ValidationResult.from_findings(warnings=[ValidationWarning(
            rule=self.id,
            message="When noun is definite, adjective may also take definite form",
            suggestion=f'Consider using "{expected}" for definite context',
        )])


class VerbNumberAgreementRule(AgreementRule):
    id = "verb_agrees_with_subject_number"
    name = "Verb-Subject Number Agreement"
    description = "Verb conjugation must match subject number (singular/plural)"

    __slots__ = ()

    def validate(self, metadata: LinguisticMetadata) -> ValidationResult:
        noun, verb = metadata.noun, metadata.verb
        if noun is None or verb is None or noun.number == verb.number:
            return ValidationResult.from_findings()

        return ValidationResult.from_findings(errors=[ValidationError(
            rule=self.id,
            message=f"Verb number ({verb.number}) does not match subject number ({noun.number})",
            expected=f"{noun.number} verb form",
            actual=f"{verb.number} verb form",
            suggestion=f'Use {noun.number} form of verb "{verb.lemma}"',
        )])


RULE_CLASSES: dict[GrammarRuleId, type[AgreementRule]] = {
    cls.id: cls
    for cls in (
        AdjectiveGenderAgreementRule,
        AdjectiveNumberAgreementRule,
        DefinitenessAgreementRule,
        VerbNumberAgreementRule,
    )
}

DEFAULT_RULE_IDS: tuple[GrammarRuleId, ...] = ("adjective_agrees_with_noun_gender",)
EXTENDED_RULE_IDS: tuple[GrammarRuleId, ...] = tuple(RULE_CLASSES)


def build_rules(lexicon: Lexicon, rule_ids: Sequence[GrammarRuleId] = DEFAULT_RULE_IDS) -> list[AgreementRule]:
    """Instantiate rules in the given order."""
    unknown = [r for r in rule_ids if r not in RULE_CLASSES]
    if unknown:
        raise ValueError(f"Unknown grammar rules: {', '.join(unknown)}")
    return [RULE_CLASSES[r](lexicon) for r in rule_ids]


# =============================================================================
# Validator
# =============================================================================

class GrammarValidator:
    """Applies an ordered list of agreement rules over an injected lexicon."""

    __slots__ = ("_lexicon", "_rules", "_gender_rule")

    def __init__(self, lexicon: Lexicon, rules: Sequence[AgreementRule] | None = None):
        self._lexicon = lexicon
        self._rules: tuple[AgreementRule, ...] = tuple(rules) if rules is not None else tuple(build_rules(lexicon))
        self._gender_rule = AdjectiveGenderAgreementRule(lexicon)

    @classmethod
    def extended(cls, lexicon: Lexicon) -> "GrammarValidator":
        """Validator running every available rule."""
        return cls(lexicon, build_rules(lexicon, EXTENDED_RULE_IDS))

    @property
    def lexicon(self) -> Lexicon:
        return self._lexicon

    @property
    def rules(self) -> tuple[AgreementRule, ...]:
        return self._rules

    @staticmethod
    def _coerce(metadata: LinguisticMetadata | dict[str, Any]) -> LinguisticMetadata:
        if isinstance(metadata, LinguisticMetadata):
            return metadata
        return LinguisticMetadata.model_validate(metadata)

    def validate_content(self, metadata: LinguisticMetadata | dict[str, Any]) -> ValidationResult:
        """Validate metadata against every configured rule."""
        metadata = self._coerce(metadata)
        errors: list[ValidationError] = []
        warnings: list[ValidationWarning] = []

        for rule in self._rules:
            result = rule.validate(metadata)
            errors.extend(result.errors)
            warnings.extend(result.warnings)

        log.debug(
            "content_validated",
            rules=len(self._rules),
            errors=len(errors),
            warnings=len(warnings),
        )
        return ValidationResult.from_findings(errors, warnings)

    def validate_adjective_noun_pair(self, metadata: LinguisticMetadata | dict[str, Any]) -> ValidationResult:
        """Run only the gender agreement rule."""
        return self._gender_rule.validate(self._coerce(metadata))

    def get_expected_adjective_form(
        self,
        lemma: str,
        gender: Gender,
        number: GrammaticalNumber,
        definiteness: Definiteness,
    ) -> str | None:
        return self._lexicon.get_expected_adjective_form(lemma, gender, number, definiteness)

    def detect_noun_gender(self, lemma: str) -> Gender | None:
        return self._lexicon.detect_noun_gender(lemma)

    def get_correct_adjective_form(
        self,
        adjective_lemma: str,
        noun_lemma: str,
        is_definite: bool = False,
        is_plural: bool = False,
    ) -> str | None:
        return self._lexicon.get_correct_adjective_form(adjective_lemma, noun_lemma, is_definite, is_plural)

    @staticmethod
    def is_definite_noun(word: str) -> bool:
        return is_definite_noun(word)

    def suggest_adjective_form(self, adjective_lemma: str, noun_word: str) -> str | None:
        """Attributive form of an adjective for a singular noun surface form.

        Gender comes from the lexicon (or word endings for unknown nouns);
        definiteness comes from the noun's article suffix.
        """
        gender = guess_noun_gender(noun_word, self._lexicon)
        definiteness: Definiteness = "definite" if is_definite_noun(noun_word) else "indefinite"
        return self._lexicon.get_expected_adjective_form(adjective_lemma, gender, "singular", definiteness)
