"""Shared type definitions for language modules."""
from typing import Literal

Gender = Literal["masculine", "feminine", "neuter"]

GrammaticalNumber = Literal["singular", "plural"]

Definiteness = Literal["definite", "indefinite"]

Person = Literal["1st", "2nd", "3rd"]

Tense = Literal["present", "past", "future", "aorist", "imperfect"]

AgreementType = Literal[
    "masculine_singular_indefinite",
    "masculine_singular_definite",
    "masculine_plural_indefinite",
    "masculine_plural_definite",
    "feminine_singular_indefinite",
    "feminine_singular_definite",
    "feminine_plural_indefinite",
    "feminine_plural_definite",
    "neuter_singular_indefinite",
    "neuter_singular_definite",
    "neuter_plural_indefinite",
    "neuter_plural_definite",
]

TargetLanguage = Literal["mk", "en"]

DifficultyLevel = Literal["easy", "medium", "hard"]
