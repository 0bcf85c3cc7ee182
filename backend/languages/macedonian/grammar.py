"""Macedonian grammar configuration for frontend."""
from languages.base import DefinitenessConfig, GenderConfig, GrammarConfig, NumberConfig

GENDER_CONFIGS = [
    GenderConfig(id="masculine", label="Masculine", short="m", adjective_ending="-∅"),
    GenderConfig(id="feminine", label="Feminine", short="f", adjective_ending="-а"),
    GenderConfig(id="neuter", label="Neuter", short="n", adjective_ending="-о"),
]

NUMBER_CONFIGS = [
    NumberConfig(id="singular", label="Singular"),
    NumberConfig(id="plural", label="Plural"),
]

DEFINITENESS_CONFIGS = [
    DefinitenessConfig(id="indefinite", label="Indefinite", hint="куќа, голема (a house, big)"),
    DefinitenessConfig(id="definite", label="Definite", hint="куќата, големата (the house, the big one)"),
]

MACEDONIAN_GRAMMAR_CONFIG = GrammarConfig(
    genders=GENDER_CONFIGS,
    numbers=NUMBER_CONFIGS,
    definiteness=DEFINITENESS_CONFIGS,
    has_declension=False,
    has_definite_article=True,
)
