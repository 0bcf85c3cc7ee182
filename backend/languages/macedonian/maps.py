"""Macedonian grammatical mappings for adjective paradigm lookup."""

GENDERS = ("masculine", "feminine", "neuter")
NUMBERS = ("singular", "plural")
DEFINITENESS = ("indefinite", "definite")

# (gender, definiteness) -> AdjectiveEntry slot for singular forms
SINGULAR_SLOTS = {
    ("masculine", "indefinite"): "masc_sing_indef",
    ("masculine", "definite"): "masc_sing_def",
    ("feminine", "indefinite"): "fem_sing_indef",
    ("feminine", "definite"): "fem_sing_def",
    ("neuter", "indefinite"): "neut_sing_indef",
    ("neuter", "definite"): "neut_sing_def",
}

# Plural adjectives do not inflect for gender
PLURAL_SLOTS = {
    "indefinite": "plural_indef",
    "definite": "plural_def",
}

# YAML key -> AdjectiveEntry slot
ADJECTIVE_FIELD_MAP = {
    "mascSingIndef": "masc_sing_indef",
    "mascSingDef": "masc_sing_def",
    "femSingIndef": "fem_sing_indef",
    "femSingDef": "fem_sing_def",
    "neutSingIndef": "neut_sing_indef",
    "neutSingDef": "neut_sing_def",
    "pluralIndef": "plural_indef",
    "pluralDef": "plural_def",
}
ADJECTIVE_FIELD_MAP_REV = {v: k for k, v in ADJECTIVE_FIELD_MAP.items()}

CONSONANTS = "бвгдѓжзѕклљмнњпрстќфхцчџш"
