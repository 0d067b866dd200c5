"""German grammar configuration for frontend."""
from languages.base import CaseConfig, GenderConfig, GrammarConfig, OptionConfig

CASE_CONFIGS = [
    CaseConfig(
        id="nominativ",
        label="Nominativ",
        hint="wer? was? (who? what?)",
        color_bg="bg-blue-50",
        color_text="text-blue-700",
        color_border="border-blue-300",
    ),
    CaseConfig(
        id="akkusativ",
        label="Akkusativ",
        hint="wen? was? (whom? what?)",
        color_bg="bg-purple-50",
        color_text="text-purple-700",
        color_border="border-purple-300",
    ),
    CaseConfig(
        id="dativ",
        label="Dativ",
        hint="wem? (to whom?)",
        color_bg="bg-orange-50",
        color_text="text-orange-700",
        color_border="border-orange-300",
    ),
    CaseConfig(
        id="genitiv",
        label="Genitiv",
        hint="wessen? (whose?)",
        color_bg="bg-green-50",
        color_text="text-green-700",
        color_border="border-green-300",
    ),
]

GENDER_CONFIGS = [
    GenderConfig(id="m", label="Maskulin", article="der"),
    GenderConfig(id="f", label="Feminin", article="die"),
    GenderConfig(id="n", label="Neutrum", article="das"),
]

ARTICLE_TYPE_CONFIGS = [
    OptionConfig(id="definite", label="der / die / das"),
    OptionConfig(id="indefinite", label="ein / eine"),
]

PRONOUN_TYPE_CONFIGS = [
    OptionConfig(id="none", label="Articles only"),
    OptionConfig(id="possessive", label="mein, dein, sein, ihr, unser, euer"),
    OptionConfig(id="demonstrative", label="dieser, jener"),
]

GERMAN_GRAMMAR_CONFIG = GrammarConfig(
    cases=CASE_CONFIGS,
    genders=GENDER_CONFIGS,
    article_types=ARTICLE_TYPE_CONFIGS,
    pronoun_types=PRONOUN_TYPE_CONFIGS,
    has_declension=True,
)
