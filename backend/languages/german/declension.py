"""German determiner declension.

Tables cover the definite and indefinite articles, the possessive stems
(mein-, dein-, sein-, ihr-, unser-, euer-) and the demonstrative stems
(dieser-, jener-), each declined for the four cases and three genders.

``resolve`` computes the canonical answer for a prompt and the set of
answers accepted as correct; ``is_determiner`` decides whether free text is
a determiner attempt at all. An input can be a determiner and still be wrong.
"""
from dataclasses import dataclass
from functools import lru_cache

from languages.types import CASES, GENDER_BY_ARTICLE

DEFINITE = {
    "nominativ": {"m": "der", "f": "die", "n": "das"},
    "akkusativ": {"m": "den", "f": "die", "n": "das"},
    "dativ": {"m": "dem", "f": "der", "n": "dem"},
    "genitiv": {"m": "des", "f": "der", "n": "des"},
}

# ein-words: indefinite article and possessives share one ending pattern
_EIN_ENDINGS = {
    "nominativ": {"m": "", "f": "e", "n": ""},
    "akkusativ": {"m": "en", "f": "e", "n": ""},
    "dativ": {"m": "em", "f": "er", "n": "em"},
    "genitiv": {"m": "es", "f": "er", "n": "es"},
}

# der-words: dieser/jener
_DER_WORD_ENDINGS = {
    "nominativ": {"m": "er", "f": "e", "n": "es"},
    "akkusativ": {"m": "en", "f": "e", "n": "es"},
    "dativ": {"m": "em", "f": "er", "n": "em"},
    "genitiv": {"m": "es", "f": "er", "n": "es"},
}


def _decline(stem: str, endings: dict, bare: str | None = None) -> dict[str, dict[str, str]]:
    """Build a case -> gender -> form table. ``bare`` replaces the stem for empty endings."""
    return {
        case: {
            gender: (bare or stem) if not ending else stem + ending
            for gender, ending in by_gender.items()
        }
        for case, by_gender in endings.items()
    }


POSSESSIVE_STEMS = ("mein", "dein", "sein", "ihr", "unser", "euer")
DEMONSTRATIVE_STEMS = ("dieser", "jener")

DETERMINER_TABLES: dict[str, dict[str, dict[str, str]]] = {
    "def": DEFINITE,
    "indef": _decline("ein", _EIN_ENDINGS),
    "mein": _decline("mein", _EIN_ENDINGS),
    "dein": _decline("dein", _EIN_ENDINGS),
    "sein": _decline("sein", _EIN_ENDINGS),
    "ihr": _decline("ihr", _EIN_ENDINGS),
    "unser": _decline("unser", _EIN_ENDINGS),
    "euer": _decline("eur", _EIN_ENDINGS, bare="euer"),
    "dieser": _decline("dies", _DER_WORD_ENDINGS),
    "jener": _decline("jen", _DER_WORD_ENDINGS),
}


@dataclass(frozen=True, slots=True)
class Resolution:
    """Correct answer for one prompt."""
    correct: str
    accepted: frozenset[str]

    def accepts(self, text: str) -> bool:
        return text.strip().lower() in self.accepted


def _family(article_type: str, pronoun_type: str) -> tuple[str, ...]:
    """Determiner stems answering a prompt, canonical stem first."""
    if pronoun_type == "possessive":
        return POSSESSIVE_STEMS
    if pronoun_type == "demonstrative":
        return DEMONSTRATIVE_STEMS
    return ("indef",) if article_type == "indefinite" else ("def",)


def article_by_case(article: str, case: str, article_type: str = "definite") -> str:
    """Plain article declined for case. Unknown articles come back unchanged."""
    gender = GENDER_BY_ARTICLE.get(article)
    stem = "indef" if article_type == "indefinite" else "def"
    table = DETERMINER_TABLES[stem].get(case)
    if gender is None or table is None:
        return article
    return table[gender]


def resolve(
    article: str,
    case: str,
    article_type: str = "definite",
    pronoun_type: str = "none",
    alternative_articles=(),
) -> Resolution:
    """Resolve the canonical determiner and every accepted spelling.

    Nouns with alternative articles accept the forms of every listed gender;
    the canonical answer always follows the primary article.

    Args:
        article: Nominative article of the noun (der, die or das)
        case: nominativ, akkusativ, dativ or genitiv
        article_type: "definite" or "indefinite", used when no pronoun is set
        pronoun_type: "none", "possessive" or "demonstrative"
        alternative_articles: Other articles the noun may take

    Returns:
        Resolution with the canonical form and the set of accepted forms.
        An unknown article or case falls back to the lower-cased article.
    """
    stems = _family(article_type, pronoun_type)
    genders = [
        GENDER_BY_ARTICLE[a]
        for a in (article, *alternative_articles)
        if a in GENDER_BY_ARTICLE
    ]
    if not genders or case not in CASES:
        fallback = article.lower()
        return Resolution(correct=fallback, accepted=frozenset({fallback}))

    correct = DETERMINER_TABLES[stems[0]][case][genders[0]]
    accepted = frozenset(
        DETERMINER_TABLES[stem][case][gender]
        for stem in stems
        for gender in genders
    )
    return Resolution(correct=correct, accepted=accepted)


def _all_forms(stems) -> set[str]:
    return {
        form
        for stem in stems
        for by_gender in DETERMINER_TABLES[stem].values()
        for form in by_gender.values()
    }


@lru_cache(maxsize=None)
def determiner_vocabulary(pronoun_type: str = "none") -> frozenset[str]:
    """Closed set of strings recognised as determiner attempts."""
    forms = _all_forms(("def", "indef"))
    if pronoun_type == "possessive":
        forms |= _all_forms(POSSESSIVE_STEMS)
    elif pronoun_type == "demonstrative":
        forms |= _all_forms(DEMONSTRATIVE_STEMS)
    return frozenset(forms)


def is_determiner(text: str, pronoun_type: str = "none") -> bool:
    return text.strip().lower() in determiner_vocabulary(pronoun_type)
