"""Shared type definitions for the German training domain."""
from typing import Literal, get_args

Article = Literal["der", "die", "das"]

Case = Literal["nominativ", "akkusativ", "dativ", "genitiv"]

Gender = Literal["m", "f", "n"]

ArticleType = Literal["definite", "indefinite"]

PronounType = Literal["none", "possessive", "demonstrative"]

TrainingMode = Literal["noun-only", "sentence"]

Language = Literal["Russian", "English", "Ukrainian"]

Level = Literal["A1", "A2"]

ARTICLES: tuple[str, ...] = get_args(Article)
CASES: tuple[str, ...] = get_args(Case)
ARTICLE_TYPES: tuple[str, ...] = get_args(ArticleType)
PRONOUN_TYPES: tuple[str, ...] = get_args(PronounType)
TRAINING_MODES: tuple[str, ...] = get_args(TrainingMode)
LANGUAGES: tuple[str, ...] = get_args(Language)
LEVELS: tuple[str, ...] = get_args(Level)

# Nominative definite article -> grammatical gender
GENDER_BY_ARTICLE: dict[str, str] = {"der": "m", "die": "f", "das": "n"}
