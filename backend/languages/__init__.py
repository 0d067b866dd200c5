"""Language modules.

Provides a registry of language-specific grammar configuration. German is
registered on import.
"""
from .registry import get_module, register, list_languages
from .base import LanguageModule, GrammarConfig
from .types import Article, Case, Gender, ArticleType, PronounType

__all__ = [
    "get_module",
    "register",
    "list_languages",
    "LanguageModule",
    "GrammarConfig",
    "Article",
    "Case",
    "Gender",
    "ArticleType",
    "PronounType",
]
