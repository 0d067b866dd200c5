"""German language module implementation."""
from languages.base import LanguageModule, GrammarConfig
from languages.types import CASES
from .declension import DETERMINER_TABLES
from .grammar import GERMAN_GRAMMAR_CONFIG


class GermanModule(LanguageModule):
    """German module: article declension over four cases."""

    __slots__ = ()

    @property
    def code(self) -> str:
        return "de"

    @property
    def name(self) -> str:
        return "German"

    @property
    def native_name(self) -> str:
        return "Deutsch"

    def get_grammar_config(self) -> GrammarConfig:
        return GERMAN_GRAMMAR_CONFIG

    def get_cases(self) -> list[str]:
        return list(CASES)

    def get_determiner_tables(self) -> dict:
        return DETERMINER_TABLES
