"""Abstract base class for language modules."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class CaseConfig:
    """Configuration for a grammatical case."""
    id: str
    label: str
    hint: str
    color_bg: str
    color_text: str
    color_border: str


@dataclass(frozen=True, slots=True)
class GenderConfig:
    """Configuration for a grammatical gender."""
    id: str
    label: str
    article: str  # Nominative definite article marking the gender


@dataclass(frozen=True, slots=True)
class OptionConfig:
    """A selectable training option (article type, pronoun type)."""
    id: str
    label: str


@dataclass(slots=True)
class GrammarConfig:
    """Language grammar configuration for frontend."""
    cases: list[CaseConfig] = field(default_factory=list)
    genders: list[GenderConfig] = field(default_factory=list)
    article_types: list[OptionConfig] = field(default_factory=list)
    pronoun_types: list[OptionConfig] = field(default_factory=list)
    has_declension: bool = False

    def to_dict(self) -> dict:
        """Convert to dict for API response."""
        return {
            "cases": [
                {"id": c.id, "label": c.label, "hint": c.hint,
                 "color": {"bg": c.color_bg, "text": c.color_text, "border": c.color_border}}
                for c in self.cases
            ],
            "genders": [{"id": g.id, "label": g.label, "article": g.article} for g in self.genders],
            "articleTypes": [{"id": o.id, "label": o.label} for o in self.article_types],
            "pronounTypes": [{"id": o.id, "label": o.label} for o in self.pronoun_types],
            "hasDeclension": self.has_declension,
        }


class LanguageModule(ABC):
    """Abstract base for language-specific functionality."""

    @property
    @abstractmethod
    def code(self) -> str:
        """ISO 639-1 language code (e.g., 'de')."""
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable language name."""
        ...

    @property
    @abstractmethod
    def native_name(self) -> str:
        """Language name in the language itself."""
        ...

    @abstractmethod
    def get_grammar_config(self) -> GrammarConfig:
        """Get grammar configuration for frontend."""
        ...

    @abstractmethod
    def get_cases(self) -> list[str]:
        """Ordered list of grammatical cases."""
        ...

    def get_determiner_tables(self) -> dict:
        """Determiner forms by stem, case and gender. Override if language has articles."""
        return {}
