"""Training domain types."""
from dataclasses import dataclass, field, fields
from typing import Literal

from languages.types import Article, ArticleType, Case, Language, PronounType, TrainingMode

Verdict = Literal["correct", "incorrect", "invalid"]

SubmitSource = Literal["confirm", "enter"]

SessionState = Literal["awaiting-input", "showing-feedback", "no-word"]

# Store key -> Word field, for keys that differ
_WORD_KEY_ALIASES = {
    "alternativeArticles": "alternative_articles",
    "exampleSentence": "example_sentence",
    "audioUrl": "audio_url",
    "genitive_sg": "genitive_singular",
}

_TRANSLATION_FIELDS = {
    "Russian": "translation_ru",
    "English": "translation_en",
    "Ukrainian": "translation_uk",
}


@dataclass(frozen=True, slots=True)
class Word:
    """A vocabulary entry. Only noun and article are required."""
    noun: str
    article: Article
    alternative_articles: tuple[Article, ...] = ()
    translation: str | None = None
    translation_ru: str | None = None
    translation_en: str | None = None
    translation_uk: str | None = None
    example_sentence: str | None = None
    level: str | None = None
    topic: str | None = None
    audio_url: str | None = None
    genitive_singular: str | None = None

    @property
    def identity(self) -> tuple[str, str, str | None]:
        """Deduplication key shared by every dictionary source."""
        return (self.noun, self.article, self.topic)

    def translation_for(self, language: Language) -> str | None:
        specific = getattr(self, _TRANSLATION_FIELDS.get(language, "translation"), None)
        return specific or self.translation

    @classmethod
    def from_dict(cls, data: dict) -> "Word":
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            name = _WORD_KEY_ALIASES.get(key, key)
            if name in known and value is not None:
                values[name] = value
        values["alternative_articles"] = tuple(values.get("alternative_articles") or ())
        return cls(**values)

    def to_dict(self) -> dict:
        data = {
            "noun": self.noun,
            "article": self.article,
            "alternative_articles": list(self.alternative_articles) or None,
            "translation": self.translation,
            "translation_ru": self.translation_ru,
            "translation_en": self.translation_en,
            "translation_uk": self.translation_uk,
            "exampleSentence": self.example_sentence,
            "level": self.level,
            "topic": self.topic,
            "audio_url": self.audio_url,
            "genitive_sg": self.genitive_singular,
        }
        return {k: v for k, v in data.items() if v is not None}


@dataclass(slots=True)
class Dictionary:
    """Named word collection. User dictionaries are mutable; built-ins never are."""
    id: str
    name: str
    words: list[Word] = field(default_factory=list)
    enabled: bool = True

    @classmethod
    def from_dict(cls, data: dict) -> "Dictionary":
        return cls(
            id=str(data["id"]),
            name=data.get("name") or str(data["id"]),
            words=[Word.from_dict(w) for w in data.get("words") or []],
            enabled=bool(data.get("enabled", True)),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "words": [w.to_dict() for w in self.words],
            "enabled": self.enabled,
        }


@dataclass(slots=True)
class TrainingSettings:
    """Parameters of a training session."""
    mode: TrainingMode = "noun-only"
    cases: list[Case] = field(default_factory=lambda: ["nominativ"])
    enabled_dictionaries: list[str] = field(default_factory=lambda: ["A1"])
    language: Language = "Russian"
    topics: list[str] = field(default_factory=list)
    article_type: ArticleType = "definite"
    pronoun_type: PronounType = "none"
    show_translation: bool = True
    use_pronouns: bool = False

    def pool_key(self) -> tuple[tuple[str, ...], tuple[str, ...]]:
        """Fields that decide the effective word pool."""
        return (tuple(self.enabled_dictionaries), tuple(self.topics))

    @classmethod
    def from_dict(cls, data: dict) -> "TrainingSettings":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> dict:
        return {
            "mode": self.mode,
            "cases": list(self.cases),
            "enabled_dictionaries": list(self.enabled_dictionaries),
            "language": self.language,
            "topics": list(self.topics),
            "article_type": self.article_type,
            "pronoun_type": self.pronoun_type,
            "show_translation": self.show_translation,
            "use_pronouns": self.use_pronouns,
        }
