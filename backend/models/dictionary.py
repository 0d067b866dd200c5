import json
from datetime import datetime
from uuid import uuid4

from sqlalchemy import Column, String, DateTime, Text, ForeignKey, Integer, Boolean
from sqlalchemy.orm import relationship

from core.database import Base
from engines.types import Word


def _new_id() -> str:
    return str(uuid4())


class UserDictionary(Base):
    """Learner-authored dictionary shared through the API"""
    __tablename__ = "user_dictionaries"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    public = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    words = relationship(
        "UserDictionaryWord",
        back_populates="dictionary",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="UserDictionaryWord.id",
    )


class UserDictionaryWord(Base):
    """One word of a user dictionary, flattened to a row"""
    __tablename__ = "user_dictionary_words"

    id = Column(Integer, primary_key=True, autoincrement=True)
    dictionary_id = Column(String(36), ForeignKey("user_dictionaries.id", ondelete="CASCADE"), nullable=False, index=True)
    noun = Column(String(255), nullable=False)
    article = Column(String(3), nullable=False)
    alternative_articles = Column(Text)  # JSON-encoded list, e.g. '["das"]'
    translation = Column(Text)
    translation_ru = Column(Text)
    translation_en = Column(Text)
    translation_uk = Column(Text)
    example_sentence = Column(Text)
    level = Column(String(10))
    topic = Column(String(100))
    audio_url = Column(String(500))

    dictionary = relationship("UserDictionary", back_populates="words")


def word_to_row(word: Word, dictionary_id: str) -> UserDictionaryWord:
    return UserDictionaryWord(
        dictionary_id=dictionary_id,
        noun=word.noun,
        article=word.article,
        alternative_articles=json.dumps(list(word.alternative_articles)) if word.alternative_articles else None,
        translation=word.translation,
        translation_ru=word.translation_ru,
        translation_en=word.translation_en,
        translation_uk=word.translation_uk,
        example_sentence=word.example_sentence,
        level=word.level,
        topic=word.topic,
        audio_url=word.audio_url,
    )


def row_to_word(row: UserDictionaryWord) -> Word:
    alternatives = ()
    if row.alternative_articles:
        try:
            alternatives = tuple(json.loads(row.alternative_articles))
        except ValueError:
            alternatives = ()
    return Word(
        noun=row.noun,
        article=row.article,
        alternative_articles=alternatives,
        translation=row.translation,
        translation_ru=row.translation_ru,
        translation_en=row.translation_en,
        translation_uk=row.translation_uk,
        example_sentence=row.example_sentence,
        level=row.level,
        topic=row.topic,
        audio_url=row.audio_url,
    )
