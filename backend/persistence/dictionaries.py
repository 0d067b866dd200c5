"""Relational store for shared user dictionaries.

Query helpers return Results; SQLAlchemy failures are mapped at this
boundary so routes and scripts only see AppErrors.
"""
import re
from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import fetch_one
from core.errors import AppError, Ok, Result, map_db_errors, required_field
from core.logging import db_logger
from engines.types import Word
from models.dictionary import UserDictionary, UserDictionaryWord, row_to_word, word_to_row

log = db_logger()

_UUID = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)


def is_persisted_dictionary_id(dictionary_id: str) -> bool:
    """API ids are UUIDs; locally created dictionaries use ids like ``user-1``."""
    return bool(_UUID.match(dictionary_id or ""))


@map_db_errors("dictionaries.create")
async def create_dictionary(
    db: AsyncSession, name: str, words: Sequence[Word]
) -> Result[UserDictionary, AppError]:
    if not name or not name.strip():
        return required_field("name", origin="dictionaries.create")
    if not words:
        return required_field("words", origin="dictionaries.create")

    dictionary = UserDictionary(name=name.strip())
    db.add(dictionary)
    await db.flush()
    db.add_all(word_to_row(w, dictionary.id) for w in words)
    await db.commit()
    log.info("dictionary_created", dictionary_id=dictionary.id, words=len(words))
    return Ok(dictionary)


@map_db_errors("dictionaries.load")
async def load_dictionary(
    db: AsyncSession, dictionary_id: str
) -> Result[tuple[UserDictionary, list[Word]], AppError]:
    result = await fetch_one(db, UserDictionary, dictionary_id, "Dictionary")
    if result.is_err():
        return result
    dictionary = result.unwrap()
    rows = await db.execute(
        select(UserDictionaryWord)
        .where(UserDictionaryWord.dictionary_id == dictionary_id)
        .order_by(UserDictionaryWord.id)
    )
    return Ok((dictionary, [row_to_word(r) for r in rows.scalars().all()]))


@map_db_errors("dictionaries.update")
async def update_dictionary(
    db: AsyncSession,
    dictionary_id: str,
    name: str | None = None,
    public: bool | None = None,
    words: Sequence[Word] | None = None,
) -> Result[UserDictionary, AppError]:
    """Partial update. A word list replaces every stored word of the dictionary."""
    result = await fetch_one(db, UserDictionary, dictionary_id, "Dictionary")
    if result.is_err():
        return result
    dictionary = result.unwrap()

    if name is not None:
        dictionary.name = name
    if public is not None:
        dictionary.public = public
    if words is not None:
        await db.execute(
            delete(UserDictionaryWord).where(UserDictionaryWord.dictionary_id == dictionary_id)
        )
        db.add_all(word_to_row(w, dictionary_id) for w in words)

    await db.commit()
    log.info(
        "dictionary_updated",
        dictionary_id=dictionary_id,
        renamed=name is not None,
        public=public,
        words=len(words) if words is not None else None,
    )
    return Ok(dictionary)
