"""User dictionary API

Create, fetch and partially update dictionaries shared through the
relational store. Replacing the word list is destructive.
"""
from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from core.errors import not_found, raise_result
from engines.types import Word
from persistence.dictionaries import (
    create_dictionary,
    is_persisted_dictionary_id,
    load_dictionary,
    update_dictionary,
)

router = APIRouter()


class WordPayload(BaseModel):
    noun: str = Field(min_length=1)
    article: Literal["der", "die", "das"]
    alternative_articles: list[Literal["der", "die", "das"]] | None = None
    translation: str | None = None
    translation_ru: str | None = None
    translation_en: str | None = None
    translation_uk: str | None = None
    example_sentence: str | None = Field(None, alias="exampleSentence")
    level: str | None = None
    topic: str | None = None
    audio_url: str | None = None

    class Config:
        populate_by_name = True

    def to_word(self) -> Word:
        return Word.from_dict(self.model_dump(exclude_none=True))


class DictionaryCreate(BaseModel):
    name: str = ""
    words: list[WordPayload] = []


class DictionaryCreated(BaseModel):
    id: str


class DictionaryResponse(BaseModel):
    id: str
    name: str
    words: list[dict]


class DictionaryUpdate(BaseModel):
    name: str | None = None
    public: bool | None = None
    words: list[WordPayload] | None = None


@router.post("/", response_model=DictionaryCreated)
async def create(payload: DictionaryCreate, db: AsyncSession = Depends(get_db)):
    """Create a dictionary. Name and a non-empty word list are required."""
    result = await create_dictionary(db, payload.name, [w.to_word() for w in payload.words])
    raise_result(result)
    return DictionaryCreated(id=result.unwrap().id)


@router.get("/{dictionary_id}", response_model=DictionaryResponse)
async def get(dictionary_id: str, db: AsyncSession = Depends(get_db)):
    if not is_persisted_dictionary_id(dictionary_id):
        raise_result(not_found("Dictionary", dictionary_id, origin="api.dictionaries"))
    result = await load_dictionary(db, dictionary_id)
    raise_result(result)
    dictionary, words = result.unwrap()
    return DictionaryResponse(id=dictionary.id, name=dictionary.name, words=[w.to_dict() for w in words])


@router.patch("/{dictionary_id}")
async def patch(dictionary_id: str, payload: DictionaryUpdate, db: AsyncSession = Depends(get_db)):
    if not is_persisted_dictionary_id(dictionary_id):
        raise_result(not_found("Dictionary", dictionary_id, origin="api.dictionaries"))
    words = [w.to_word() for w in payload.words] if payload.words is not None else None
    result = await update_dictionary(db, dictionary_id, payload.name, payload.public, words)
    raise_result(result)
    return {"ok": True}
