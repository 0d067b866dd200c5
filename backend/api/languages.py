"""Languages API Routes

Grammar configuration for the frontend plus German declension lookups.
"""
from typing import Literal

from fastapi import APIRouter, Query
from pydantic import BaseModel

from core.errors import raise_result
from core.logging import api_logger
from engines.types import Word
from languages import get_module, list_languages
from languages.german import expand_sentences, resolve

log = api_logger()

router = APIRouter()

ArticleParam = Literal["der", "die", "das"]
CaseParam = Literal["nominativ", "akkusativ", "dativ", "genitiv"]


# === Response Models ===

class CaseColorResponse(BaseModel):
    bg: str
    text: str
    border: str


class CaseResponse(BaseModel):
    id: str
    label: str
    hint: str
    color: CaseColorResponse


class GenderResponse(BaseModel):
    id: str
    label: str
    article: str


class OptionResponse(BaseModel):
    id: str
    label: str


class GrammarConfigResponse(BaseModel):
    cases: list[CaseResponse]
    genders: list[GenderResponse]
    articleTypes: list[OptionResponse]
    pronounTypes: list[OptionResponse]
    hasDeclension: bool


class LanguageInfoResponse(BaseModel):
    code: str
    name: str
    nativeName: str


class ResolutionResponse(BaseModel):
    correct: str
    accepted: list[str]


# === Endpoints ===

@router.get("/", response_model=list[LanguageInfoResponse])
async def get_available_languages():
    return list_languages()


@router.get("/de/resolve", response_model=ResolutionResponse)
async def resolve_determiner(
    article: ArticleParam,
    case: CaseParam = "nominativ",
    article_type: Literal["definite", "indefinite"] = "definite",
    pronoun_type: Literal["none", "possessive", "demonstrative"] = "none",
    alternative: list[ArticleParam] = Query(default=[]),
):
    """Canonical determiner and every accepted answer for one prompt."""
    resolution = resolve(article, case, article_type, pronoun_type, tuple(alternative))
    return ResolutionResponse(correct=resolution.correct, accepted=sorted(resolution.accepted))


@router.get("/de/sentences")
async def get_sentences(
    noun: str = Query(min_length=1),
    article: ArticleParam = "der",
    case: CaseParam | None = None,
    genitive: str | None = None,
    article_type: Literal["definite", "indefinite"] = "definite",
    pronoun_type: Literal["none", "possessive", "demonstrative"] = "none",
):
    """Every template sentence for a noun, determiner filled in."""
    word = Word(noun=noun, article=article, genitive_singular=genitive)
    sentences = expand_sentences(word, case, article_type, pronoun_type)
    return {"sentences": [s.to_dict() for s in sentences]}


@router.get("/{lang_code}", response_model=LanguageInfoResponse)
async def get_language_info(lang_code: str):
    result = get_module(lang_code)
    raise_result(result)
    module = result.unwrap()
    return LanguageInfoResponse(code=module.code, name=module.name, nativeName=module.native_name)


@router.get("/{lang_code}/grammar", response_model=GrammarConfigResponse)
async def get_grammar_config(lang_code: str):
    """Cases, genders and determiner options for the frontend."""
    result = get_module(lang_code)
    raise_result(result)
    log.debug("grammar_config_fetched", language=lang_code)
    return result.unwrap().get_grammar_config().to_dict()


@router.get("/{lang_code}/determiners")
async def get_determiners(lang_code: str):
    """Determiner tables keyed by stem, then case, then gender."""
    result = get_module(lang_code)
    raise_result(result)
    module = result.unwrap()
    return {"cases": module.get_cases(), "tables": module.get_determiner_tables()}
