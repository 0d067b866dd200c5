"""Training session API

Each session is a live state machine held in memory. Feedback timers run on
the event loop, so every endpoint here is ``async``.
"""
from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.dictionaries import WordPayload
from core.config import settings
from core.errors import raise_result
from core.logging import api_logger, bind_context
from engines.training import SessionRegistry, TrainingSession, validate_settings
from engines.types import TrainingSettings
from persistence import LocalStore

log = api_logger()

router = APIRouter()

_registry = SessionRegistry()


def get_registry() -> SessionRegistry:
    return _registry


# === Request Models ===

class SettingsPayload(BaseModel):
    mode: str | None = None
    cases: list[str] | None = None
    enabled_dictionaries: list[str] | None = None
    language: str | None = None
    topics: list[str] | None = None
    article_type: str | None = None
    pronoun_type: str | None = None
    show_translation: bool | None = None
    use_pronouns: bool | None = None

    def changes(self) -> dict:
        return self.model_dump(exclude_none=True)


class SessionCreate(BaseModel):
    settings: SettingsPayload | None = None
    is_mobile: bool = False
    persist: bool = False


class InputPayload(BaseModel):
    text: str = ""


class SubmitPayload(BaseModel):
    source: Literal["confirm", "enter"] = "confirm"


class DictionaryAdd(BaseModel):
    name: str = ""
    words: list[WordPayload] = []


class ImportPayload(BaseModel):
    text: str
    default_name: str = "My words"


class TogglePayload(BaseModel):
    enabled: bool


def _session(session_id: str, registry: SessionRegistry) -> TrainingSession:
    result = registry.get(session_id)
    raise_result(result)
    return result.unwrap()


# === Endpoints ===

@router.post("/sessions")
async def create_session(
    payload: SessionCreate | None = None,
    registry: SessionRegistry = Depends(get_registry),
):
    """Start a session. With ``persist`` settings and dictionaries come from the local store."""
    payload = payload or SessionCreate()
    store = LocalStore(settings.LOCAL_STORE_PATH) if payload.persist else None

    initial = None
    if payload.settings is not None:
        base = store.load_settings() if store is not None else TrainingSettings()
        result = validate_settings(base, payload.settings.changes())
        raise_result(result)
        initial = result.unwrap()

    session = TrainingSession(settings=initial, store=store, is_mobile=payload.is_mobile)
    session_id = registry.add(session)
    bind_context(session_id=session_id)
    log.info("session_created", is_mobile=payload.is_mobile, persist=payload.persist)
    return {"session_id": session_id, **session.snapshot()}


@router.get("/sessions/{session_id}")
async def get_session(session_id: str, registry: SessionRegistry = Depends(get_registry)):
    return {"session_id": session_id, **_session(session_id, registry).snapshot()}


@router.post("/sessions/{session_id}/input")
async def update_input(
    session_id: str, payload: InputPayload, registry: SessionRegistry = Depends(get_registry)
):
    session = _session(session_id, registry)
    session.update_input(payload.text)
    return session.snapshot()


@router.post("/sessions/{session_id}/submit")
async def submit(
    session_id: str,
    payload: SubmitPayload | None = None,
    registry: SessionRegistry = Depends(get_registry),
):
    session = _session(session_id, registry)
    outcome = session.submit((payload or SubmitPayload()).source)
    return {"scored": outcome is not None, "correct": outcome, "snapshot": session.snapshot()}


@router.post("/sessions/{session_id}/next")
async def next_word(session_id: str, registry: SessionRegistry = Depends(get_registry)):
    session = _session(session_id, registry)
    session.next_word()
    return session.snapshot()


@router.patch("/sessions/{session_id}/settings")
async def update_settings(
    session_id: str, payload: SettingsPayload, registry: SessionRegistry = Depends(get_registry)
):
    session = _session(session_id, registry)
    result = session.update_settings(**payload.changes())
    raise_result(result)
    return session.snapshot()


@router.post("/sessions/{session_id}/dictionaries")
async def add_dictionary(
    session_id: str, payload: DictionaryAdd, registry: SessionRegistry = Depends(get_registry)
):
    session = _session(session_id, registry)
    result = session.add_user_dictionary(payload.name, [w.to_word() for w in payload.words])
    raise_result(result)
    return {"dictionary_id": result.unwrap().id, "snapshot": session.snapshot()}


@router.patch("/sessions/{session_id}/dictionaries/{dictionary_id}")
async def toggle_dictionary(
    session_id: str,
    dictionary_id: str,
    payload: TogglePayload,
    registry: SessionRegistry = Depends(get_registry),
):
    session = _session(session_id, registry)
    result = session.toggle_dictionary(dictionary_id, payload.enabled)
    raise_result(result)
    return session.snapshot()


@router.post("/sessions/{session_id}/import")
async def import_words(
    session_id: str, payload: ImportPayload, registry: SessionRegistry = Depends(get_registry)
):
    session = _session(session_id, registry)
    result = session.import_words(payload.text, payload.default_name)
    raise_result(result)
    merged = result.unwrap()
    return {"added": merged.added, "created_id": merged.created_id, "snapshot": session.snapshot()}


@router.delete("/sessions/{session_id}")
async def close_session(session_id: str, registry: SessionRegistry = Depends(get_registry)):
    result = registry.remove(session_id)
    raise_result(result)
    return {"ok": True}
