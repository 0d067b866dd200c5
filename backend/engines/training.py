"""Training host.

``TrainingSession`` owns one state machine together with the settings, user
dictionaries and statistics it works on. It applies the empty-pool fallback,
prunes stale topic selections and persists every change to an optional
local store. ``SessionRegistry`` keeps the live sessions of the API.
"""
from __future__ import annotations

import random
import uuid
from collections import OrderedDict
from dataclasses import fields, replace
from typing import TYPE_CHECKING, Sequence

from core.config import settings as app_settings
from core.errors import (
    AppError,
    Ok,
    Result,
    invalid_choice,
    invalid_format,
    not_found,
    required_field,
    validation_error,
)
from core.logging import training_logger
from languages.german.catalog import is_built_in
from languages.types import ARTICLE_TYPES, CASES, LANGUAGES, PRONOUN_TYPES, TRAINING_MODES

from .importer import MergeResult, merge_imported_words, parse_import_text
from .pool import filter_topics_with_words, get_enabled_words, resolve_enabled_dictionaries
from .progress import compute_progress
from .scheduler import LoopScheduler, Scheduler
from .session import FeedbackTimings, Haptics, InputFocus, SessionStateMachine
from .stats import SessionStats
from .types import Dictionary, SubmitSource, TrainingSettings, Word

if TYPE_CHECKING:
    from persistence.local_store import LocalStore

log = training_logger()

_CHOICES = {
    "mode": TRAINING_MODES,
    "language": LANGUAGES,
    "article_type": ARTICLE_TYPES,
    "pronoun_type": PRONOUN_TYPES,
}
_LISTS = ("cases", "enabled_dictionaries", "topics")
_FLAGS = ("show_translation", "use_pronouns")
_SETTING_FIELDS = frozenset(f.name for f in fields(TrainingSettings))


def validate_settings(base: TrainingSettings, changes: dict) -> Result[TrainingSettings, AppError]:
    """Apply ``changes`` to a copy of ``base``, rejecting unknown keys and values."""
    origin = "training.settings"
    unknown = sorted(set(changes) - _SETTING_FIELDS)
    if unknown:
        return validation_error(f"Unknown settings: {', '.join(unknown)}", field=unknown[0], origin=origin)

    for name, value in changes.items():
        if name in _CHOICES and value not in _CHOICES[name]:
            return invalid_choice(name, value, _CHOICES[name], origin=origin)
        if name in _LISTS:
            if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
                return invalid_format(name, "a list of strings", got=repr(value), origin=origin)
        if name in _FLAGS and not isinstance(value, bool):
            return invalid_format(name, "a boolean", got=repr(value), origin=origin)

    for case in changes.get("cases", ()):
        if case not in CASES:
            return invalid_choice("cases", case, CASES, origin=origin)

    normalized = {k: list(dict.fromkeys(v)) if k in _LISTS else v for k, v in changes.items()}
    return Ok(replace(base, **normalized))


class TrainingSession:
    """One learner's training session."""

    __slots__ = ("_settings", "_user_dictionaries", "_stats", "_store", "_fallback", "_machine")

    def __init__(
        self,
        settings: TrainingSettings | None = None,
        user_dictionaries: Sequence[Dictionary] | None = None,
        store: LocalStore | None = None,
        scheduler: Scheduler | None = None,
        rng: random.Random | None = None,
        is_mobile: bool = False,
        focus: InputFocus | None = None,
        haptics: Haptics | None = None,
        timings: FeedbackTimings | None = None,
        fallback: Sequence[str] | None = None,
    ):
        self._store = store
        if settings is None:
            settings = store.load_settings() if store is not None else TrainingSettings()
        if user_dictionaries is None:
            user_dictionaries = store.load_user_dictionaries() if store is not None else []
        self._user_dictionaries: list[Dictionary] = list(user_dictionaries)
        self._fallback = list(fallback or app_settings.DEFAULT_ENABLED_DICTIONARIES)
        self._stats = SessionStats()
        self._settings = self._effective(settings)
        self._sync_enabled_flags()

        self._machine = SessionStateMachine(
            self._settings,
            self._pool,
            scheduler or LoopScheduler(),
            rng=rng,
            is_mobile=is_mobile,
            focus=focus,
            haptics=haptics,
            timings=timings,
        )
        self._machine.request_next_word()
        log.info(
            "training_session_started",
            enabled=self._settings.enabled_dictionaries,
            topics=self._settings.topics,
            mode=self._settings.mode,
            user_dictionaries=len(self._user_dictionaries),
        )

    # === State ===
    @property
    def settings(self) -> TrainingSettings:
        return self._settings

    @property
    def stats(self) -> SessionStats:
        return self._stats

    @property
    def machine(self) -> SessionStateMachine:
        return self._machine

    @property
    def user_dictionaries(self) -> list[Dictionary]:
        return list(self._user_dictionaries)

    def _pool(self) -> list[Word]:
        return get_enabled_words(
            self._settings.enabled_dictionaries,
            self._settings.topics,
            self._user_dictionaries,
        )

    def _effective(self, settings: TrainingSettings) -> TrainingSettings:
        """Settings with the empty-pool fallback applied and stale topics pruned."""
        enabled = resolve_enabled_dictionaries(
            settings.enabled_dictionaries, settings.topics, self._user_dictionaries, self._fallback
        )
        topics = filter_topics_with_words(settings.topics, enabled, self._user_dictionaries)
        if topics != list(settings.topics):
            log.info("topics_pruned", before=list(settings.topics), after=topics)
        return replace(settings, enabled_dictionaries=enabled, topics=topics)

    def _sync_enabled_flags(self) -> None:
        enabled = set(self._settings.enabled_dictionaries)
        for dictionary in self._user_dictionaries:
            dictionary.enabled = dictionary.id in enabled

    def _commit_settings(self, settings: TrainingSettings, force_redraw: bool = False) -> None:
        previous = self._settings
        self._settings = self._effective(settings)
        self._sync_enabled_flags()
        pool_changed = force_redraw or previous.pool_key() != self._settings.pool_key()
        self._machine.apply_settings(self._settings, pool_changed)
        if self._store is not None:
            self._store.save_settings(self._settings)

    def _commit_dictionaries(self, dictionaries: list[Dictionary], settings: TrainingSettings | None = None) -> None:
        self._user_dictionaries = dictionaries
        self._commit_settings(settings or self._settings, force_redraw=True)
        if self._store is not None:
            self._store.save_user_dictionaries(self._user_dictionaries)

    # === Operations ===
    def update_input(self, text: str) -> None:
        self._machine.update_input(text)

    def submit(self, source: SubmitSource = "confirm") -> bool | None:
        """Grade the current input and fold scored outcomes into the statistics."""
        outcome = self._machine.submit_answer(source)
        if outcome is not None:
            self._stats = self._stats.record(outcome)
        return outcome

    def next_word(self) -> Word | None:
        return self._machine.request_next_word()

    def update_settings(self, **changes) -> Result[TrainingSettings, AppError]:
        result = validate_settings(self._settings, changes)
        if result.is_err():
            return result
        self._commit_settings(result.unwrap())
        log.info("settings_updated", changed=sorted(changes))
        return Ok(self._settings)

    def set_user_dictionaries(self, dictionaries: Sequence[Dictionary]) -> None:
        """Replace the user dictionaries, e.g. after a background load."""
        self._commit_dictionaries(list(dictionaries))
        log.info("user_dictionaries_loaded", count=len(self._user_dictionaries))

    def add_user_dictionary(
        self, name: str, words: Sequence[Word], dictionary_id: str | None = None
    ) -> Result[Dictionary, AppError]:
        if not name or not name.strip():
            return required_field("name", origin="training.add_user_dictionary")
        if not words:
            return required_field("words", origin="training.add_user_dictionary")

        taken = {d.id for d in self._user_dictionaries}
        if dictionary_id is None:
            n = len(self._user_dictionaries) + 1
            while f"user-{n}" in taken:
                n += 1
            dictionary_id = f"user-{n}"
        elif dictionary_id in taken or is_built_in(dictionary_id):
            return validation_error(
                f"Dictionary id '{dictionary_id}' is already in use",
                field="id",
                value=dictionary_id,
                origin="training.add_user_dictionary",
            )

        dictionary = Dictionary(id=dictionary_id, name=name.strip(), words=list(words), enabled=True)
        settings = replace(
            self._settings,
            enabled_dictionaries=[*self._settings.enabled_dictionaries, dictionary_id],
        )
        self._commit_dictionaries([*self._user_dictionaries, dictionary], settings)
        log.info("user_dictionary_added", dictionary_id=dictionary_id, words=len(dictionary.words))
        return Ok(dictionary)

    def import_words(self, text: str, default_name: str = "My words") -> Result[MergeResult, AppError]:
        """Parse import text and merge it into the first user dictionary."""
        words = parse_import_text(text)
        if not words:
            return validation_error(
                "No importable lines found",
                field="text",
                origin="training.import_words",
            )
        merged = merge_imported_words(self._user_dictionaries, words, default_name)
        settings = self._settings
        if merged.created_id is not None:
            settings = replace(
                settings,
                enabled_dictionaries=[*settings.enabled_dictionaries, merged.created_id],
            )
        self._commit_dictionaries(merged.dictionaries, settings)
        log.info("words_imported", parsed=len(words), added=merged.added, created=merged.created_id)
        return Ok(merged)

    def toggle_dictionary(self, dictionary_id: str, enabled: bool) -> Result[TrainingSettings, AppError]:
        if not is_built_in(dictionary_id) and all(d.id != dictionary_id for d in self._user_dictionaries):
            return not_found("Dictionary", dictionary_id, origin="training.toggle_dictionary")

        current = [d for d in self._settings.enabled_dictionaries if d != dictionary_id]
        if enabled:
            current.append(dictionary_id)
        self._commit_settings(replace(self._settings, enabled_dictionaries=current))
        log.info("dictionary_toggled", dictionary_id=dictionary_id, enabled=enabled)
        return Ok(self._settings)

    def snapshot(self) -> dict:
        machine = self._machine
        word = machine.current_word
        settings = self._settings
        show_answer = machine.feedback in ("correct", "incorrect")
        return {
            "word": word.to_dict() if word else None,
            "sentence": machine.current_sentence,
            "case": machine.current_case,
            "input": machine.user_input,
            "feedback": machine.feedback,
            "state": machine.state,
            "available": machine.available,
            "correctAnswer": machine.correct_answer if show_answer else None,
            "translation": word.translation_for(settings.language) if word and settings.show_translation else None,
            "stats": self._stats.to_dict(),
            "progress": compute_progress(machine.learned_words, settings, self._user_dictionaries).to_dict(),
            "settings": settings.to_dict(),
            "userDictionaries": [
                {"id": d.id, "name": d.name, "enabled": d.enabled, "size": len(d.words)}
                for d in self._user_dictionaries
            ],
        }

    def close(self) -> None:
        self._machine.close()
        log.info("training_session_closed", total=self._stats.total, correct=self._stats.correct)


class SessionRegistry:
    """Live sessions by id, bounded; the oldest is closed when the bound is hit."""

    __slots__ = ("_sessions", "_max_sessions")

    def __init__(self, max_sessions: int | None = None):
        self._sessions: OrderedDict[str, TrainingSession] = OrderedDict()
        self._max_sessions = max_sessions or app_settings.MAX_SESSIONS

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def add(self, session: TrainingSession) -> str:
        session_id = uuid.uuid4().hex
        self._sessions[session_id] = session
        while len(self._sessions) > self._max_sessions:
            evicted_id, evicted = self._sessions.popitem(last=False)
            evicted.close()
            log.info("training_session_evicted", session_id=evicted_id)
        return session_id

    def get(self, session_id: str) -> Result[TrainingSession, AppError]:
        session = self._sessions.get(session_id)
        if session is None:
            return not_found("TrainingSession", session_id, origin="training.registry")
        return Ok(session)

    def remove(self, session_id: str) -> Result[None, AppError]:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return not_found("TrainingSession", session_id, origin="training.registry")
        session.close()
        return Ok(None)

    def close_all(self) -> None:
        for session in self._sessions.values():
            session.close()
        self._sessions.clear()
