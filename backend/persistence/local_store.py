"""JSON file store for training settings and user dictionaries.

The file holds two keys, ``settings`` and ``user_dictionaries``. It is read
once when a session starts and rewritten on every change. Storage failures
are logged and swallowed so a session can continue in memory.
"""
from __future__ import annotations

import json
import os
from pathlib import Path

from core.errors import AppError, file_read_error, file_write_error
from core.logging import store_logger
from engines.types import Dictionary, TrainingSettings

log = store_logger()


def _log_failure(event: str, error: AppError) -> None:
    log.warning(
        event,
        error_code=error.code.name,
        error_code_num=error.code.value,
        message=error.message,
        **error.metadata,
    )


class LocalStore:
    __slots__ = ("path",)

    def __init__(self, path: Path | str):
        self.path = Path(path)

    # === IO ===
    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            _log_failure("store_read_failed", file_read_error(self.path, e, origin="local_store").unwrap_err())
            return {}
        return data if isinstance(data, dict) else {}

    def _write_key(self, key: str, value) -> bool:
        data = self._read()
        data[key] = value
        tmp_path = self.path.with_suffix(".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except (OSError, ValueError) as e:
            _log_failure("store_write_failed", file_write_error(self.path, e, origin="local_store").unwrap_err())
            if tmp_path.exists():
                tmp_path.unlink()
            return False
        log.debug("store_written", key=key, path=str(self.path))
        return True

    # === Settings ===
    def load_settings(self) -> TrainingSettings:
        raw = self._read().get("settings")
        if not isinstance(raw, dict):
            return TrainingSettings()
        try:
            return TrainingSettings.from_dict(raw)
        except TypeError as e:
            _log_failure("store_read_failed", file_read_error(self.path, e, origin="local_store.settings").unwrap_err())
            return TrainingSettings()

    def save_settings(self, settings: TrainingSettings) -> bool:
        return self._write_key("settings", settings.to_dict())

    # === User dictionaries ===
    def load_user_dictionaries(self) -> list[Dictionary]:
        raw = self._read().get("user_dictionaries")
        if not isinstance(raw, list):
            return []
        dictionaries = []
        for item in raw:
            try:
                dictionaries.append(Dictionary.from_dict(item))
            except (KeyError, TypeError) as e:
                _log_failure("store_read_failed", file_read_error(self.path, e, origin="local_store.dictionaries").unwrap_err())
        return dictionaries

    def save_user_dictionaries(self, dictionaries: list[Dictionary]) -> bool:
        return self._write_key("user_dictionaries", [d.to_dict() for d in dictionaries])
