"""Built-in leveled dictionaries.

Each level is a YAML list under ``dictionaries/``. Levels are loaded once per
process and handed out as immutable tuples of ``Word``.
"""
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

import yaml

from core.logging import engine_logger

log = engine_logger()

DICTIONARY_DIR = Path(__file__).parent / "dictionaries"

BUILT_IN_LEVELS: tuple[str, ...] = ("A1", "A2")


def load_yaml(path: Path) -> list:
    if not path.exists():
        return []
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or []


@lru_cache(maxsize=None)
def get_built_in(level: str) -> tuple:
    """Words of one built-in level, tagged with the level. Unknown levels are empty."""
    from engines.types import Word

    if level not in BUILT_IN_LEVELS:
        return ()
    entries = load_yaml(DICTIONARY_DIR / f"{level}.yaml")
    words = tuple(Word.from_dict({"level": level, **entry}) for entry in entries)
    log.debug("built_in_dictionary_loaded", level=level, words=len(words))
    return words


def built_in_dictionaries() -> MappingProxyType:
    """Read-only mapping of level -> words, in level order."""
    return MappingProxyType({level: get_built_in(level) for level in BUILT_IN_LEVELS})


def is_built_in(dictionary_id: str) -> bool:
    return dictionary_id in BUILT_IN_LEVELS
