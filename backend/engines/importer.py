"""Plain-text word list import.

Supported line formats::

    der Hund собака
    der Hund - собака     (also " – ", " — ", "->", ":", "=")
    - die Banane — банан  (leading bullet "-", "*", "•" or "·")

Lines that do not start with der/die/das are skipped.
"""
import re
from dataclasses import dataclass, field, replace
from typing import Iterable, Sequence

from core.logging import engine_logger

from .types import Dictionary, Word

log = engine_logger()

IMPORT_ARTICLES = ("der", "die", "das")
SEPARATOR = re.compile(r"(?:\s+[-–—]\s+|->|:|=)")
LEADING_BULLET = re.compile(r"^[-*•·]\s+")
_TABS = re.compile(r"\t+")
_SPACES = re.compile(r"\s+")


@dataclass(slots=True)
class MergeResult:
    dictionaries: list[Dictionary] = field(default_factory=list)
    created_id: str | None = None
    added: int = 0


def _parse_line(raw: str) -> Word | None:
    line = _TABS.sub(" ", raw).strip()
    line = LEADING_BULLET.sub("", line)
    if not line:
        return None

    left, *right = SEPARATOR.split(line)
    translation = " ".join(right).strip() or None

    tokens = _SPACES.sub(" ", left).strip().split(" ")
    if len(tokens) < 2:
        return None
    article = tokens[0].lower()
    if article not in IMPORT_ARTICLES:
        return None

    if right:
        noun = " ".join(tokens[1:]).strip()
    else:
        # no separator: everything after the noun is the translation
        noun = tokens[1].strip()
        translation = " ".join(tokens[2:]).strip() or None
    if not noun:
        return None
    return Word(noun=noun, article=article, translation=translation)


def parse_import_text(text: str) -> list[Word]:
    words = []
    skipped = 0
    for raw in text.splitlines():
        if not raw.strip():
            continue
        word = _parse_line(raw)
        if word is None:
            skipped += 1
            continue
        words.append(word)
    log.debug("import_text_parsed", words=len(words), skipped=skipped)
    return words


def dedupe_words_by_noun(words: Iterable[Word]) -> list[Word]:
    """Keep the first word for each noun."""
    seen: set[str] = set()
    unique = []
    for word in words:
        if word.noun in seen:
            continue
        seen.add(word.noun)
        unique.append(word)
    return unique


def merge_imported_words(
    current: Sequence[Dictionary],
    imported: Iterable[Word],
    default_name: str,
    default_id: str = "user-1",
) -> MergeResult:
    """Merge into the first user dictionary, or create the default one when none exist.

    Inputs are never mutated; the first dictionary is replaced by a copy.
    """
    to_add = dedupe_words_by_noun(imported)
    if not to_add:
        return MergeResult(list(current))

    if not current:
        created = Dictionary(id=default_id, name=default_name, words=to_add, enabled=True)
        return MergeResult([created], created_id=default_id, added=len(to_add))

    first, *rest = current
    existing = {w.noun for w in first.words}
    new_words = [w for w in to_add if w.noun not in existing]
    if not new_words:
        return MergeResult(list(current))

    merged = replace(first, words=[*first.words, *new_words])
    return MergeResult([merged, *rest], added=len(new_words))
