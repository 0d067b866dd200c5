"""Dictionary pool builder.

Merges built-in level dictionaries and user dictionaries into one word list,
deduplicated on ``(noun, article, topic)`` with the first occurrence winning.
Built-ins are walked in level order, then user dictionaries in list order.

Everything here is a pure function of its arguments: callers recompute on
every change to the enabled set, the topic filter or the user dictionaries.
"""
from typing import Iterable, Iterator, Sequence

from core.logging import engine_logger
from languages.german.catalog import BUILT_IN_LEVELS, get_built_in, is_built_in

from .types import Dictionary, Word

log = engine_logger()


def _enabled_sources(
    enabled_dictionaries: Iterable[str],
    user_dictionaries: Sequence[Dictionary],
) -> Iterator[Sequence[Word]]:
    """Word lists of enabled dictionaries. Membership is decided by the enabled set alone."""
    enabled = set(enabled_dictionaries)
    for level in BUILT_IN_LEVELS:
        if level in enabled:
            yield get_built_in(level)
    for dictionary in user_dictionaries:
        if dictionary.id in enabled:
            yield dictionary.words


def _dedupe(sources: Iterable[Sequence[Word]], keep=None) -> list[Word]:
    seen: set[tuple] = set()
    words = []
    for source in sources:
        for word in source:
            if keep is not None and not keep(word):
                continue
            if word.identity in seen:
                continue
            seen.add(word.identity)
            words.append(word)
    return words


def get_enabled_words(
    enabled_dictionaries: Iterable[str],
    topics: Iterable[str] = (),
    user_dictionaries: Sequence[Dictionary] = (),
) -> list[Word]:
    """Words from enabled dictionaries, restricted to ``topics`` when any are selected."""
    selected = set(topics)
    keep = (lambda w: w.topic in selected) if selected else None
    return _dedupe(_enabled_sources(enabled_dictionaries, user_dictionaries), keep)


def get_words_in_topics(
    enabled_dictionaries: Iterable[str],
    topics: Iterable[str],
    user_dictionaries: Sequence[Dictionary] = (),
) -> list[Word]:
    """Only words whose topic is in ``topics``. An empty topic set yields nothing."""
    selected = set(topics)
    if not selected:
        return []
    return _dedupe(
        _enabled_sources(enabled_dictionaries, user_dictionaries),
        lambda w: w.topic in selected,
    )


def get_topic_word_count(
    topic: str,
    enabled_dictionaries: Iterable[str],
    user_dictionaries: Sequence[Dictionary] = (),
) -> int:
    return len(get_words_in_topics(enabled_dictionaries, [topic], user_dictionaries))


def get_all_topics(user_dictionaries: Sequence[Dictionary] = ()) -> list[str]:
    """Every distinct topic across built-in and user dictionaries, sorted."""
    topics = {w.topic for level in BUILT_IN_LEVELS for w in get_built_in(level) if w.topic}
    topics.update(w.topic for d in user_dictionaries for w in d.words if w.topic)
    return sorted(topics)


def filter_topics_with_words(
    topics: Iterable[str],
    enabled_dictionaries: Iterable[str],
    user_dictionaries: Sequence[Dictionary] = (),
) -> list[str]:
    """Selected topics still backed by at least one enabled word, in input order."""
    enabled = list(enabled_dictionaries)
    return [t for t in topics if get_topic_word_count(t, enabled, user_dictionaries) > 0]


def has_custom_dictionary_enabled(enabled_dictionaries: Iterable[str]) -> bool:
    return any(not is_built_in(d) for d in enabled_dictionaries)


def resolve_enabled_dictionaries(
    enabled_dictionaries: Iterable[str],
    topics: Iterable[str],
    user_dictionaries: Sequence[Dictionary],
    fallback: Sequence[str],
) -> list[str]:
    """Enabled set to train on: ``fallback`` when the requested set yields no words."""
    enabled = list(enabled_dictionaries)
    if get_enabled_words(enabled, topics, user_dictionaries):
        return enabled
    # A topic filter can empty the pool on its own; only the dictionaries are replaced
    if enabled and get_enabled_words(enabled, (), user_dictionaries):
        return enabled
    log.info("empty_pool_fallback", requested=enabled, fallback=list(fallback))
    return list(fallback)
