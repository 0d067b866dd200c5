"""Learned-word progress over the current pool."""
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .pool import get_enabled_words, get_topic_word_count, get_words_in_topics
from .types import Dictionary, TrainingSettings


@dataclass(frozen=True, slots=True)
class Progress:
    learned: int
    total: int
    percentage: int
    has_topics: bool
    per_topic: dict[str, tuple[int, int]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "learned": self.learned,
            "total": self.total,
            "percentage": self.percentage,
            "hasTopics": self.has_topics,
            "perTopic": {
                topic: {"learned": learned, "total": total}
                for topic, (learned, total) in self.per_topic.items()
            },
        }


def _percentage(learned: int, total: int) -> int:
    return round(learned / total * 100) if total else 0


def compute_progress(
    learned_keys: Iterable[str],
    settings: TrainingSettings,
    user_dictionaries: Sequence[Dictionary] = (),
) -> Progress:
    """Share of the pool learned this session.

    Under a topic filter the denominator is the words of the selected topics
    and only ``<topic>-<noun>`` keys count; otherwise it is the whole pool
    and only ``all-<noun>`` keys count. Each learned key counts once, even
    when several pool entries share it.
    """
    keys = set(learned_keys)
    enabled = settings.enabled_dictionaries
    topics = settings.topics

    if not topics:
        words = get_enabled_words(enabled, (), user_dictionaries)
        learned = len({f"all-{w.noun}" for w in words} & keys)
        return Progress(learned, len(words), _percentage(learned, len(words)), False)

    words = get_words_in_topics(enabled, topics, user_dictionaries)
    learned = len({f"{w.topic}-{w.noun}" for w in words} & keys)

    per_topic = {}
    for topic in topics:
        total = get_topic_word_count(topic, enabled, user_dictionaries)
        done = len({f"{topic}-{w.noun}" for w in words if w.topic == topic} & keys)
        per_topic[topic] = (done, total)

    return Progress(learned, len(words), _percentage(learned, len(words)), True, per_topic)
