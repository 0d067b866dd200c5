"""Shuffle-and-replay word sequencing.

The sequencer walks a shuffled ordering of the pool. A new ordering is drawn
when the pool's fingerprint changes or the current pass is exhausted. Missed
words come back later: appended to the live ordering mid-pass, or placed
after at least one other word when the pass has just ended.
"""
import hashlib
import random
from typing import Sequence

from core.logging import engine_logger

from .types import Word

log = engine_logger()


def pool_fingerprint(words: Sequence[Word]) -> str:
    """Order-independent digest of a pool's nouns."""
    joined = "|".join(sorted(w.noun for w in words))
    return hashlib.sha1(joined.encode("utf-8")).hexdigest()


class Sequencer:
    """Non-repeating traversal over a word pool."""

    __slots__ = ("_rng", "_order", "_cursor", "_fingerprint")

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()
        self._order: list[Word] = []
        self._cursor = 0
        self._fingerprint: str | None = None

    @property
    def fingerprint(self) -> str | None:
        return self._fingerprint

    @property
    def remaining(self) -> int:
        return len(self._order) - self._cursor

    def _reshuffle(self, pool: Sequence[Word]) -> None:
        self._order = list(pool)
        self._rng.shuffle(self._order)
        self._cursor = 0

    def next(self, pool: Sequence[Word]) -> Word | None:
        """Next word of the pass, or None for an empty pool."""
        if not pool:
            self.reset()
            return None

        fingerprint = pool_fingerprint(pool)
        if fingerprint != self._fingerprint:
            log.debug("sequencer_pool_changed", size=len(pool))
            self._fingerprint = fingerprint
            self._reshuffle(pool)
        elif self._cursor >= len(self._order):
            log.debug("sequencer_pass_exhausted", size=len(pool))
            self._reshuffle(pool)

        word = self._order[self._cursor]
        self._cursor += 1
        return word

    def requeue(self, word: Word) -> None:
        """Schedule a missed word to come back later.

        Mid-pass the word is appended to the live ordering. At the end of a
        pass the next pass is drawn now, with the missed word kept off its
        first slot so at least one other word comes before it.
        """
        if self._cursor < len(self._order):
            self._order.append(word)
            return

        fresh = list({w.identity: w for w in self._order}.values())
        if len(fresh) < 2:
            self._order.append(word)
            return

        self._rng.shuffle(fresh)
        if fresh[0].identity == word.identity:
            swap = self._rng.randrange(1, len(fresh))
            fresh[0], fresh[swap] = fresh[swap], fresh[0]
        self._order = fresh
        self._cursor = 0
        log.debug("sequencer_requeue_next_pass", noun=word.noun, size=len(fresh))

    def reset(self) -> None:
        self._order = []
        self._cursor = 0
        self._fingerprint = None
