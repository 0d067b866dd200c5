import random
from collections import Counter

from engines.sequencer import Sequencer, pool_fingerprint
from engines.types import Word


def _pool(n):
    return [Word(noun=f"Wort{i}", article="das") for i in range(n)]


def test_empty_pool_yields_none():
    assert Sequencer(random.Random(1)).next([]) is None


def test_one_pass_is_a_permutation():
    pool = _pool(8)
    seq = Sequencer(random.Random(7))
    drawn = [seq.next(pool) for _ in range(len(pool))]
    assert sorted(w.noun for w in drawn) == sorted(w.noun for w in pool)
    assert seq.remaining == 0


def test_exhaustion_reshuffles():
    pool = _pool(4)
    seq = Sequencer(random.Random(7))
    for _ in range(4):
        seq.next(pool)
    assert seq.next(pool) in pool
    assert seq.remaining == 3


def test_fingerprint_ignores_order():
    pool = _pool(5)
    assert pool_fingerprint(pool) == pool_fingerprint(list(reversed(pool)))
    assert pool_fingerprint(pool) != pool_fingerprint(pool[:-1])


def test_pool_change_restarts_pass():
    pool = _pool(5)
    seq = Sequencer(random.Random(3))
    seq.next(pool)
    seq.next(pool)
    bigger = pool + [Word(noun="Neu", article="der")]
    seq.next(bigger)
    assert seq.fingerprint == pool_fingerprint(bigger)
    assert seq.remaining == len(bigger) - 1


def test_requeued_word_returns_later_in_pass():
    pool = _pool(5)
    seq = Sequencer(random.Random(11))
    missed = seq.next(pool)
    seq.requeue(missed)

    following = [seq.next(pool) for _ in range(5)]
    assert following[0] is not missed
    assert missed in following
    assert following[-1] is missed


def test_requeue_does_not_disturb_scheduled_order():
    pool = _pool(6)
    a = Sequencer(random.Random(5))
    b = Sequencer(random.Random(5))
    first_a = a.next(pool)
    b.next(pool)
    a.requeue(first_a)
    assert [a.next(pool) for _ in range(6)] == [b.next(pool) for _ in range(5)] + [first_a]


def test_shuffle_is_roughly_uniform():
    pool = _pool(3)
    seq = Sequencer(random.Random(2024))
    firsts = Counter()
    for _ in range(3000):
        firsts[seq.next(pool).noun] += 1
        seq.next(pool)
        seq.next(pool)
    for noun in ("Wort0", "Wort1", "Wort2"):
        assert 800 < firsts[noun] < 1200


def test_word_missed_at_end_of_pass_is_not_served_next():
    pool = _pool(3)
    for seed in range(50):
        seq = Sequencer(random.Random(seed))
        last = [seq.next(pool) for _ in range(3)][-1]
        seq.requeue(last)

        following = [seq.next(pool) for _ in range(3)]
        assert following[0].noun != last.noun
        assert last.noun in [w.noun for w in following]


def test_end_of_pass_requeue_with_single_word_repeats_it():
    pool = _pool(1)
    seq = Sequencer(random.Random(9))
    only = seq.next(pool)
    seq.requeue(only)
    assert seq.next(pool) is only
