import os
import random
import tempfile

# Settings are read at import time; point them at throwaway files first
_TMP = tempfile.mkdtemp(prefix="artikel-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_TMP}/test.db")
os.environ.setdefault("LOCAL_STORE_PATH", os.path.join(_TMP, "local.json"))
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest

from engines.scheduler import TimerHandle
from engines.session import FeedbackTimings, SessionStateMachine
from engines.types import Dictionary, TrainingSettings, Word


class FakeScheduler:
    """Virtual-clock scheduler. ``advance`` fires due timers in order."""

    def __init__(self):
        self.now = 0
        self._timers: list[tuple[int, int, TimerHandle, object]] = []
        self._seq = 0

    def schedule(self, duration_ms, purpose, callback):
        handle = TimerHandle(purpose, duration_ms)
        self._seq += 1
        self._timers.append((self.now + duration_ms, self._seq, handle, callback))
        return handle

    def cancel(self, handle):
        handle.cancel()

    @property
    def armed(self) -> list[TimerHandle]:
        return [h for _, _, h, _ in self._timers if h.active]

    def advance(self, ms: int) -> None:
        target = self.now + ms
        while True:
            due = sorted(
                (t for t in self._timers if t[2].active and t[0] <= target),
                key=lambda t: (t[0], t[1]),
            )
            if not due:
                break
            when, _, handle, callback = due[0]
            self.now = when
            handle.fired = True
            callback()
        self.now = target


class FakeFocus:
    def __init__(self, focused: bool = False):
        self.focused = focused
        self.calls = 0

    def is_focused(self) -> bool:
        return self.focused

    def focus(self) -> None:
        self.calls += 1
        self.focused = True


class FakeHaptics:
    def __init__(self):
        self.pulses: list[int] = []

    def pulse(self, duration_ms: int) -> None:
        self.pulses.append(duration_ms)


TIMINGS = FeedbackTimings(
    correct_ms=1500,
    invalid_ms=1500,
    incorrect_ms=1500,
    incorrect_mobile_ms=2000,
    haptic_pulse_ms=50,
)


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def tisch():
    return Word(noun="Tisch", article="der", translation_en="table", topic="Furniture")


@pytest.fixture
def words():
    return [
        Word(noun="Tisch", article="der", translation_en="table", topic="Furniture"),
        Word(noun="Lampe", article="die", translation_en="lamp", topic="Furniture"),
        Word(noun="Buch", article="das", translation_en="book", topic="School"),
        Word(noun="Hund", article="der", translation_en="dog", topic="Animals"),
        Word(noun="Katze", article="die", translation_en="cat", topic="Animals"),
    ]


@pytest.fixture
def user_dictionary():
    return Dictionary(
        id="user-1",
        name="Mine",
        words=[
            Word(noun="Haus", article="das", topic="Rooms"),
            Word(noun="Rakete", article="die", topic="Space"),
        ],
    )


@pytest.fixture
def make_machine(scheduler, rng):
    """Build a state machine over a fixed pool."""

    def factory(pool, settings=None, **kwargs):
        kwargs.setdefault("timings", TIMINGS)
        return SessionStateMachine(
            settings or TrainingSettings(),
            lambda: pool,
            scheduler,
            rng=rng,
            **kwargs,
        )

    return factory
