"""Cancellable timers for feedback dwell times.

The session state machine depends only on the ``Scheduler`` protocol.
``LoopScheduler`` runs callbacks on the asyncio event loop; tests drive a
virtual clock instead.
"""
import asyncio
from typing import Callable, Literal, Protocol

TimerPurpose = Literal["advance-correct", "advance-incorrect", "clear-invalid"]


class TimerHandle:
    """A scheduled callback, tagged with why it was armed."""

    __slots__ = ("purpose", "duration_ms", "cancelled", "fired", "_cancel")

    def __init__(self, purpose: TimerPurpose, duration_ms: int, cancel: Callable[[], None] | None = None):
        self.purpose = purpose
        self.duration_ms = duration_ms
        self.cancelled = False
        self.fired = False
        self._cancel = cancel

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> None:
        if not self.active:
            return
        self.cancelled = True
        if self._cancel is not None:
            self._cancel()

    def __repr__(self) -> str:
        state = "armed" if self.active else ("cancelled" if self.cancelled else "fired")
        return f"<TimerHandle {self.purpose} {self.duration_ms}ms {state}>"


class Scheduler(Protocol):
    def schedule(self, duration_ms: int, purpose: TimerPurpose, callback: Callable[[], None]) -> TimerHandle: ...

    def cancel(self, handle: TimerHandle) -> None: ...


class LoopScheduler:
    """Scheduler backed by ``loop.call_later``. Must be used from the running loop."""

    __slots__ = ("_loop",)

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def schedule(self, duration_ms: int, purpose: TimerPurpose, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        handle = TimerHandle(purpose, duration_ms)

        def fire() -> None:
            if handle.active:
                handle.fired = True
                callback()

        timer = loop.call_later(duration_ms / 1000, fire)
        handle._cancel = timer.cancel
        return handle

    def cancel(self, handle: TimerHandle) -> None:
        handle.cancel()
