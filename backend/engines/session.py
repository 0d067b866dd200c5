"""Training session state machine.

States:
    awaiting-input    a prompt is shown, no verdict, no timer
    showing-feedback  a verdict is shown and exactly one timer is armed
    no-word           the pool is empty

Timers:
    advance-correct    dwell after a correct answer, then next word
    advance-incorrect  dwell after a wrong answer (longer on mobile), then next word
    clear-invalid      clears an invalid verdict, keeping word and input

At most one timer is live. Arming cancels the previous one, and every
cancellation clears the recorded purpose along with the handle.
"""
import random
from dataclasses import dataclass
from typing import Callable, Protocol, Sequence

from core.config import settings as app_settings
from core.logging import engine_logger
from languages.german.declension import Resolution, is_determiner, resolve
from languages.german.templates import generate_sentence

from .scheduler import Scheduler, TimerHandle, TimerPurpose
from .sequencer import Sequencer
from .types import SessionState, SubmitSource, TrainingSettings, Verdict, Word

log = engine_logger()

# Fields that change how a prompt is presented without changing the pool
_PROMPT_FIELDS = ("mode", "cases", "use_pronouns", "article_type", "pronoun_type")


class InputFocus(Protocol):
    """Keyboard focus of the answer field, owned by the presentation layer."""

    def is_focused(self) -> bool: ...

    def focus(self) -> None: ...


class Haptics(Protocol):
    def pulse(self, duration_ms: int) -> None: ...


@dataclass(frozen=True, slots=True)
class FeedbackTimings:
    correct_ms: int = 1500
    invalid_ms: int = 1500
    incorrect_ms: int = 1500
    incorrect_mobile_ms: int = 2000
    haptic_pulse_ms: int = 50

    @classmethod
    def from_settings(cls, cfg=app_settings) -> "FeedbackTimings":
        return cls(
            correct_ms=cfg.FEEDBACK_CORRECT_MS,
            invalid_ms=cfg.FEEDBACK_INVALID_MS,
            incorrect_ms=cfg.FEEDBACK_INCORRECT_MS,
            incorrect_mobile_ms=cfg.FEEDBACK_INCORRECT_MOBILE_MS,
            haptic_pulse_ms=cfg.HAPTIC_PULSE_MS,
        )


def learned_key(word: Word, settings: TrainingSettings) -> str:
    """Progress key: ``<topic>-<noun>`` under a topic filter, else ``all-<noun>``."""
    if settings.topics and word.topic:
        return f"{word.topic}-{word.noun}"
    return f"all-{word.noun}"


class SessionStateMachine:
    """Drives prompt, input, grading and timed transitions for one learner."""

    __slots__ = (
        "_settings",
        "_pool_provider",
        "_scheduler",
        "_rng",
        "_sequencer",
        "_is_mobile",
        "_focus",
        "_haptics",
        "_timings",
        "_word",
        "_sentence",
        "_case",
        "_input",
        "_feedback",
        "_timer",
        "_last_incorrect_input",
        "_last_correct_answer",
        "_learned",
        "_processing",
    )

    def __init__(
        self,
        settings: TrainingSettings,
        pool_provider: Callable[[], Sequence[Word]],
        scheduler: Scheduler,
        rng: random.Random | None = None,
        is_mobile: bool = False,
        focus: InputFocus | None = None,
        haptics: Haptics | None = None,
        timings: FeedbackTimings | None = None,
    ):
        self._settings = settings
        self._pool_provider = pool_provider
        self._scheduler = scheduler
        self._rng = rng or random.Random()
        self._sequencer = Sequencer(self._rng)
        self._is_mobile = is_mobile
        self._focus = focus
        self._haptics = haptics
        self._timings = timings or FeedbackTimings.from_settings()

        self._word: Word | None = None
        self._sentence: str | None = None
        self._case = "nominativ"
        self._input = ""
        self._feedback: Verdict | None = None
        self._timer: TimerHandle | None = None
        self._last_incorrect_input: str | None = None
        self._last_correct_answer: str | None = None
        self._learned: set[str] = set()
        self._processing = False

    # === Read-only view ===

    @property
    def settings(self) -> TrainingSettings:
        return self._settings

    @property
    def current_word(self) -> Word | None:
        return self._word

    @property
    def current_sentence(self) -> str | None:
        return self._sentence

    @property
    def current_case(self) -> str:
        return self._case

    @property
    def user_input(self) -> str:
        return self._input

    @property
    def feedback(self) -> Verdict | None:
        return self._feedback

    @property
    def available(self) -> bool:
        return self._word is not None

    @property
    def state(self) -> SessionState:
        if self._word is None:
            return "no-word"
        if self._feedback is not None:
            return "showing-feedback"
        return "awaiting-input"

    @property
    def pending_purpose(self) -> TimerPurpose | None:
        if self._timer is None or not self._timer.active:
            return None
        return self._timer.purpose

    @property
    def learned_words(self) -> frozenset[str]:
        return frozenset(self._learned)

    @property
    def last_correct_answer(self) -> str | None:
        return self._last_correct_answer

    @property
    def correct_answer(self) -> str | None:
        if self._word is None:
            return None
        return self._resolution().correct

    # === Timers ===

    def _arm(self, duration_ms: int, purpose: TimerPurpose, action: Callable[[], None]) -> None:
        self._cancel_timer()

        def fire() -> None:
            if self._timer is not handle:
                return
            self._timer = None
            action()

        handle = self._scheduler.schedule(duration_ms, purpose, fire)
        self._timer = handle

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._scheduler.cancel(self._timer)
            self._timer = None

    def _clear_invalid(self) -> None:
        if self._feedback == "invalid":
            self._feedback = None
            log.debug("invalid_cleared", noun=self._word.noun if self._word else None)

    # === Operations ===

    def request_next_word(self) -> Word | None:
        """Cancel any timer and present the next word from the sequencer."""
        self._cancel_timer()
        word = self._sequencer.next(self._pool_provider())
        self._present(word)
        if word is None:
            log.info("pool_empty", enabled=self._settings.enabled_dictionaries, topics=self._settings.topics)
        return word

    def _present(self, word: Word | None) -> None:
        self._word = word
        self._input = ""
        self._feedback = None
        self._last_incorrect_input = None
        self._sentence = None
        self._case = "nominativ"

        if word is not None and self._settings.mode == "sentence":
            cases = self._settings.cases
            self._case = self._rng.choice(cases) if cases else "nominativ"
            self._sentence = generate_sentence(word, self._case, self._settings.use_pronouns, self._rng)

        if word is not None:
            log.debug("word_presented", noun=word.noun, case=self._case, mode=self._settings.mode)
        self._restore_focus()

    def update_input(self, text: str) -> None:
        """Store lower-cased, trimmed input. Typing clears an invalid verdict at once."""
        self._input = text.strip().lower()
        if self._feedback == "invalid":
            self._feedback = None
            if self.pending_purpose == "clear-invalid":
                self._cancel_timer()

    def submit_answer(self, source: SubmitSource = "confirm") -> bool | None:
        """Grade the current input.

        Args:
            source: "confirm" for the explicit button, "enter" for the keyboard.
                Only a confirm may skip the dwell after an incorrect answer.

        Returns:
            True or False for a scored answer. None when nothing may reach the
            statistics (invalid input, early advance, ignored resubmission,
            re-entrant call or no word shown).
        """
        if self._processing or self._word is None:
            return None
        self._processing = True
        try:
            purpose = self.pending_purpose

            if purpose == "advance-correct":
                log.debug("early_advance", after="correct")
                self.request_next_word()
                return None

            if purpose == "advance-incorrect":
                unchanged = self._input == self._last_incorrect_input
                if (
                    source == "confirm"
                    and self._input
                    and is_determiner(self._input, self._settings.pronoun_type)
                    and unchanged
                ):
                    log.debug("early_advance", after="incorrect")
                    self.request_next_word()
                    return None
                if unchanged:
                    return None
                self._cancel_timer()

            elif purpose == "clear-invalid":
                self._cancel_timer()

            return self._grade()
        finally:
            self._processing = False

    def _resolution(self) -> Resolution:
        word = self._word
        case = self._case if self._settings.mode == "sentence" else "nominativ"
        return resolve(
            word.article,
            case,
            self._settings.article_type,
            self._settings.pronoun_type,
            word.alternative_articles,
        )

    def _grade(self) -> bool | None:
        word = self._word
        text = self._input

        if not text or not is_determiner(text, self._settings.pronoun_type):
            self._feedback = "invalid"
            self._arm(self._timings.invalid_ms, "clear-invalid", self._clear_invalid)
            self._pulse()
            log.debug("answer_invalid", noun=word.noun, input=text)
            return None

        if self._resolution().accepts(text):
            self._feedback = "correct"
            self._last_correct_answer = text
            self._learned.add(learned_key(word, self._settings))
            self._arm(self._timings.correct_ms, "advance-correct", self.request_next_word)
            log.info("answer_graded", verdict="correct", noun=word.noun, case=self._case)
            self._restore_focus()
            return True

        self._feedback = "incorrect"
        self._sequencer.requeue(word)
        self._last_incorrect_input = text
        duration = self._timings.incorrect_mobile_ms if self._is_mobile else self._timings.incorrect_ms
        self._arm(duration, "advance-incorrect", self.request_next_word)
        self._pulse()
        log.info("answer_graded", verdict="incorrect", noun=word.noun, case=self._case, input=text)
        self._restore_focus()
        return False

    def apply_settings(self, settings: TrainingSettings, pool_changed: bool) -> None:
        """Swap settings. A pool change redraws; a prompt change re-presents the same word."""
        previous = self._settings
        self._settings = settings
        if pool_changed:
            self.invalidate_pool()
            return
        if any(getattr(previous, f) != getattr(settings, f) for f in _PROMPT_FIELDS):
            self._cancel_timer()
            self._present(self._word)

    def invalidate_pool(self) -> None:
        """Drop the cached ordering and draw again from the current pool."""
        self._sequencer.reset()
        self.request_next_word()

    def close(self) -> None:
        self._cancel_timer()

    # === Device capabilities ===

    def _pulse(self) -> None:
        if self._is_mobile and self._haptics is not None:
            self._haptics.pulse(self._timings.haptic_pulse_ms)

    def _restore_focus(self) -> None:
        if self._focus is not None and not self._focus.is_focused():
            self._focus.focus()
