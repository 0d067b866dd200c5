"""Session statistics: a pure reducer over scored outcomes."""
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SessionStats:
    """Scored outcomes of a session. Unscored (invalid) submissions never reach it."""
    total: int = 0
    correct: int = 0
    incorrect: int = 0
    streak: int = 0
    best_streak: int = 0

    @property
    def accuracy(self) -> int:
        if self.total == 0:
            return 0
        return round(self.correct / self.total * 100)

    def record(self, is_correct: bool) -> "SessionStats":
        if is_correct:
            streak = self.streak + 1
            return SessionStats(
                total=self.total + 1,
                correct=self.correct + 1,
                incorrect=self.incorrect,
                streak=streak,
                best_streak=max(self.best_streak, streak),
            )
        return SessionStats(
            total=self.total + 1,
            correct=self.correct,
            incorrect=self.incorrect + 1,
            streak=0,
            best_streak=self.best_streak,
        )

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "correct": self.correct,
            "incorrect": self.incorrect,
            "streak": self.streak,
            "bestStreak": self.best_streak,
            "accuracy": self.accuracy,
        }
