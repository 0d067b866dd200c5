from engines.types import Word, Dictionary, TrainingSettings
from engines.stats import SessionStats
from engines.sequencer import Sequencer, pool_fingerprint
from engines.scheduler import LoopScheduler, Scheduler, TimerHandle
from engines.session import SessionStateMachine, FeedbackTimings
from engines.training import TrainingSession, SessionRegistry

__all__ = [
    "Word",
    "Dictionary",
    "TrainingSettings",
    "SessionStats",
    "Sequencer",
    "pool_fingerprint",
    "LoopScheduler",
    "Scheduler",
    "TimerHandle",
    "SessionStateMachine",
    "FeedbackTimings",
    "TrainingSession",
    "SessionRegistry",
]
