"""
Engine Core - Deck, selection and timing primitives of the memory game.

The engine core:
1. Builds uniformly shuffled decks of card pairs
2. Tracks which cards are face up and awaiting evaluation
3. Evaluates completed pairs
4. Counts down the timed board
5. Schedules delayed callbacks through a host-supplied Scheduler
"""

from .state import (
    Card,
    CardState,
    Deck,
    FlipmatchError,
    GameConfigError,
    GameMode,
    Outcome,
    Session,
    SessionPhase,
)
from .action import MatchOutcome, PickResult, PickStatus, RejectReason
from .deck import DeckBuilder, build_deck, fisher_yates
from .selection import SelectionTracker
from .evaluator import MatchEvaluator, SHAKE_DELAY_MS, HIDE_DELAY_MS
from .clock import ClockState, SessionClock, TICK_INTERVAL_MS, DEFAULT_MAX_TIME_SECONDS
from .scheduler import Scheduler, TimerHandle, ManualScheduler, AsyncioScheduler
from .renderer import Renderer, EventLog, RenderEvent, RenderKind

__all__ = [
    "Card",
    "CardState",
    "Deck",
    "FlipmatchError",
    "GameConfigError",
    "GameMode",
    "Outcome",
    "Session",
    "SessionPhase",
    "MatchOutcome",
    "PickResult",
    "PickStatus",
    "RejectReason",
    "DeckBuilder",
    "build_deck",
    "fisher_yates",
    "SelectionTracker",
    "MatchEvaluator",
    "SHAKE_DELAY_MS",
    "HIDE_DELAY_MS",
    "ClockState",
    "SessionClock",
    "TICK_INTERVAL_MS",
    "DEFAULT_MAX_TIME_SECONDS",
    "Scheduler",
    "TimerHandle",
    "ManualScheduler",
    "AsyncioScheduler",
    "Renderer",
    "EventLog",
    "RenderEvent",
    "RenderKind",
]
