"""
Game Controller - Public API of the memory game engine.

The controller composes the deck builder, selection tracker, match
evaluator and session clock, and is the only thing a host talks to:

    controller = GameController(scheduler, renderer=my_renderer)
    controller.new_game(pair_count=6, mode=GameMode.TIMED)
    controller.pick(3)
    controller.pick(7)
    ...
    controller.reset()

TIMERS:
- Every delayed callback (mismatch shake/hide, clock ticks, auto reset)
  is tagged with the generation of the game that scheduled it
- new_game()/reset() bump the generation and cancel outstanding timers,
  so a callback from an earlier game can never touch the current one
- A mismatch hide that fires after the session ended still turns the
  cards back over, but never changes phase or counters
"""

from __future__ import annotations
import logging
import random
from typing import Callable

from ..engine_core.action import MatchOutcome, PickResult, RejectReason
from ..engine_core.clock import ClockState, SessionClock, DEFAULT_MAX_TIME_SECONDS
from ..engine_core.deck import DeckBuilder
from ..engine_core.evaluator import MatchEvaluator
from ..engine_core.renderer import Renderer
from ..engine_core.scheduler import Scheduler, TimerHandle
from ..engine_core.selection import SelectionTracker
from ..engine_core.state import (
    Card, CardState, Deck, GameConfigError, GameMode, Session, SessionPhase,
)
from ..games.boards import GameConfig

logger = logging.getLogger(__name__)


class GameController:
    """
    Owns one game at a time and drives it from picks and timer callbacks.

    Single-threaded: all calls must come from the thread (or event loop)
    that runs the scheduler's callbacks.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        renderer: Renderer | None = None,
        rng: random.Random | None = None,
        evaluator: MatchEvaluator | None = None,
    ):
        self.scheduler = scheduler
        self.renderer = renderer or Renderer()
        self.builder = DeckBuilder(rng=rng or random.Random())
        self.evaluator = evaluator or MatchEvaluator()

        self._config: GameConfig | None = None
        self._session: Session | None = None
        self._deck: Deck | None = None
        self._tracker: SelectionTracker | None = None
        self._clock: SessionClock | None = None
        self._timers: set[TimerHandle] = set()
        self._generation = 0

    # =========================================================================
    # Read-only views
    # =========================================================================

    @property
    def config(self) -> GameConfig | None:
        return self._config

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def deck(self) -> Deck | None:
        return self._deck

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending_slots(self) -> list[int]:
        """Slots of the face-up cards awaiting evaluation."""
        if not self._tracker:
            return []
        return [card.slot_index for card in self._tracker.pending]

    @property
    def is_locked(self) -> bool:
        return bool(self._tracker and self._tracker.is_locked)

    @property
    def clock_state(self) -> ClockState | None:
        return self._clock.state if self._clock else None

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def new_game(
        self,
        pair_count: int,
        mode: GameMode | str = GameMode.UNTIMED,
        max_time_seconds: int = DEFAULT_MAX_TIME_SECONDS,
        lazy_clock_start: bool = True,
        auto_reset_delay_ms: int | None = None,
    ) -> Session:
        """
        Start a fresh game, discarding the current one.

        Raises GameConfigError for an invalid configuration; in that case
        the current game is left untouched.
        """
        return self.new_game_from_config(GameConfig(
            pair_count=pair_count,
            mode=mode,
            max_time_seconds=max_time_seconds,
            lazy_clock_start=lazy_clock_start,
            auto_reset_delay_ms=auto_reset_delay_ms,
        ))

    def new_game_from_config(self, config: GameConfig) -> Session:
        """Start a fresh game from a GameConfig."""
        config = config.validate()
        deck = self.builder.build(config.pair_count)

        self._teardown()
        self._generation += 1
        self._config = config
        self._deck = deck
        self._session = Session(
            mode=config.mode,
            total_pairs=config.pair_count,
            time_left_seconds=config.max_time_seconds if config.is_timed else None,
            generation=self._generation,
        )
        self._tracker = SelectionTracker(deck=deck, session=self._session)
        self._clock = self._make_clock(config) if config.is_timed else None

        logger.info(
            "New %s game %d: %d pairs",
            config.mode.value, self._generation, config.pair_count,
        )

        self.renderer.render_board_reset(len(deck))
        if config.is_timed:
            self.renderer.render_time_left(config.max_time_seconds)
            self.renderer.render_moves(0)
            if not config.lazy_clock_start:
                self._clock.start()

        return self._session

    def reset(self) -> Session:
        """Start over with the same configuration, from any phase."""
        if self._config is None:
            raise GameConfigError("No game to reset - call new_game() first")
        return self.new_game_from_config(self._config)

    def close(self) -> None:
        """
        End the current game for good.

        Stops the clock, cancels every outstanding timer and detaches the
        selection tracker, so later picks are rejected with NO_GAME. The
        last session and deck stay readable. reset() starts a fresh game.
        """
        self._teardown()
        self._generation += 1
        self._tracker = None
        self._clock = None

    # =========================================================================
    # Input
    # =========================================================================

    def pick(self, slot_index: int) -> PickResult:
        """
        Handle the player selecting a card slot.

        Returns an accepted or rejected PickResult. When the pick completes
        a pair, result.match holds the evaluation outcome.
        """
        if self._tracker is None:
            return PickResult.rejected(slot_index, RejectReason.NO_GAME)

        result = self._tracker.try_reveal(slot_index)
        if not result.accepted:
            logger.debug("Pick %s rejected: %s", slot_index, result.reason.value)
            return result

        session = self._session
        card = self._deck.card(slot_index)
        session.moves += 1
        self.renderer.render_reveal(card.slot_index, card.face_id)

        if session.mode == GameMode.TIMED:
            self.renderer.render_moves(session.moves)
            if self._clock.state == ClockState.IDLE:
                self._clock.start()

        if result.pair is not None:
            first, second = result.pair
            result.match = self.evaluator.evaluate(first, second)
            if result.match == MatchOutcome.MATCH:
                self._resolve_match(first, second)
            else:
                self._schedule_mismatch(first, second)

        return result

    # =========================================================================
    # Evaluation
    # =========================================================================

    def _resolve_match(self, first: Card, second: Card) -> None:
        self.evaluator.lock_in(first, second)
        self.renderer.render_matched(first.slot_index)
        self.renderer.render_matched(second.slot_index)
        self._tracker.clear_pending()

        session = self._session
        session.matched_pairs += 1
        logger.debug(
            "Pair %d found (%d/%d)",
            first.face_id, session.matched_pairs, session.total_pairs,
        )

        # Win takes priority: this runs before any later clock tick
        if session.is_complete:
            self._end_session(SessionPhase.WON)

    def _schedule_mismatch(self, first: Card, second: Card) -> None:
        def shake():
            for card in (first, second):
                if card.state == CardState.REVEALED:
                    self.renderer.render_shake(card.slot_index)

        def hide():
            for card in self.evaluator.turn_back(first, second):
                self.renderer.render_hide(card.slot_index)
            self._tracker.clear_pending()

        self._schedule(self.evaluator.shake_delay_ms, shake, "shake")
        self._schedule(self.evaluator.hide_delay_ms, hide, "hide")

    def _end_session(self, phase: SessionPhase) -> None:
        session = self._session
        session.phase = phase
        if self._clock:
            self._clock.stop()

        logger.info(
            "Game %d ended: %s after %d moves (%d/%d pairs)",
            self._generation, phase.value, session.moves,
            session.matched_pairs, session.total_pairs,
        )
        self.renderer.render_session_ended(session.outcome)

        if phase == SessionPhase.WON and self._config.auto_reset_delay_ms is not None:
            self._schedule(self._config.auto_reset_delay_ms, self.reset, "auto reset")

    # =========================================================================
    # Timers
    # =========================================================================

    def _make_clock(self, config: GameConfig) -> SessionClock:
        generation = self._generation

        def on_tick(seconds_left: int):
            if generation != self._generation:
                return
            self._session.time_left_seconds = seconds_left
            self.renderer.render_time_left(seconds_left)

        def on_expire():
            if generation != self._generation:
                return
            if self._session.phase == SessionPhase.PLAYING:
                self._end_session(SessionPhase.TIMED_OUT)

        return SessionClock(
            self.scheduler,
            max_time_seconds=config.max_time_seconds,
            on_tick=on_tick,
            on_expire=on_expire,
        )

    def _schedule(self, delay_ms: int, callback: Callable[[], None], label: str) -> None:
        """Schedule a callback bound to the current game generation."""
        generation = self._generation
        handle: TimerHandle | None = None

        def fire():
            self._timers.discard(handle)
            if generation != self._generation:
                logger.debug("Ignoring stale %s from game %d", label, generation)
                return
            callback()

        handle = self.scheduler.call_later(delay_ms, fire)
        self._timers.add(handle)

    def _teardown(self) -> None:
        for handle in self._timers:
            handle.cancel()
        self._timers.clear()
        if self._clock:
            self._clock.stop()
