"""
Game Manager - Creates and tracks hosted games.

LIFECYCLE:
1. Host creates a game from a board preset or an explicit config
2. Picks and timer callbacks drive the game's controller
3. Render events accumulate in the game's EventLog until drained
4. Host ends the game -> timers cancelled, game removed from memory

PERSISTENCE RULES:
- In-memory only
- A game is lost when the process exits
"""

from __future__ import annotations
import logging
import random
import time
import uuid
from dataclasses import dataclass

from ..engine_core.renderer import EventLog
from ..engine_core.scheduler import ManualScheduler, Scheduler
from ..games.boards import Board, GameConfig
from .controller import GameController

logger = logging.getLogger(__name__)


@dataclass
class HostedGame:
    """
    A game owned by the manager.

    Contains:
    - The controller running the game
    - The event log it renders into
    - The board preset and creation time
    """
    game_id: str
    controller: GameController
    events: EventLog
    created_at: float
    board: Board | None = None


class GameManager:
    """
    Manages hosted games.

    Responsibilities:
    - Create games on a shared scheduler
    - Look games up by id
    - Clean up ended or stale games

    No persistence - games are in-memory only.
    """

    def __init__(self, scheduler: Scheduler, seed: int | None = None):
        self.scheduler = scheduler
        self._seed = seed
        self._games: dict[str, HostedGame] = {}

    def create_game(
        self,
        config: GameConfig,
        board: Board | None = None,
        seed: int | None = None,
    ) -> HostedGame:
        """
        Create and start a new game.

        Args:
            config: Game configuration (validated here)
            board: Preset the config came from, if any
            seed: Optional shuffle seed for reproducible decks

        Raises:
            GameConfigError: if the configuration is invalid
        """
        if seed is None:
            seed = self._seed
        events = EventLog(clock=self._clock_reader())
        controller = GameController(
            self.scheduler,
            renderer=events,
            rng=random.Random(seed),
        )
        controller.new_game_from_config(config)

        game = HostedGame(
            game_id=str(uuid.uuid4()),
            controller=controller,
            events=events,
            created_at=time.time(),
            board=board,
        )
        self._games[game.game_id] = game
        logger.info("Hosting game %s (%s)", game.game_id, board.name if board else "custom")
        return game

    def get_game(self, game_id: str) -> HostedGame | None:
        """Get a game by ID."""
        return self._games.get(game_id)

    def end_game(self, game_id: str) -> bool:
        """
        End a game and release it.

        Cancels its timers and removes it from memory.
        Returns False if the game does not exist.
        """
        game = self._games.pop(game_id, None)
        if not game:
            return False
        game.controller.close()
        game.events.drain()
        logger.info("Ended game %s", game_id)
        return True

    def list_active_games(self) -> list[str]:
        """List IDs of active games."""
        return list(self._games)

    def cleanup_stale_games(self, max_age_seconds: int = 3600) -> int:
        """
        End games older than max_age_seconds.

        Returns the number of games removed.
        """
        current_time = time.time()
        stale = [
            game_id for game_id, game in self._games.items()
            if current_time - game.created_at > max_age_seconds
        ]
        for game_id in stale:
            self.end_game(game_id)
        return len(stale)

    def _clock_reader(self):
        # Only the simulated clock can stamp events
        if isinstance(self.scheduler, ManualScheduler):
            return lambda: self.scheduler.now_ms
        return None
