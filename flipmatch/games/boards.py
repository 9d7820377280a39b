"""
Board presets and game configuration.

Two boards ship with the engine:
- classic: 4x4, untimed, reshuffles itself one second after a win
- timed:   3x4, 20 second countdown with a move counter
"""

from __future__ import annotations
from dataclasses import dataclass, replace

from ..engine_core.clock import DEFAULT_MAX_TIME_SECONDS
from ..engine_core.state import GameConfigError, GameMode


@dataclass(frozen=True)
class GameConfig:
    """
    Construction parameters for a game.

    lazy_clock_start: the countdown waits for the first accepted pick.
    auto_reset_delay_ms: when set, a won game resets itself after the delay.
    """
    pair_count: int
    mode: GameMode = GameMode.UNTIMED
    max_time_seconds: int = DEFAULT_MAX_TIME_SECONDS
    lazy_clock_start: bool = True
    auto_reset_delay_ms: int | None = None

    def validate(self) -> GameConfig:
        """
        Check the configuration, coercing a mode given by name.

        Returns the (possibly coerced) config; raises GameConfigError.
        """
        mode = self.mode
        if not isinstance(mode, GameMode):
            try:
                mode = GameMode(mode)
            except ValueError:
                raise GameConfigError(f"Unsupported mode: {self.mode!r}") from None

        if isinstance(self.pair_count, bool) or not isinstance(self.pair_count, int):
            raise GameConfigError(f"pair_count must be an integer, got {self.pair_count!r}")
        if self.pair_count <= 0:
            raise GameConfigError(f"pair_count must be positive, got {self.pair_count}")

        if mode == GameMode.TIMED:
            if isinstance(self.max_time_seconds, bool) or not isinstance(self.max_time_seconds, int):
                raise GameConfigError("max_time_seconds must be an integer")
            if self.max_time_seconds <= 0:
                raise GameConfigError(
                    f"max_time_seconds must be positive, got {self.max_time_seconds}"
                )

        if self.auto_reset_delay_ms is not None and self.auto_reset_delay_ms < 0:
            raise GameConfigError("auto_reset_delay_ms must be non-negative")

        if mode is self.mode:
            return self
        return replace(self, mode=mode)

    @property
    def is_timed(self) -> bool:
        return self.mode == GameMode.TIMED


@dataclass(frozen=True)
class Board:
    """A named board layout with its game configuration."""
    name: str
    title: str
    rows: int
    columns: int
    config: GameConfig

    @property
    def slot_count(self) -> int:
        return self.rows * self.columns


CLASSIC = Board(
    name="classic",
    title="Memory Card Game",
    rows=4,
    columns=4,
    config=GameConfig(pair_count=8, mode=GameMode.UNTIMED, auto_reset_delay_ms=1000),
)

TIMED = Board(
    name="timed",
    title="Memory Card Game (timed)",
    rows=3,
    columns=4,
    config=GameConfig(
        pair_count=6,
        mode=GameMode.TIMED,
        max_time_seconds=DEFAULT_MAX_TIME_SECONDS,
    ),
)

BOARDS: dict[str, Board] = {
    CLASSIC.name: CLASSIC,
    TIMED.name: TIMED,
}


def get_board(name: str) -> Board:
    """Look up a preset by name."""
    try:
        return BOARDS[name]
    except KeyError:
        raise GameConfigError(
            f"Unknown board: {name!r} (available: {', '.join(BOARDS)})"
        ) from None
