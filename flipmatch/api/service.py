"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine calls
2. Hosts games through a GameManager
3. Formats board snapshots and pending render events for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace

from .schemas import (
    # Requests
    CreateGameRequest,
    PickRequest,
    # Responses
    BoardListResponse,
    ErrorResponse,
    GameStateResponse,
    PickResponse,
    # Shared
    BoardInfo,
    CardInfo,
    RenderEventInfo,
    # Enums
    CardStatus,
    ErrorCode,
    GameStatus,
    ModeName,
)
from ..engine_core.scheduler import AsyncioScheduler
from ..engine_core.state import CardState, GameMode
from ..games.boards import BOARDS, Board, GameConfig, get_board
from ..session import GameManager, HostedGame


@dataclass
class APIService:
    """
    Main API service for game clients.

    Usage:
        service = APIService()

        # Start a game
        state = service.create_game(CreateGameRequest(board="timed"))

        # Pick cards
        result = service.pick(state.game_id, PickRequest(slot_index=0))

    Timers run on the manager's scheduler. The default is the running
    asyncio loop; pass a manager on a ManualScheduler for deterministic use.
    """
    manager: GameManager = field(default_factory=lambda: GameManager(AsyncioScheduler()))
    default_board: str = "classic"

    def list_boards(self) -> BoardListResponse:
        return BoardListResponse(boards=[_board_info(b) for b in BOARDS.values()])

    def create_game(self, request: CreateGameRequest) -> GameStateResponse:
        """
        Start a new game.

        Raises GameConfigError for an unknown board or invalid overrides.
        """
        board = get_board(request.board or self.default_board)
        config = _apply_overrides(board.config, request)

        game = self.manager.create_game(config, board=board, seed=request.seed)
        return self._game_to_response(game)

    def get_game(self, game_id: str) -> GameStateResponse | ErrorResponse:
        """Get a game's state and drain its pending render events."""
        game = self.manager.get_game(game_id)
        if not game:
            return _not_found(game_id)
        return self._game_to_response(game)

    def pick(self, game_id: str, request: PickRequest) -> PickResponse | ErrorResponse:
        """Pick a card slot."""
        game = self.manager.get_game(game_id)
        if not game:
            return _not_found(game_id)

        result = game.controller.pick(request.slot_index)
        return PickResponse(
            game_id=game_id,
            slot_index=request.slot_index,
            accepted=result.accepted,
            reason=result.reason.value if result.reason else None,
            match=result.match.value if result.match else None,
            state=self._game_to_response(game),
        )

    def reset_game(self, game_id: str) -> GameStateResponse | ErrorResponse:
        """Reshuffle and restart a game with its current configuration."""
        game = self.manager.get_game(game_id)
        if not game:
            return _not_found(game_id)
        game.controller.reset()
        return self._game_to_response(game)

    def end_game(self, game_id: str) -> bool:
        return self.manager.end_game(game_id)

    def list_games(self) -> list[str]:
        return self.manager.list_active_games()

    # =========================================================================
    # Conversion helpers
    # =========================================================================

    def _game_to_response(self, game: HostedGame) -> GameStateResponse:
        controller = game.controller
        session = controller.session

        cards = []
        for card in controller.deck:
            face_up = card.state != CardState.HIDDEN
            cards.append(CardInfo(
                slot_index=card.slot_index,
                state=CardStatus(card.state.value),
                face_id=card.face_id if face_up else None,
            ))

        return GameStateResponse(
            game_id=game.game_id,
            board=game.board.name if game.board else None,
            mode=ModeName(session.mode.value),
            status=GameStatus(session.phase.value),
            matched_pairs=session.matched_pairs,
            total_pairs=session.total_pairs,
            moves=session.moves,
            time_left_seconds=session.time_left_seconds,
            locked=controller.is_locked,
            pending_slots=controller.pending_slots,
            cards=cards,
            events=[RenderEventInfo(**e.to_dict()) for e in game.events.drain()],
        )


def _apply_overrides(config: GameConfig, request: CreateGameRequest) -> GameConfig:
    overrides = {}
    if request.pair_count is not None:
        overrides["pair_count"] = request.pair_count
    if request.mode is not None:
        overrides["mode"] = GameMode(request.mode.value)
    if request.max_time_seconds is not None:
        overrides["max_time_seconds"] = request.max_time_seconds
    if request.lazy_clock_start is not None:
        overrides["lazy_clock_start"] = request.lazy_clock_start
    if request.auto_reset_delay_ms is not None:
        overrides["auto_reset_delay_ms"] = request.auto_reset_delay_ms
    return replace(config, **overrides).validate()


def _board_info(board: Board) -> BoardInfo:
    config = board.config
    return BoardInfo(
        name=board.name,
        title=board.title,
        rows=board.rows,
        columns=board.columns,
        pair_count=config.pair_count,
        mode=ModeName(config.mode.value),
        max_time_seconds=config.max_time_seconds if config.is_timed else None,
    )


def _not_found(game_id: str) -> ErrorResponse:
    return ErrorResponse(
        error="Game not found",
        error_code=ErrorCode.GAME_NOT_FOUND,
        details={"game_id": game_id},
    )
