"""
FastAPI Application - REST API for game clients.

Endpoints:
    GET    /api/v1/health                 Liveness check
    GET    /api/v1/boards                 List board presets
    POST   /api/v1/games                  Start a game
    GET    /api/v1/games                  List active games
    GET    /api/v1/games/{id}             Get game state (drains render events)
    POST   /api/v1/games/{id}/pick        Pick a card slot
    POST   /api/v1/games/{id}/reset       Reshuffle and restart
    DELETE /api/v1/games/{id}             End a game

Timers (mismatch resolution, countdown) run on the server's event loop.
Clients poll GET /games/{id} and replay the returned render events.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional, Union
import logging
import os

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..engine_core.state import GameConfigError
from .service import APIService
from .schemas import (
    # Request models
    CreateGameRequest,
    PickRequest,
    # Response models
    BoardListResponse,
    EndGameResponse,
    ErrorResponse,
    GameListResponse,
    GameStateResponse,
    HealthResponse,
    PickResponse,
    # Enums
    ErrorCode,
)

# Environment configuration
FLIPMATCH_ENV = os.getenv("FLIPMATCH_ENV", "development")
FLIPMATCH_DEFAULT_BOARD = os.getenv("FLIPMATCH_DEFAULT_BOARD", "classic")
FLIPMATCH_LOG_LEVEL = os.getenv("FLIPMATCH_LOG_LEVEL", "INFO")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

logger = logging.getLogger(__name__)


def create_app(service: Optional[APIService] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    logging.getLogger("flipmatch").setLevel(FLIPMATCH_LOG_LEVEL.upper())

    app = FastAPI(
        title="Flipmatch API",
        description="""
Card-matching (Memory) game engine.

## Game Flow

1. `POST /games` with a board preset (`classic` or `timed`)
2. `POST /games/{id}/pick` for each card the player selects
3. Poll `GET /games/{id}` to receive delayed render events
   (mismatch shake at +400ms, hide at +1200ms, countdown ticks)

## Error Codes

| Code | Description |
|------|-------------|
| `GAME_NOT_FOUND` | Game does not exist |
| `INVALID_CONFIG` | Unknown board or invalid configuration |
| `VALIDATION_ERROR` | Request body failed validation (422) |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService(default_board=FLIPMATCH_DEFAULT_BOARD)

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def not_found(response: ErrorResponse) -> JSONResponse:
        return make_error_response(
            ErrorCode.GAME_NOT_FOUND,
            response.error,
            status_code=404,
            details=response.details,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Request validation failed",
            status_code=422,
            details={"errors": jsonable_encoder(exc.errors())},
        )

    # =========================================================================
    # Meta Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["Meta"],
        summary="Health check",
    )
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__, env=FLIPMATCH_ENV)

    @app.get(
        "/api/v1/boards",
        response_model=BoardListResponse,
        tags=["Meta"],
        summary="List board presets",
    )
    async def list_boards() -> BoardListResponse:
        return api_service.list_boards()

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameStateResponse,
        responses={400: {"model": ErrorResponse, "description": "Invalid board or config"}},
        tags=["Games"],
        summary="Start a new game",
    )
    async def create_game(request: CreateGameRequest) -> Union[GameStateResponse, JSONResponse]:
        """
        Start a new game from a board preset.

        Explicit fields (pair_count, mode, max_time_seconds, ...) override
        the preset.
        """
        try:
            return api_service.create_game(request)
        except GameConfigError as e:
            return make_error_response(ErrorCode.INVALID_CONFIG, str(e))

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List active games",
    )
    async def list_games() -> GameListResponse:
        games = api_service.list_games()
        return GameListResponse(games=games, count=len(games))

    @app.get(
        "/api/v1/games/{game_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get game state",
    )
    async def get_game(game_id: str) -> Union[GameStateResponse, JSONResponse]:
        """Get the board, session counters and render events since the last call."""
        response = api_service.get_game(game_id)
        if isinstance(response, ErrorResponse):
            return not_found(response)
        return response

    @app.post(
        "/api/v1/games/{game_id}/pick",
        response_model=PickResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Pick a card slot",
    )
    async def pick(game_id: str, request: PickRequest) -> Union[PickResponse, JSONResponse]:
        """
        Pick a card.

        Rejected picks (locked deck, matched card, game over, bad slot)
        return 200 with `accepted=false` and a `reason`.
        """
        response = api_service.pick(game_id, request)
        if isinstance(response, ErrorResponse):
            return not_found(response)
        return response

    @app.post(
        "/api/v1/games/{game_id}/reset",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Reshuffle and restart a game",
    )
    async def reset_game(game_id: str) -> Union[GameStateResponse, JSONResponse]:
        response = api_service.reset_game(game_id)
        if isinstance(response, ErrorResponse):
            return not_found(response)
        return response

    @app.delete(
        "/api/v1/games/{game_id}",
        response_model=EndGameResponse,
        tags=["Games"],
        summary="End a game",
    )
    async def end_game(game_id: str) -> EndGameResponse:
        """End a game and release its timers."""
        success = api_service.end_game(game_id)
        return EndGameResponse(success=success, game_id=game_id)

    return app


# For running directly: uvicorn flipmatch.api.app:app
app = create_app()
