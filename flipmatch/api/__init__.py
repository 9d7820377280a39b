"""
API Module - HTTP interface for game clients.

Exposes the engine via a REST API. A client:
1. Lists board presets
2. Starts a game
3. Submits picks
4. Polls for render events produced by the engine's timers
5. Resets or ends the game

All state is in-memory. No user accounts.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    PickRequest,
    # Responses
    BoardListResponse,
    EndGameResponse,
    ErrorResponse,
    GameListResponse,
    GameStateResponse,
    HealthResponse,
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
from .service import APIService

__all__ = [
    # Requests
    "CreateGameRequest",
    "PickRequest",
    # Responses
    "BoardListResponse",
    "EndGameResponse",
    "ErrorResponse",
    "GameListResponse",
    "GameStateResponse",
    "HealthResponse",
    "PickResponse",
    # Shared
    "BoardInfo",
    "CardInfo",
    "RenderEventInfo",
    # Enums
    "CardStatus",
    "ErrorCode",
    "GameStatus",
    "ModeName",
    # Service
    "APIService",
]
