"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a UI client and the engine.
Hidden cards never carry their face_id.

Error Codes:
- GAME_NOT_FOUND: Game does not exist or has been ended
- INVALID_CONFIG: Board name or game configuration is invalid
- VALIDATION_ERROR: Request body failed validation
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class GameStatus(str, Enum):
    """Session phase values."""
    PLAYING = "playing"
    WON = "won"
    TIMED_OUT = "timed_out"


class CardStatus(str, Enum):
    """Card visibility values."""
    HIDDEN = "hidden"
    REVEALED = "revealed"
    MATCHED = "matched"


class ModeName(str, Enum):
    """Board variants."""
    UNTIMED = "untimed"
    TIMED = "timed"


class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    INVALID_CONFIG = "INVALID_CONFIG"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """A card slot as seen by the player."""
    slot_index: int
    state: CardStatus
    face_id: Optional[int] = Field(None, description="Only set for face-up cards")


class RenderEventInfo(BaseModel):
    """A renderer call the client should replay."""
    kind: str = Field(description="board_reset, reveal, hide, matched, shake, time_left, moves, session_ended")
    slot: Optional[int] = None
    value: Optional[Any] = None
    at_ms: Optional[int] = Field(None, description="Engine time of the event, when known")


class BoardInfo(BaseModel):
    """A board preset."""
    name: str
    title: str
    rows: int
    columns: int
    pair_count: int
    mode: ModeName
    max_time_seconds: Optional[int] = None


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """
    Request to start a game.

    Starts from a board preset; any explicit field overrides the preset.
    """
    board: Optional[str] = Field(None, description="Preset name (default board if omitted)")
    pair_count: Optional[int] = Field(None, ge=1)
    mode: Optional[ModeName] = None
    max_time_seconds: Optional[int] = Field(None, ge=1)
    lazy_clock_start: Optional[bool] = None
    auto_reset_delay_ms: Optional[int] = Field(None, ge=0)
    seed: Optional[int] = Field(None, description="Shuffle seed for a reproducible deck")


class PickRequest(BaseModel):
    """Request to pick a card slot. Out-of-range slots are rejected, not errors."""
    slot_index: int


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Complete game state for display."""
    game_id: str
    board: Optional[str] = None
    mode: ModeName
    status: GameStatus
    matched_pairs: int = 0
    total_pairs: int
    moves: int = 0
    time_left_seconds: Optional[int] = None
    locked: bool = False
    pending_slots: list[int] = Field(default_factory=list)
    cards: list[CardInfo] = Field(default_factory=list)
    events: list[RenderEventInfo] = Field(
        default_factory=list,
        description="Render events since the last response for this game",
    )
    api_version: str = "v1"


class PickResponse(BaseModel):
    """Result of a pick."""
    game_id: str
    slot_index: int
    accepted: bool
    reason: Optional[str] = Field(None, description="Why the pick was rejected")
    match: Optional[str] = Field(None, description="match or mismatch, when a pair completed")
    state: GameStateResponse
    api_version: str = "v1"


class GameListResponse(BaseModel):
    """Active game ids."""
    games: list[str] = Field(default_factory=list)
    count: int = 0


class BoardListResponse(BaseModel):
    """Available board presets."""
    boards: list[BoardInfo] = Field(default_factory=list)


class EndGameResponse(BaseModel):
    """Response from ending a game."""
    success: bool
    game_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    version: str
    env: str
