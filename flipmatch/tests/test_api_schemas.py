"""
Tests for API Pydantic schemas.

Validates that:
- Request models enforce their bounds
- Responses serialize enums as plain strings
- Error codes are properly structured
"""

import pytest
from pydantic import ValidationError


class TestPydanticSchemas:
    """Tests for Pydantic schema validation."""

    def test_create_request_defaults(self):
        from flipmatch.api.schemas import CreateGameRequest

        request = CreateGameRequest()
        assert request.board is None
        assert request.pair_count is None
        assert request.seed is None

    @pytest.mark.parametrize("field,value", [
        ("pair_count", 0),
        ("max_time_seconds", 0),
        ("auto_reset_delay_ms", -1),
        ("mode", "blitz"),
    ])
    def test_create_request_bounds(self, field, value):
        from flipmatch.api.schemas import CreateGameRequest

        with pytest.raises(ValidationError):
            CreateGameRequest(**{field: value})

    def test_pick_request_allows_any_int(self):
        """Out-of-range slots are rejected by the engine, not the schema."""
        from flipmatch.api.schemas import PickRequest

        assert PickRequest(slot_index=-1).slot_index == -1

    def test_game_state_response_schema(self):
        from flipmatch.api.schemas import (
            GameStateResponse, GameStatus, ModeName, CardInfo, CardStatus, RenderEventInfo,
        )

        response = GameStateResponse(
            game_id="game-123",
            board="timed",
            mode=ModeName.TIMED,
            status=GameStatus.PLAYING,
            total_pairs=6,
            moves=2,
            time_left_seconds=18,
            locked=True,
            pending_slots=[3, 7],
            cards=[
                CardInfo(slot_index=3, state=CardStatus.REVEALED, face_id=4),
                CardInfo(slot_index=4, state=CardStatus.HIDDEN),
            ],
            events=[RenderEventInfo(kind="reveal", slot=7, value=2, at_ms=1500)],
        )

        data = response.model_dump(mode="json")
        assert data["mode"] == "timed"
        assert data["status"] == "playing"
        assert data["cards"][1]["face_id"] is None
        assert data["events"][0]["kind"] == "reveal"
        assert data["api_version"] == "v1"


class TestErrorCodes:
    """Tests for error code structure."""

    def test_error_codes_exist(self):
        from flipmatch.api.schemas import ErrorCode

        assert ErrorCode.GAME_NOT_FOUND.value == "GAME_NOT_FOUND"
        assert ErrorCode.INVALID_CONFIG.value == "INVALID_CONFIG"
        assert ErrorCode.VALIDATION_ERROR.value == "VALIDATION_ERROR"

    def test_error_response_schema(self):
        from flipmatch.api.schemas import ErrorResponse, ErrorCode

        error = ErrorResponse(
            error="Game not found",
            error_code=ErrorCode.GAME_NOT_FOUND,
            details={"game_id": "abc"},
        )

        data = error.model_dump(mode="json")
        assert data["error_code"] == "GAME_NOT_FOUND"
        assert data["details"]["game_id"] == "abc"
