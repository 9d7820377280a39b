"""
Pick Results - Outcome of a single pick input.

A pick is either accepted (the card flips face up) or rejected.
Rejections are not errors: the host may ignore them or show a hint.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .state import Card


class PickStatus(Enum):
    """Whether a pick flipped a card."""
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class RejectReason(Enum):
    """Why a pick was ignored."""
    NO_GAME = "no_game"
    SESSION_OVER = "session_over"
    DECK_LOCKED = "deck_locked"
    OUT_OF_RANGE = "out_of_range"
    ALREADY_MATCHED = "already_matched"
    ALREADY_PENDING = "already_pending"


class MatchOutcome(Enum):
    """Result of comparing two pending cards."""
    MATCH = "match"
    MISMATCH = "mismatch"


@dataclass
class PickResult:
    """
    Result of a pick.

    Contains:
    - Whether the pick was accepted
    - The rejection reason (if rejected)
    - The completed pair and its outcome (if this was the second pick)
    """
    status: PickStatus
    slot_index: int
    reason: RejectReason | None = None

    # Set once two cards are pending
    pair: tuple[Card, Card] | None = None
    match: MatchOutcome | None = None

    @property
    def accepted(self) -> bool:
        return self.status == PickStatus.ACCEPTED

    @property
    def completes_pair(self) -> bool:
        return self.pair is not None

    @classmethod
    def rejected(cls, slot_index: int, reason: RejectReason) -> PickResult:
        """Create a rejected result."""
        return cls(status=PickStatus.REJECTED, slot_index=slot_index, reason=reason)

    @classmethod
    def revealed(
        cls,
        slot_index: int,
        pair: tuple[Card, Card] | None = None,
    ) -> PickResult:
        """Create an accepted result."""
        return cls(status=PickStatus.ACCEPTED, slot_index=slot_index, pair=pair)
