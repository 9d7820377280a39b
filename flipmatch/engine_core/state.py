"""
Game State - Cards, deck and session containers.

Design principles:
- Plain dataclasses: the controller mutates them in place
- No visual references: rendering goes through the Renderer
- Observable: snapshots can be taken for APIs and tests
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


class FlipmatchError(Exception):
    """Base class for engine errors."""


class GameConfigError(FlipmatchError, ValueError):
    """Raised when a game is started with an invalid configuration."""


class CardState(Enum):
    """Visibility state of a card slot."""
    HIDDEN = "hidden"
    REVEALED = "revealed"
    MATCHED = "matched"


class GameMode(Enum):
    """Board variants."""
    UNTIMED = "untimed"
    TIMED = "timed"


class SessionPhase(Enum):
    """High-level session phases."""
    PLAYING = "playing"
    WON = "won"
    TIMED_OUT = "timed_out"


class Outcome(Enum):
    """How a session ended."""
    WON = "won"
    TIMED_OUT = "timed_out"


@dataclass
class Card:
    """
    A card slot on the board.

    face_id is shared by exactly two slots of the same deck.
    """
    slot_index: int
    face_id: int
    state: CardState = CardState.HIDDEN

    @property
    def is_hidden(self) -> bool:
        return self.state == CardState.HIDDEN

    @property
    def is_matched(self) -> bool:
        return self.state == CardState.MATCHED


@dataclass
class Deck:
    """
    Ordered collection of card slots.

    Invariant: every face_id appears exactly twice.
    """
    cards: list[Card] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    @property
    def pair_count(self) -> int:
        return len(self.cards) // 2

    def is_valid_slot(self, slot_index: int) -> bool:
        """Check that a slot index addresses a card on this deck."""
        return (
            isinstance(slot_index, int)
            and not isinstance(slot_index, bool)
            and 0 <= slot_index < len(self.cards)
        )

    def card(self, slot_index: int) -> Card:
        """Get the card at a slot."""
        return self.cards[slot_index]

    def face_counts(self) -> dict[int, int]:
        """Multiplicity of each face_id."""
        return dict(Counter(card.face_id for card in self.cards))

    def matched_count(self) -> int:
        return sum(1 for card in self.cards if card.is_matched)


@dataclass
class Session:
    """
    Progress of one play-through.

    Owned by the controller; mutated only by the controller and the
    session clock callbacks it wires up.
    """
    mode: GameMode
    total_pairs: int
    matched_pairs: int = 0
    moves: int = 0
    time_left_seconds: int | None = None
    phase: SessionPhase = SessionPhase.PLAYING

    # Bumped on every new game; timer callbacks compare against it
    generation: int = 0

    @property
    def is_terminal(self) -> bool:
        return self.phase != SessionPhase.PLAYING

    @property
    def outcome(self) -> Outcome | None:
        """The ending, if the session is over."""
        if self.phase == SessionPhase.WON:
            return Outcome.WON
        if self.phase == SessionPhase.TIMED_OUT:
            return Outcome.TIMED_OUT
        return None

    @property
    def is_complete(self) -> bool:
        """All pairs found."""
        return self.matched_pairs >= self.total_pairs
