"""
Match Evaluator - Decides what happens to a completed pair.

A match locks both cards in immediately. A mismatch is resolved in two
delayed stages, timed so the shake animation finishes before the cards
turn back over:

    +400ms   shake cue on both cards (no state change)
    +1200ms  both cards hidden, pending cleared, deck unlocked

Both delays are measured from the moment of the mismatch.
"""

from __future__ import annotations
from dataclasses import dataclass

from .action import MatchOutcome
from .state import Card, CardState

SHAKE_DELAY_MS = 400
HIDE_DELAY_MS = 1200


@dataclass(frozen=True)
class MatchEvaluator:
    """Pure comparison of two pending cards."""
    shake_delay_ms: int = SHAKE_DELAY_MS
    hide_delay_ms: int = HIDE_DELAY_MS

    def evaluate(self, first: Card, second: Card) -> MatchOutcome:
        if first.face_id == second.face_id:
            return MatchOutcome.MATCH
        return MatchOutcome.MISMATCH

    @staticmethod
    def lock_in(first: Card, second: Card) -> None:
        """Apply a match: both cards become permanently matched."""
        first.state = CardState.MATCHED
        second.state = CardState.MATCHED

    @staticmethod
    def turn_back(first: Card, second: Card) -> list[Card]:
        """
        Apply a mismatch resolution.

        Only cards still face up are turned over; returns those cards.
        """
        turned = []
        for card in (first, second):
            if card.state == CardState.REVEALED:
                card.state = CardState.HIDDEN
                turned.append(card)
        return turned
