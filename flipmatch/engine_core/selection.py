"""
Selection Tracker - Holds the face-up cards awaiting evaluation.

At most two cards are pending. While two are pending the deck is locked
and every further pick is rejected until the evaluation resolves.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .action import PickResult, RejectReason
from .state import Card, CardState, Deck, Session, SessionPhase


@dataclass
class SelectionTracker:
    """
    Accepts or rejects reveal requests against a deck.

    Stateless apart from the pending cards; the deck and session are
    owned by the controller.
    """
    deck: Deck
    session: Session
    _pending: list[Card] = field(default_factory=list)

    @property
    def pending(self) -> tuple[Card, ...]:
        return tuple(self._pending)

    @property
    def is_locked(self) -> bool:
        return len(self._pending) >= 2

    def try_reveal(self, slot_index: int) -> PickResult:
        """
        Flip the card at slot_index face up if the pick is legal.

        Returns an accepted result carrying the pair when this pick
        completes one, otherwise a rejected result with the reason.
        """
        reason = self._rejection(slot_index)
        if reason is not None:
            return PickResult.rejected(slot_index, reason)

        card = self.deck.card(slot_index)
        card.state = CardState.REVEALED
        self._pending.append(card)

        if len(self._pending) == 2:
            first, second = self._pending
            return PickResult.revealed(slot_index, pair=(first, second))
        return PickResult.revealed(slot_index)

    def clear_pending(self) -> None:
        """Forget the pending cards and unlock the deck."""
        self._pending.clear()

    def _rejection(self, slot_index: int) -> RejectReason | None:
        if self.session.phase != SessionPhase.PLAYING:
            return RejectReason.SESSION_OVER
        if not self.deck.is_valid_slot(slot_index):
            return RejectReason.OUT_OF_RANGE
        if self.is_locked:
            return RejectReason.DECK_LOCKED

        card = self.deck.card(slot_index)
        if card.state == CardState.MATCHED:
            return RejectReason.ALREADY_MATCHED
        if any(pending is card for pending in self._pending):
            return RejectReason.ALREADY_PENDING
        return None
