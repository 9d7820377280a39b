"""
Renderer - Outbound interface from the engine to its host UI.

The engine calls these hooks; it never holds references to visual
elements. Every hook is a no-op by default, so hosts override only
what they display.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .state import Outcome


class Renderer:
    """Base class for host renderers."""

    def render_board_reset(self, slot_count: int) -> None:
        """A new game started: show slot_count face-down cards."""

    def render_reveal(self, slot_index: int, face_id: int) -> None:
        """Flip a card face up."""

    def render_hide(self, slot_index: int) -> None:
        """Flip a card face down (and drop any shake cue)."""

    def render_matched(self, slot_index: int) -> None:
        """Lock a card face up as part of a found pair."""

    def render_shake(self, slot_index: int) -> None:
        """Play the mismatch cue on a face-up card."""

    def render_time_left(self, seconds: int) -> None:
        """Show the remaining time (timed mode)."""

    def render_moves(self, count: int) -> None:
        """Show the move counter (timed mode)."""

    def render_session_ended(self, outcome: Outcome) -> None:
        """The session reached a terminal phase."""


class RenderKind(str, Enum):
    """Names of renderer hooks, as recorded by EventLog."""
    BOARD_RESET = "board_reset"
    REVEAL = "reveal"
    HIDE = "hide"
    MATCHED = "matched"
    SHAKE = "shake"
    TIME_LEFT = "time_left"
    MOVES = "moves"
    SESSION_ENDED = "session_ended"


@dataclass
class RenderEvent:
    """A recorded renderer call."""
    kind: RenderKind
    slot: int | None = None
    value: Any = None
    at_ms: int | None = None

    def to_dict(self) -> dict[str, Any]:
        value = self.value.value if isinstance(self.value, Enum) else self.value
        return {
            "kind": self.kind.value,
            "slot": self.slot,
            "value": value,
            "at_ms": self.at_ms,
        }


@dataclass
class EventLog(Renderer):
    """
    Renderer that records every call.

    Used by the HTTP service to hand events to polling clients,
    and by tests to assert on what the engine asked the UI to do.
    An optional clock callable stamps each event with the current time.
    """
    events: list[RenderEvent] = field(default_factory=list)
    clock: Any = None

    def render_board_reset(self, slot_count: int) -> None:
        self._record(RenderKind.BOARD_RESET, value=slot_count)

    def render_reveal(self, slot_index: int, face_id: int) -> None:
        self._record(RenderKind.REVEAL, slot=slot_index, value=face_id)

    def render_hide(self, slot_index: int) -> None:
        self._record(RenderKind.HIDE, slot=slot_index)

    def render_matched(self, slot_index: int) -> None:
        self._record(RenderKind.MATCHED, slot=slot_index)

    def render_shake(self, slot_index: int) -> None:
        self._record(RenderKind.SHAKE, slot=slot_index)

    def render_time_left(self, seconds: int) -> None:
        self._record(RenderKind.TIME_LEFT, value=seconds)

    def render_moves(self, count: int) -> None:
        self._record(RenderKind.MOVES, value=count)

    def render_session_ended(self, outcome: Outcome) -> None:
        self._record(RenderKind.SESSION_ENDED, value=outcome)

    def of_kind(self, kind: RenderKind) -> list[RenderEvent]:
        return [e for e in self.events if e.kind == kind]

    def drain(self) -> list[RenderEvent]:
        """Return and forget the recorded events."""
        events, self.events = self.events, []
        return events

    def _record(self, kind: RenderKind, slot: int | None = None, value: Any = None) -> None:
        at_ms = self.clock() if self.clock else None
        self.events.append(RenderEvent(kind=kind, slot=slot, value=value, at_ms=at_ms))
