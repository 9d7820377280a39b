"""
Session Module - Runs and hosts memory games.

A game is one play-through on one board:
- Created from a board preset or an explicit configuration
- Driven by picks and by scheduler callbacks
- Reset in place or ended and discarded

Games are EPHEMERAL:
- No persistence
- Ends when the host discards it
"""

from .controller import GameController
from .manager import GameManager, HostedGame

__all__ = [
    "GameController",
    "GameManager",
    "HostedGame",
]
