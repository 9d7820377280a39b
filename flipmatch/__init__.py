"""
Flipmatch - Card-matching (Memory) game engine

A host-agnostic engine for the classic pairs game. The engine provides:
- Uniformly shuffled decks of card pairs
- The flip/match state machine with deck locking
- Timed mismatch resolution and an optional countdown
- A renderer interface the host UI implements
"""

__version__ = "0.1.0"
