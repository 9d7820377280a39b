"""
Games - Board presets for the memory game.
"""

from .boards import Board, GameConfig, BOARDS, CLASSIC, TIMED, get_board

__all__ = [
    "Board",
    "GameConfig",
    "BOARDS",
    "CLASSIC",
    "TIMED",
    "get_board",
]
