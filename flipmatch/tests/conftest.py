"""
Pytest fixtures for Flipmatch tests.
"""

import random

import pytest

from ..engine_core.renderer import EventLog
from ..engine_core.scheduler import ManualScheduler
from ..engine_core.state import Deck, GameMode
from ..session import GameController


def slots_by_face(deck: Deck) -> dict[int, list[int]]:
    """Map each face_id to its two slots."""
    faces: dict[int, list[int]] = {}
    for card in deck:
        faces.setdefault(card.face_id, []).append(card.slot_index)
    return faces


def matching_pair(deck: Deck, face_id: int = 1) -> tuple[int, int]:
    """Two slots sharing a face."""
    first, second = slots_by_face(deck)[face_id]
    return first, second


def mismatched_pair(deck: Deck) -> tuple[int, int]:
    """Two slots with different faces."""
    faces = slots_by_face(deck)
    return faces[1][0], faces[2][0]


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Simulated clock starting at 0ms."""
    return ManualScheduler()


@pytest.fixture
def events(scheduler: ManualScheduler) -> EventLog:
    """Renderer that records calls stamped with simulated time."""
    return EventLog(clock=lambda: scheduler.now_ms)


@pytest.fixture
def controller(scheduler: ManualScheduler, events: EventLog) -> GameController:
    """Controller on the simulated clock with a seeded shuffle."""
    return GameController(scheduler, renderer=events, rng=random.Random(1234))


@pytest.fixture
def untimed_game(controller: GameController, events: EventLog) -> GameController:
    """Untimed 4-pair game with the setup events cleared."""
    controller.new_game(pair_count=4, mode=GameMode.UNTIMED)
    events.drain()
    return controller


@pytest.fixture
def timed_game(controller: GameController, events: EventLog) -> GameController:
    """Timed 6-pair, 20 second game with the setup events cleared."""
    controller.new_game(pair_count=6, mode=GameMode.TIMED, max_time_seconds=20)
    events.drain()
    return controller
