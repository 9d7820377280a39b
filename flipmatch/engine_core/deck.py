"""
Deck Builder - Produces shuffled decks of paired face ids.
"""

from __future__ import annotations
import random
from dataclasses import dataclass, field

from .state import Card, Deck, GameConfigError


def fisher_yates(items: list, rng: random.Random) -> list:
    """
    Shuffle a list in place with a uniform permutation.

    Walks from the last index down, swapping each position with a
    uniformly chosen index in [0, i].
    """
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


@dataclass
class DeckBuilder:
    """
    Builds decks where each face id 1..pair_count occurs twice.

    The random source is injectable so games can be replayed from a seed.
    """
    rng: random.Random = field(default_factory=random.Random)

    def build(self, pair_count: int) -> Deck:
        """Build a freshly shuffled deck of 2 * pair_count hidden cards."""
        if isinstance(pair_count, bool) or not isinstance(pair_count, int):
            raise GameConfigError(f"pair_count must be an integer, got {pair_count!r}")
        if pair_count <= 0:
            raise GameConfigError(f"pair_count must be positive, got {pair_count}")

        faces = [face for face in range(1, pair_count + 1) for _ in range(2)]
        fisher_yates(faces, self.rng)

        return Deck(cards=[
            Card(slot_index=slot, face_id=face)
            for slot, face in enumerate(faces)
        ])


def build_deck(pair_count: int, seed: int | None = None) -> Deck:
    """Convenience function to build a deck, optionally from a seed."""
    return DeckBuilder(rng=random.Random(seed)).build(pair_count)
