"""
Tests for deck building.

Tests:
- Pair invariant over many seeds
- Uniformity of the shuffle
- Rejection of invalid pair counts
"""

import random
from collections import Counter

import pytest

from ..engine_core.deck import DeckBuilder, build_deck, fisher_yates
from ..engine_core.state import CardState, GameConfigError


class TestDeckInvariant:
    """Every face appears exactly twice."""

    @pytest.mark.parametrize("pair_count", [1, 6, 8])
    def test_pairs_over_many_seeds(self, pair_count):
        """1000 seeds all yield 2*pair_count cards, each face twice."""
        for seed in range(1000):
            deck = build_deck(pair_count, seed=seed)

            assert len(deck) == 2 * pair_count
            counts = deck.face_counts()
            assert set(counts) == set(range(1, pair_count + 1))
            assert all(n == 2 for n in counts.values())

    def test_cards_start_hidden_with_slot_indices(self):
        """Fresh cards are hidden and numbered by position."""
        deck = build_deck(8, seed=7)

        assert [card.slot_index for card in deck] == list(range(16))
        assert all(card.state == CardState.HIDDEN for card in deck)
        assert deck.pair_count == 8

    def test_same_seed_same_deck(self):
        """A seeded builder is reproducible."""
        a = [c.face_id for c in build_deck(6, seed=42)]
        b = [c.face_id for c in build_deck(6, seed=42)]
        assert a == b


class TestShuffleUniformity:
    """Statistical check of the Fisher-Yates shuffle."""

    def test_each_face_equally_likely_in_each_slot(self):
        """Slot/face frequencies stay close to the uniform expectation."""
        pair_count = 3
        trials = 6000
        builder = DeckBuilder(rng=random.Random(2024))
        counts: Counter = Counter()

        for _ in range(trials):
            for card in builder.build(pair_count):
                counts[(card.slot_index, card.face_id)] += 1

        # Each face occupies a given slot with probability 2/6
        expected = trials * 2 / (2 * pair_count)
        for slot in range(2 * pair_count):
            for face in range(1, pair_count + 1):
                assert abs(counts[(slot, face)] - expected) < expected * 0.1

    def test_fisher_yates_is_a_permutation(self):
        """Shuffling keeps the same elements."""
        items = list(range(50))
        shuffled = fisher_yates(items.copy(), random.Random(3))

        assert sorted(shuffled) == items
        assert shuffled != items

    def test_fisher_yates_handles_tiny_lists(self):
        """Empty and single-element lists are left alone."""
        rng = random.Random(0)
        assert fisher_yates([], rng) == []
        assert fisher_yates(["a"], rng) == ["a"]


class TestInvalidPairCount:
    """Non-positive or non-integer pair counts are rejected."""

    @pytest.mark.parametrize("pair_count", [0, -1, -8])
    def test_non_positive_rejected(self, pair_count):
        with pytest.raises(GameConfigError):
            DeckBuilder().build(pair_count)

    @pytest.mark.parametrize("pair_count", [2.5, "4", None, True])
    def test_non_integer_rejected(self, pair_count):
        with pytest.raises(GameConfigError):
            DeckBuilder().build(pair_count)

    def test_config_error_is_a_value_error(self):
        """Hosts catching ValueError also catch configuration errors."""
        with pytest.raises(ValueError):
            build_deck(0)
