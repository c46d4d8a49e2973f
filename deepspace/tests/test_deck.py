"""
Tests for deck construction and drawing.
"""

import pytest

from ..card_schema.threat_card import ThreatKind
from ..catalogue import BOSS_CARD, CORE_CARDS, FILLER_CARD, BARRIER_CARD
from ..engine_core.deck import FILLER_COUNTS, build_deck, draw_card, shuffle_into_deck
from ..engine_core.dice import RandomSource
from ..engine_core.state import Difficulty


class TestBuildDeck:
    """Tests for build_deck."""

    @pytest.mark.parametrize("difficulty,size", [
        (Difficulty.EASY, 31),
        (Difficulty.NORMAL, 28),
        (Difficulty.HARD, 25),
    ])
    def test_deck_size(self, difficulty, size, rng):
        """Deck is core cards plus filler plus the boss."""
        assert len(build_deck(difficulty, rng)) == size

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_boss_always_last(self, difficulty):
        """The final boss is the bottom card on every shuffle."""
        for seed in range(20):
            deck = build_deck(difficulty, RandomSource(seed))
            assert deck[-1] is BOSS_CARD
            assert sum(1 for c in deck if c.is_boss) == 1

    def test_filler_count(self, rng):
        """Filler count follows difficulty."""
        for difficulty, count in FILLER_COUNTS.items():
            deck = build_deck(difficulty, rng)
            assert sum(1 for c in deck if c.kind == ThreatKind.FILLER) == count

    def test_contains_core_and_barrier(self, rng):
        """All core cards are shuffled in, including the barrier."""
        deck = build_deck(Difficulty.HARD, rng)
        assert sorted(c.id for c in deck[:-1]) == sorted(c.id for c in CORE_CARDS)
        assert BARRIER_CARD in deck

    def test_seeded_deck_reproducible(self):
        """Same seed gives the same order."""
        a = build_deck(Difficulty.NORMAL, RandomSource(99))
        b = build_deck(Difficulty.NORMAL, RandomSource(99))
        assert [c.id for c in a] == [c.id for c in b]


class TestDrawCard:
    """Tests for draw_card."""

    def test_draw_from_front(self):
        """The front card is drawn and the rest is returned."""
        card, rest = draw_card((FILLER_CARD, BOSS_CARD))
        assert card is FILLER_CARD
        assert rest == (BOSS_CARD,)

    def test_draw_empty(self):
        """Drawing from an empty deck gives None."""
        assert draw_card(()) is None


class TestShuffleIntoDeck:
    """Tests for shuffle_into_deck."""

    def test_boss_stays_last(self, rng):
        """Returned cards never end up below the boss."""
        deck = (FILLER_CARD, BOSS_CARD)
        cards = CORE_CARDS[:3]
        result = shuffle_into_deck(deck, cards, rng)
        assert len(result) == 5
        assert result[-1] is BOSS_CARD

    def test_without_boss(self, rng):
        """A deck without the boss just gains the cards."""
        result = shuffle_into_deck((), CORE_CARDS[:3], rng)
        assert sorted(c.id for c in result) == sorted(c.id for c in CORE_CARDS[:3])


class TestDrawProperties:
    """Drawing never mutates the deck it is given."""

    def test_draw_then_prepend_restores(self, rng):
        deck = build_deck(Difficulty.NORMAL, rng)
        card, rest = draw_card(deck)
        assert (card,) + rest == deck
        assert len(deck) == 28
