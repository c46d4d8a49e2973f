"""
Deck - Threat deck construction and drawing.

The deck is an ordered tuple; the front is the next card drawn.
The final boss is appended after shuffling and is always the last card.
"""

from __future__ import annotations
from typing import Sequence

from ..card_schema.threat_card import ThreatCard
from ..catalogue import CORE_CARDS, FILLER_CARD, BOSS_CARD
from .dice import RandomSource
from .state import Difficulty


FILLER_COUNTS: dict[Difficulty, int] = {
    Difficulty.EASY: 6,
    Difficulty.NORMAL: 3,
    Difficulty.HARD: 0,
}


def build_deck(difficulty: Difficulty, rng: RandomSource | None = None) -> tuple[ThreatCard, ...]:
    """Shuffle the core cards with the difficulty's filler, then append the boss."""
    rng = rng or RandomSource()
    fillers = (FILLER_CARD,) * FILLER_COUNTS[difficulty]
    body = rng.shuffle(CORE_CARDS + fillers)
    return body + (BOSS_CARD,)


def draw_card(deck: Sequence[ThreatCard]) -> tuple[ThreatCard, tuple[ThreatCard, ...]] | None:
    """
    Draw the front card.

    Returns (card, remaining_deck), or None if the deck is empty.
    """
    if not deck:
        return None
    return deck[0], tuple(deck[1:])


def shuffle_into_deck(
    deck: Sequence[ThreatCard],
    cards: Sequence[ThreatCard],
    rng: RandomSource,
) -> tuple[ThreatCard, ...]:
    """Shuffle cards into the deck body, keeping the boss at the bottom."""
    body = list(deck)
    tail: tuple[ThreatCard, ...] = ()
    if body and body[-1].is_boss:
        tail = (body.pop(),)
    return rng.shuffle(body + list(cards)) + tail
