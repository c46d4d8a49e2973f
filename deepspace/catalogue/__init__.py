"""
Catalogue - The shipped threat deck.

This module contains:
- Every threat card definition
- The core deck composition, filler, barrier and boss cards
- Lookup by card id
"""

from .cards import (
    ALL_CARDS,
    BARRIER_CARD,
    BOSS_CARD,
    CARDS_BY_ID,
    CORE_CARDS,
    FILLER_CARD,
    UnknownCardError,
    get_card,
)

__all__ = [
    "ALL_CARDS",
    "BARRIER_CARD",
    "BOSS_CARD",
    "CARDS_BY_ID",
    "CORE_CARDS",
    "FILLER_CARD",
    "UnknownCardError",
    "get_card",
]
