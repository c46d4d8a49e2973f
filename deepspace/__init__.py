"""
Deep Space - Solo Survival Rules Engine

A deterministic, reducer-driven rules engine for a solo dice-and-card
survival game. A ship with finite hull and shields defends against an
escalating threat deck until the deck runs out and the final boss falls.

The engine provides:
- Immutable game state snapshots
- A phase-validated reducer (state, action) -> state
- Deck building, station resolution and threat activation
- Bot policies for automated play
"""

__version__ = "0.1.0"
