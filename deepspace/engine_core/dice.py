"""
Dice - Random draw primitives.

The engine only needs three capabilities from its randomness source:
roll a crew face, roll a threat face, and shuffle a sequence. A
RandomSource wraps a seedable generator so tests and simulations can
replay games exactly.
"""

from __future__ import annotations
import random
from typing import Sequence, TypeVar

from ..card_schema.threat_card import CrewFace, ThreatSymbol

T = TypeVar("T")

CREW_FACES: tuple[CrewFace, ...] = tuple(CrewFace)
THREAT_FACES: tuple[ThreatSymbol, ...] = tuple(ThreatSymbol)


class RandomSource:
    """
    Uniform random outcomes for dice and shuffles.

    Usage:
        rng = RandomSource(seed=42)
        faces = rng.roll_crew_faces(6)
        deck = rng.shuffle(cards)
    """

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self.rng = random.Random(seed)

    def roll_crew_face(self) -> CrewFace:
        return self.rng.choice(CREW_FACES)

    def roll_crew_faces(self, count: int) -> tuple[CrewFace, ...]:
        return tuple(self.roll_crew_face() for _ in range(count))

    def roll_threat_face(self) -> ThreatSymbol:
        return self.rng.choice(THREAT_FACES)

    def shuffle(self, items: Sequence[T]) -> tuple[T, ...]:
        """Return a uniformly random permutation; the input is left untouched."""
        shuffled = list(items)
        self.rng.shuffle(shuffled)
        return tuple(shuffled)


def calculate_tactical_damage(dice_count: int) -> int:
    """One die deals 1 damage, each additional die adds 2."""
    if dice_count <= 0:
        return 0
    return 1 + 2 * (dice_count - 1)
