"""
Threat Card - Immutable card templates.

A ThreatCard is the definition, not the runtime instance.
Instances in play are ActiveThreat values (engine_core.state).
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .effect_dsl import Effect, RevealEffect, PassiveKind, NO_EFFECT


class CrewFace(Enum):
    """Faces of a crew die."""
    COMMANDER = "commander"
    TACTICAL = "tactical"
    MEDICAL = "medical"
    SCIENCE = "science"
    ENGINEERING = "engineering"
    THREAT = "threat"  # threat detected


class ThreatSymbol(Enum):
    """Faces of the threat die (activation symbols on threat cards)."""
    SKULL = "skull"
    LIGHTNING = "lightning"
    ALIEN = "alien"
    WARNING = "warning"
    HAZARD = "hazard"
    NOVA = "nova"


class ThreatKind(Enum):
    """Card categories."""
    INTERNAL = "internal"
    EXTERNAL = "external"
    BOSS_BARRIER = "boss-barrier"
    FILLER = "filler"


@dataclass(frozen=True)
class ResolutionRequirement:
    """Dice needed on an internal threat's away mission to neutralize it."""
    face: CrewFace
    count: int


@dataclass(frozen=True)
class ThreatCard:
    """
    A threat card template.

    max_health is 0 for non-combat cards. Cards with immediate_on_reveal
    fire their reveal effect when drawn; a reveal-flagged card with no
    reveal descriptor is drawn and shown but otherwise inert.
    """
    id: str
    name: str
    kind: ThreatKind
    activation: ThreatSymbol
    max_health: int = 0
    description: str = ""
    resolution: ResolutionRequirement | None = None
    is_boss: bool = False
    is_barrier: bool = False
    immediate_on_reveal: bool = False

    # Behaviour as data
    effect: Effect = NO_EFFECT
    reveal: RevealEffect | None = None
    passive: PassiveKind | None = None
    lone_target: bool = False  # targetable only when no other combat threat remains

    @property
    def is_combat(self) -> bool:
        """External and boss-barrier cards take tactical fire."""
        return self.kind in (ThreatKind.EXTERNAL, ThreatKind.BOSS_BARRIER)

    def variant(self, card_id: str) -> ThreatCard:
        """Copy of this card under another id (duplicate printings)."""
        return ThreatCard(
            id=card_id,
            name=self.name,
            kind=self.kind,
            activation=self.activation,
            max_health=self.max_health,
            description=self.description,
            resolution=self.resolution,
            is_boss=self.is_boss,
            is_barrier=self.is_barrier,
            immediate_on_reveal=self.immediate_on_reveal,
            effect=self.effect,
            reveal=self.reveal,
            passive=self.passive,
            lone_target=self.lone_target,
        )
