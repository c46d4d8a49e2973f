"""
Effect DSL - Structured effect descriptors for threat cards.

Every card carries its behaviour as data:
- Effect: what happens when the threat die activates the card
- RevealEffect: what happens the moment the card is drawn
- PassiveKind: a condition that holds while the card is in play

A single generic executor (threats.activate_threats) interprets Effect
values, so new cards need new data, not new branches.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class EffectKind(Enum):
    """Kinds of activation effects."""
    NONE = "none"
    DAMAGE = "damage"  # hull_damage / shield_damage
    SEND_TO_INFIRMARY = "send_to_infirmary"  # count pool crew
    SEND_POOL_TO_INFIRMARY = "send_pool_to_infirmary"  # every pool crew
    RECOVER_FROM_INFIRMARY = "recover_from_infirmary"  # count infirmary crew
    RELEASE_AND_DISCARD = "release_and_discard"  # free locked dice, discard card
    EXTRA_DRAW = "extra_draw"
    RESHUFFLE_DISCARD = "reshuffle_discard"  # count top discard cards
    REGENERATE = "regenerate"  # full health + damage (boss barrier)


class RevealKind(Enum):
    """Kinds of on-reveal effects."""
    HULL_STRIKE = "hull_strike"  # damage then discard, never enters play
    LOCK_CREW = "lock_crew"  # enter play and lock one pool die on the card


class PassiveKind(Enum):
    """Conditions that hold while a card is in play."""
    BLOCK_SHIELD_RECHARGE = "block_shield_recharge"
    DISABLE_COMMAND = "disable_command"
    DAMAGE_FLOOR = "damage_floor"


@dataclass(frozen=True)
class Effect:
    """
    An activation effect.

    Parameters are interpreted according to kind; unused ones stay 0.
    """
    kind: EffectKind = EffectKind.NONE
    hull_damage: int = 0
    shield_damage: int = 0
    count: int = 0

    @property
    def deals_damage(self) -> bool:
        return self.hull_damage > 0 or self.shield_damage > 0


@dataclass(frozen=True)
class RevealEffect:
    """An effect fired when the card is drawn."""
    kind: RevealKind
    hull_damage: int = 0


NO_EFFECT = Effect()


# ============================================================================
# Helper constructors
# ============================================================================

def damage(hull: int = 0, shields: int = 0) -> Effect:
    """Deal fixed hull and/or shield damage."""
    return Effect(kind=EffectKind.DAMAGE, hull_damage=hull, shield_damage=shields)


def send_to_infirmary(count: int) -> Effect:
    """Send up to count pool crew to the infirmary."""
    return Effect(kind=EffectKind.SEND_TO_INFIRMARY, count=count)


def send_pool_to_infirmary() -> Effect:
    return Effect(kind=EffectKind.SEND_POOL_TO_INFIRMARY)


def recover_from_infirmary(count: int = 1) -> Effect:
    return Effect(kind=EffectKind.RECOVER_FROM_INFIRMARY, count=count)


def release_and_discard() -> Effect:
    return Effect(kind=EffectKind.RELEASE_AND_DISCARD)


def extra_draw() -> Effect:
    return Effect(kind=EffectKind.EXTRA_DRAW)


def reshuffle_discard(count: int) -> Effect:
    return Effect(kind=EffectKind.RESHUFFLE_DISCARD, count=count)


def regenerate(hull: int = 0, shields: int = 0) -> Effect:
    """Return to full health, then deal damage."""
    return Effect(kind=EffectKind.REGENERATE, hull_damage=hull, shield_damage=shields)
