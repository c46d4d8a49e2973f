"""
Threat Cards - The base game catalogue.

Card structure:
- Kind (internal, external, boss-barrier, filler)
- Activation symbol (one of the six threat die faces)
- Health (external and boss cards only)
- Resolution requirement (internal cards only)
- Effect / reveal / passive descriptors
"""

from ..card_schema.threat_card import (
    ThreatCard,
    ThreatKind,
    ThreatSymbol,
    CrewFace,
    ResolutionRequirement,
)
from ..card_schema.effect_dsl import (
    RevealEffect,
    RevealKind,
    PassiveKind,
    damage,
    send_to_infirmary,
    send_pool_to_infirmary,
    recover_from_infirmary,
    release_and_discard,
    extra_draw,
    reshuffle_discard,
    regenerate,
)


class UnknownCardError(KeyError):
    """Raised when a card id is not in the catalogue."""


# ============================================================================
# Filler
# ============================================================================

DONT_PANIC = ThreatCard(
    id="dont-panic",
    name="Don't Panic",
    kind=ThreatKind.FILLER,
    activation=ThreatSymbol.SKULL,
    description="Nothing happens. Breathe.",
)


# ============================================================================
# Internal threats
# ============================================================================

PANEL_EXPLOSION = ThreatCard(
    id="panel-explosion",
    name="Panel Explosion",
    kind=ThreatKind.INTERNAL,
    activation=ThreatSymbol.WARNING,
    description="ACTIVATE: Send 1 crew to the Infirmary.",
    resolution=ResolutionRequirement(CrewFace.ENGINEERING, 1),
    effect=send_to_infirmary(1),
)

DISTRACTED = ThreatCard(
    id="distracted",
    name="Distracted",
    kind=ThreatKind.INTERNAL,
    activation=ThreatSymbol.NOVA,
    description="REVEAL: Immediately lock 1 crew die here. ACTIVATE: Free the die; discard this card.",
    immediate_on_reveal=True,
    effect=release_and_discard(),
    reveal=RevealEffect(RevealKind.LOCK_CREW),
)
DISTRACTED_2 = DISTRACTED.variant("distracted-2")
DISTRACTED_3 = DISTRACTED.variant("distracted-3")

FRIENDLY_FIRE = ThreatCard(
    id="friendly-fire",
    name="Friendly Fire",
    kind=ThreatKind.INTERNAL,
    activation=ThreatSymbol.LIGHTNING,
    description="ACTIVATE: Deal 1 hull damage.",
    resolution=ResolutionRequirement(CrewFace.TACTICAL, 1),
    effect=damage(hull=1),
)

BOOST_MORALE = ThreatCard(
    id="boost-morale",
    name="Boost Morale",
    kind=ThreatKind.INTERNAL,
    activation=ThreatSymbol.NOVA,
    description="ACTIVATE: Return 1 crew from the Infirmary.",
    resolution=ResolutionRequirement(CrewFace.COMMANDER, 1),
    effect=recover_from_infirmary(1),
)

NEBULA = ThreatCard(
    id="nebula",
    name="Nebula",
    kind=ThreatKind.INTERNAL,
    activation=ThreatSymbol.HAZARD,
    description="While in play: shields cannot be recharged. ACTIVATE: Deal 1 shield damage.",
    resolution=ResolutionRequirement(CrewFace.SCIENCE, 2),
    effect=damage(shields=1),
    passive=PassiveKind.BLOCK_SHIELD_RECHARGE,
)

TIME_WARP = ThreatCard(
    id="time-warp",
    name="Time Warp",
    kind=ThreatKind.INTERNAL,
    activation=ThreatSymbol.NOVA,
    description=(
        "While in play: external threats cannot be damaged below 1 HP. "
        "ACTIVATE: Shuffle the top 3 discard cards back into the deck."
    ),
    resolution=ResolutionRequirement(CrewFace.SCIENCE, 2),
    effect=reshuffle_discard(3),
    passive=PassiveKind.DAMAGE_FLOOR,
)

PANDEMIC = ThreatCard(
    id="pandemic",
    name="Pandemic",
    kind=ThreatKind.INTERNAL,
    activation=ThreatSymbol.HAZARD,
    description="ACTIVATE: Send ALL crew currently in the pool to the Infirmary.",
    resolution=ResolutionRequirement(CrewFace.MEDICAL, 2),
    effect=send_pool_to_infirmary(),
)

SPORE_INFESTATION = ThreatCard(
    id="spore-infestation",
    name="Spore: Infestation",
    kind=ThreatKind.INTERNAL,
    activation=ThreatSymbol.ALIEN,
    description="ACTIVATE: Send 2 crew to the Infirmary.",
    resolution=ResolutionRequirement(CrewFace.MEDICAL, 1),
    effect=send_to_infirmary(2),
)

ROBOT_UPRISING = ThreatCard(
    id="robot-uprising",
    name="Robot Uprising",
    kind=ThreatKind.INTERNAL,
    activation=ThreatSymbol.WARNING,
    description="ACTIVATE: Send 2 crew to the Infirmary.",
    resolution=ResolutionRequirement(CrewFace.TACTICAL, 2),
    effect=send_to_infirmary(2),
)

COMMS_OFFLINE = ThreatCard(
    id="comms-offline",
    name="Comms Offline",
    kind=ThreatKind.INTERNAL,
    activation=ThreatSymbol.LIGHTNING,
    description="While in play: Commander station is disabled. ACTIVATE: Draw 1 extra threat card.",
    resolution=ResolutionRequirement(CrewFace.ENGINEERING, 2),
    effect=extra_draw(),
    passive=PassiveKind.DISABLE_COMMAND,
)


# ============================================================================
# External threats
# ============================================================================

STRIKE_BOMBERS = ThreatCard(
    id="strike-bombers",
    name="Strike Bombers",
    kind=ThreatKind.EXTERNAL,
    activation=ThreatSymbol.LIGHTNING,
    max_health=3,
    description="ACTIVATE: Deal 1 hull damage.",
    effect=damage(hull=1),
)
STRIKE_BOMBERS_2 = STRIKE_BOMBERS.variant("strike-bombers-2")

SCOUT = ThreatCard(
    id="scout",
    name="Scout",
    kind=ThreatKind.EXTERNAL,
    activation=ThreatSymbol.HAZARD,
    max_health=2,
    description="ACTIVATE: Deal 1 shield damage (or 1 hull if shields are down).",
    effect=damage(shields=1),
)
SCOUT_2 = SCOUT.variant("scout-2")

PIRATES = ThreatCard(
    id="pirates",
    name="Pirates",
    kind=ThreatKind.EXTERNAL,
    activation=ThreatSymbol.SKULL,
    max_health=4,
    description="ACTIVATE: Deal 2 hull damage.",
    effect=damage(hull=2),
)

SPACE_PIRATES = ThreatCard(
    id="space-pirates",
    name="Space Pirates",
    kind=ThreatKind.EXTERNAL,
    activation=ThreatSymbol.SKULL,
    max_health=5,
    description="ACTIVATE: Deal 2 hull damage and 1 shield damage.",
    effect=damage(hull=2, shields=1),
)

ORBITAL_CANNON = ThreatCard(
    id="orbital-cannon",
    name="Orbital Cannon",
    kind=ThreatKind.EXTERNAL,
    activation=ThreatSymbol.WARNING,
    max_health=6,
    description=(
        "Can only be targeted when it is the ONLY active external threat. "
        "ACTIVATE: Deal 3 hull damage."
    ),
    effect=damage(hull=3),
    lone_target=True,
)

SOLAR_WINDS_FLAGSHIP = ThreatCard(
    id="solar-winds-flagship",
    name="Solar Winds Flagship",
    kind=ThreatKind.EXTERNAL,
    activation=ThreatSymbol.SKULL,
    max_health=1,
    description="REVEAL: Immediately deal 5 hull damage, then discard.",
    immediate_on_reveal=True,
    reveal=RevealEffect(RevealKind.HULL_STRIKE, hull_damage=5),
)

HIJACKERS = ThreatCard(
    id="hijackers",
    name="Hijackers",
    kind=ThreatKind.EXTERNAL,
    activation=ThreatSymbol.ALIEN,
    max_health=3,
    description="ACTIVATE: Send 1 crew to the Infirmary.",
    effect=send_to_infirmary(1),
)


# ============================================================================
# Boss
# ============================================================================

OUROBOROS_BARRIER = ThreatCard(
    id="ouroboros-barrier",
    name="Ouroboros Barrier",
    kind=ThreatKind.BOSS_BARRIER,
    activation=ThreatSymbol.ALIEN,
    max_health=4,
    description=(
        "Protects Ouroboros from all damage. When destroyed, Ouroboros can be attacked. "
        "ACTIVATE: Deal 2 hull damage and regenerate to full HP."
    ),
    is_barrier=True,
    effect=regenerate(hull=2),
)

OUROBOROS = ThreatCard(
    id="ouroboros",
    name="Ouroboros",
    kind=ThreatKind.EXTERNAL,
    activation=ThreatSymbol.ALIEN,
    max_health=8,
    description=(
        "Final boss. Cannot be damaged while the Ouroboros Barrier is active. "
        "ACTIVATE: Deal 3 hull damage."
    ),
    is_boss=True,
    effect=damage(hull=3),
)


# ============================================================================
# Deck composition
# ============================================================================

FILLER_CARD = DONT_PANIC
BOSS_CARD = OUROBOROS
BARRIER_CARD = OUROBOROS_BARRIER

# Always in the deck; duplicates are intentional
CORE_CARDS: tuple[ThreatCard, ...] = (
    # Internal threats
    PANEL_EXPLOSION,
    PANEL_EXPLOSION,
    DISTRACTED,
    DISTRACTED_2,
    DISTRACTED_3,
    FRIENDLY_FIRE,
    FRIENDLY_FIRE,
    BOOST_MORALE,
    NEBULA,
    TIME_WARP,
    PANDEMIC,
    SPORE_INFESTATION,
    ROBOT_UPRISING,
    COMMS_OFFLINE,
    # External threats
    STRIKE_BOMBERS,
    STRIKE_BOMBERS_2,
    SCOUT,
    SCOUT_2,
    PIRATES,
    SPACE_PIRATES,
    ORBITAL_CANNON,
    SOLAR_WINDS_FLAGSHIP,
    HIJACKERS,
    # Barrier is shuffled in with the rest
    OUROBOROS_BARRIER,
)

ALL_CARDS: tuple[ThreatCard, ...] = tuple(
    {card.id: card for card in (*CORE_CARDS, FILLER_CARD, BOSS_CARD)}.values()
)

CARDS_BY_ID: dict[str, ThreatCard] = {card.id: card for card in ALL_CARDS}


def get_card(card_id: str) -> ThreatCard:
    """Look up a card template by id."""
    try:
        return CARDS_BY_ID[card_id]
    except KeyError:
        raise UnknownCardError(card_id) from None
