"""
Threats - Threat instances, ship damage and the activation pass.

The activation pass is a generic executor: each card carries an Effect
descriptor and this module interprets it. Nothing here touches GameState;
results are returned as plain values for the reducer to commit.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from ..card_schema.threat_card import ThreatCard, ThreatKind, ThreatSymbol
from ..card_schema.effect_dsl import Effect, EffectKind
from .state import (
    ActiveThreat,
    CrewDie,
    DieLocation,
    LocationKind,
    POOL,
    INFIRMARY,
)


# ============================================================================
# Instances
# ============================================================================

def create_active_threat(card: ThreatCard, counter: int) -> tuple[ActiveThreat, int]:
    """
    Create a fresh instance of card.

    counter is the last suffix handed out; returns the threat and the new
    counter, which the caller stores for the next instance.
    """
    next_counter = counter + 1
    threat = ActiveThreat(
        id=f"{card.id}-{next_counter}",
        card=card,
        health=card.max_health,
    )
    return threat, next_counter


# ============================================================================
# Ship damage
# ============================================================================

@dataclass(frozen=True)
class ShipDamageResult:
    hull: int
    shields: int
    log: tuple[str, ...] = ()


def apply_damage(hull: int, shields: int, hull_damage: int, shield_damage: int) -> ShipDamageResult:
    """
    Damage the ship.

    Shield damage hits shields first and overflows into the hull. Hull
    damage is then absorbed by whatever shields remain. Both floor at 0.
    """
    log: list[str] = []

    if shield_damage > 0:
        taken = min(shields, shield_damage)
        shields -= taken
        overflow = shield_damage - taken
        if overflow > 0:
            hull -= overflow
            log.append(
                f"{shield_damage} shield damage, shields depleted, {overflow} hull damage overflow."
            )
        else:
            log.append(f"{shield_damage} shield damage.")

    if hull_damage > 0:
        absorbed = min(shields, hull_damage)
        shields -= absorbed
        remaining = hull_damage - absorbed
        hull -= remaining
        if absorbed > 0:
            log.append(
                f"{hull_damage} hull damage, shields absorbed {absorbed}, {remaining} hull damage."
            )
        else:
            log.append(f"{hull_damage} hull damage.")

    return ShipDamageResult(hull=max(0, hull), shields=max(0, shields), log=tuple(log))


# ============================================================================
# Tactical fire
# ============================================================================

def can_target_threat(threat: ActiveThreat, all_threats: Iterable[ActiveThreat]) -> bool:
    """Whether tactical fire may target this threat right now."""
    if not threat.card.is_combat or threat.is_destroyed:
        return False

    others = [t for t in all_threats if t.id != threat.id]

    if threat.card.lone_target:
        return not any(t.card.is_combat and not t.is_destroyed for t in others)

    if threat.card.is_boss:
        return not any(t.card.is_barrier and not t.is_destroyed for t in others)

    return True


def apply_tactical_damage(
    threats: Sequence[ActiveThreat],
    target_id: str,
    damage: int,
    damage_floor: bool,
) -> tuple[ActiveThreat, ...]:
    """
    Damage one threat.

    With the damage floor active, non-boss targets cannot drop below 1.
    """
    result = []
    for t in threats:
        if t.id == target_id:
            health = t.health - damage
            if damage_floor and not t.card.is_boss:
                health = max(1, health)
            health = max(0, health)
            t = t._copy_with(health=health, is_destroyed=health == 0)
        result.append(t)
    return tuple(result)


# ============================================================================
# Activation pass
# ============================================================================

@dataclass(frozen=True)
class ActivationResult:
    hull: int
    shields: int
    threats: tuple[ActiveThreat, ...]
    crew: tuple[CrewDie, ...]
    log: tuple[str, ...]
    extra_draw: bool = False
    reshuffle_discard: int = 0  # top discard cards to shuffle back
    discarded: tuple[ThreatCard, ...] = ()


@dataclass
class _Pass:
    """Working values threaded through one activation pass."""
    hull: int
    shields: int
    threats: list[ActiveThreat]
    crew: list[CrewDie]
    log: list[str] = field(default_factory=list)
    extra_draw: bool = False
    reshuffle_discard: int = 0
    discarded: list[ThreatCard] = field(default_factory=list)

    def find(self, threat_id: str) -> ActiveThreat | None:
        for t in self.threats:
            if t.id == threat_id:
                return t
        return None

    def put(self, threat: ActiveThreat) -> None:
        self.threats = [threat if t.id == threat.id else t for t in self.threats]

    def remove(self, threat_id: str) -> None:
        self.threats = [t for t in self.threats if t.id != threat_id]

    def damage(self, effect: Effect) -> None:
        result = apply_damage(self.hull, self.shields, effect.hull_damage, effect.shield_damage)
        self.hull, self.shields = result.hull, result.shields
        self.log.extend(result.log)

    def send_to_infirmary(self, limit: int | None) -> int:
        sent = 0
        for i, d in enumerate(self.crew):
            if limit is not None and sent >= limit:
                break
            if d.location.is_pool:
                self.crew[i] = d.moved_to(INFIRMARY)
                sent += 1
        return sent

    def release_mission(self, threat_id: str) -> None:
        mission = DieLocation.away_mission(threat_id)
        self.crew = [d.moved_to(POOL) if d.location == mission else d for d in self.crew]


def activation_order(threats: Iterable[ActiveThreat]) -> list[ActiveThreat]:
    """Internal threats first, then everything else, stable within each group."""
    return sorted(threats, key=lambda t: 0 if t.card.kind == ThreatKind.INTERNAL else 1)


def activate_threats(
    hull: int,
    shields: int,
    threats: Sequence[ActiveThreat],
    crew: Sequence[CrewDie],
    rolled: ThreatSymbol,
) -> ActivationResult:
    """Activate every threat whose symbol matches the rolled face."""
    work = _Pass(hull=hull, shields=shields, threats=list(threats), crew=list(crew))

    for threat in activation_order(threats):
        card = threat.card
        if card.kind == ThreatKind.FILLER:
            continue
        if card.activation != rolled:
            continue
        if threat.is_destroyed and not card.is_barrier:
            continue

        current = work.find(threat.id)
        if current is None:
            continue
        if current.stasis_tokens > 0:
            work.put(current._copy_with(stasis_tokens=current.stasis_tokens - 1))
            work.log.append(f"{card.name} activation suppressed by stasis token.")
            continue

        work.log.append(f"{card.name} activates!")
        _execute(work, current)

    return ActivationResult(
        hull=work.hull,
        shields=work.shields,
        threats=tuple(work.threats),
        crew=tuple(work.crew),
        log=tuple(work.log),
        extra_draw=work.extra_draw,
        reshuffle_discard=work.reshuffle_discard,
        discarded=tuple(work.discarded),
    )


def _execute(work: _Pass, threat: ActiveThreat) -> None:
    """Interpret one card's effect descriptor."""
    effect = threat.card.effect
    kind = effect.kind

    if kind == EffectKind.DAMAGE:
        work.damage(effect)

    elif kind == EffectKind.REGENERATE:
        work.put(threat._copy_with(health=threat.card.max_health, is_destroyed=False))
        work.damage(effect)
        work.log.append(f"{threat.card.name} regenerated to full health!")

    elif kind == EffectKind.SEND_TO_INFIRMARY:
        sent = work.send_to_infirmary(effect.count)
        if sent > 0:
            work.log.append(f"{sent} crew sent to Infirmary.")

    elif kind == EffectKind.SEND_POOL_TO_INFIRMARY:
        sent = work.send_to_infirmary(None)
        work.log.append(f"{threat.card.name}! {sent} crew sent to Infirmary.")

    elif kind == EffectKind.RECOVER_FROM_INFIRMARY:
        recovered = 0
        for i, d in enumerate(work.crew):
            if recovered >= effect.count:
                break
            if d.location.kind == LocationKind.INFIRMARY:
                work.crew[i] = d.moved_to(POOL)
                recovered += 1
        if recovered:
            work.log.append(f"{recovered} crew recovered from Infirmary.")
        else:
            work.log.append(f"{threat.card.name}: no crew in Infirmary.")

    elif kind == EffectKind.RELEASE_AND_DISCARD:
        work.release_mission(threat.id)
        work.remove(threat.id)
        work.discarded.append(threat.card)
        work.log.append(f"{threat.card.name}: crew member returns to duty.")

    elif kind == EffectKind.EXTRA_DRAW:
        work.extra_draw = True
        work.log.append(f"{threat.card.name}: draw 1 extra threat card this turn.")

    elif kind == EffectKind.RESHUFFLE_DISCARD:
        work.reshuffle_discard = max(work.reshuffle_discard, effect.count)
        work.log.append(
            f"{threat.card.name}: top {effect.count} discard cards shuffle back into the deck."
        )


# ============================================================================
# Win / loss
# ============================================================================

def check_win(deck: Sequence[ThreatCard], active_threats: Iterable[ActiveThreat]) -> bool:
    """Deck exhausted and no combat threat (external, boss, barrier) left standing."""
    if deck:
        return False
    return not any(
        (t.card.kind == ThreatKind.EXTERNAL or t.card.is_boss or t.card.is_barrier)
        and not t.is_destroyed
        for t in active_threats
    )


def check_crew_loss(crew: Iterable[CrewDie]) -> bool:
    """
    Every die is incapacitated.

    Station dice return at gather time, so only infirmary, scanners and
    away missions count.
    """
    unavailable = (LocationKind.INFIRMARY, LocationKind.SCANNERS, LocationKind.AWAY_MISSION)
    return all(d.location.kind in unavailable for d in crew)
