"""
Stations - Pure station resolution helpers.

Each function takes plain values (crew, threats, hull, ...) and returns new
values. Nothing here reads or writes GameState; the reducer commits results.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Sequence

from ..card_schema.threat_card import CrewFace, ThreatKind
from ..card_schema.effect_dsl import PassiveKind
from .state import (
    ActiveThreat,
    CrewDie,
    DieLocation,
    LocationKind,
    StationId,
    TurnPhase,
    ASSIGNABLE_STATIONS,
    STATION_FACES,
    POOL,
    SCANNERS,
    INFIRMARY,
)


SCANNER_BATCH = 3


def dice_at_station(crew: Iterable[CrewDie], station: StationId) -> tuple[CrewDie, ...]:
    """All dice currently assigned to a station."""
    return tuple(d for d in crew if d.location.is_station(station))


def count_at_station(crew: Iterable[CrewDie], station: StationId) -> int:
    return len(dice_at_station(crew, station))


# ============================================================================
# Engineering / Medical / Science / Commander
# ============================================================================

def resolve_engineering(hull: int, max_hull: int, engineering_dice: int) -> int:
    """Repair 1 hull per engineering die, capped at max_hull."""
    return min(max_hull, hull + engineering_dice)


def resolve_medical(crew: Sequence[CrewDie]) -> tuple[CrewDie, ...]:
    """Return every infirmary die to the pool."""
    return tuple(d.moved_to(POOL) if d.location == INFIRMARY else d for d in crew)


def release_from_scanners(crew: Sequence[CrewDie]) -> tuple[CrewDie, ...]:
    """Return exactly one scanner die to the pool."""
    released = False
    result = []
    for d in crew:
        if not released and d.location == SCANNERS:
            d = d.moved_to(POOL)
            released = True
        result.append(d)
    return tuple(result)


def resolve_science(max_shields: int) -> int:
    """Recharge shields to full. Callers enforce the recharge block."""
    return max_shields


def place_stasis_token(
    threats: Sequence[ActiveThreat], threat_id: str
) -> tuple[ActiveThreat, ...]:
    return tuple(
        t._copy_with(stasis_tokens=t.stasis_tokens + 1) if t.id == threat_id else t
        for t in threats
    )


def commander_change_die(
    crew: Sequence[CrewDie], die_id: int, new_face: CrewFace
) -> tuple[CrewDie, ...]:
    """
    Set a die's face.

    A pool die changed to the threat-detected face is locked in the scanners.
    """
    result = []
    for d in crew:
        if d.id == die_id:
            d = d.with_face(new_face)
            if new_face == CrewFace.THREAT and d.location.is_pool:
                d = d.moved_to(SCANNERS)
        result.append(d)
    return tuple(result)


def commander_reroll_count(crew: Iterable[CrewDie]) -> int:
    """Number of pool dice a commander reroll would affect."""
    return sum(1 for d in crew if d.location.is_pool)


def lock_detected_threats(crew: Sequence[CrewDie]) -> tuple[tuple[CrewDie, ...], int]:
    """Move pool dice showing the threat-detected face into the scanners."""
    locked = 0
    result = []
    for d in crew:
        if d.location.is_pool and d.face == CrewFace.THREAT:
            d = d.moved_to(SCANNERS)
            locked += 1
        result.append(d)
    return tuple(result), locked


# ============================================================================
# Internal threat resolution
# ============================================================================

def is_threat_resolved(threat: ActiveThreat, crew: Iterable[CrewDie]) -> bool:
    """Enough matching dice on the away mission. No requirement means never."""
    requirement = threat.card.resolution
    if requirement is None:
        return False
    mission = DieLocation.away_mission(threat.id)
    matching = [d for d in crew if d.location == mission and d.face == requirement.face]
    return len(matching) >= requirement.count


def resolve_threat(
    threats: Sequence[ActiveThreat],
    crew: Sequence[CrewDie],
    threat_id: str,
) -> tuple[tuple[ActiveThreat, ...], tuple[CrewDie, ...]]:
    """Remove a threat and return its away-mission dice to the pool."""
    mission = DieLocation.away_mission(threat_id)
    new_crew = tuple(d.moved_to(POOL) if d.location == mission else d for d in crew)
    new_threats = tuple(t for t in threats if t.id != threat_id)
    return new_threats, new_crew


# ============================================================================
# Scanners and gathering
# ============================================================================

@dataclass(frozen=True)
class ScannersResult:
    crew: tuple[CrewDie, ...]
    extra_draws: int


def process_scanners(crew: Sequence[CrewDie]) -> ScannersResult:
    """
    Every full group of three scanner dice draws one threat and frees those dice.

    Leftover dice stay locked.
    """
    scanner_ids = [d.id for d in crew if d.location == SCANNERS]
    groups = len(scanner_ids) // SCANNER_BATCH
    if groups == 0:
        return ScannersResult(crew=tuple(crew), extra_draws=0)

    released = set(scanner_ids[: groups * SCANNER_BATCH])
    new_crew = tuple(d.moved_to(POOL) if d.id in released else d for d in crew)
    return ScannersResult(crew=new_crew, extra_draws=groups)


def gather_crew(
    crew: Sequence[CrewDie], active_threats: Iterable[ActiveThreat]
) -> tuple[CrewDie, ...]:
    """
    Return assigned dice to the pool.

    Infirmary and scanner dice stay put, as do dice on the away mission
    of a threat that is still in play.
    """
    active_ids = {t.id for t in active_threats}
    result = []
    for d in crew:
        kind = d.location.kind
        if kind in (LocationKind.INFIRMARY, LocationKind.SCANNERS):
            pass
        elif d.location.is_away_mission and d.location.threat_id in active_ids:
            pass
        else:
            d = d.moved_to(POOL)
        result.append(d)
    return tuple(result)


# ============================================================================
# Passive conditions
# ============================================================================

def _has_passive(threats: Iterable[ActiveThreat], passive: PassiveKind) -> bool:
    return any(t.card.passive == passive and not t.is_destroyed for t in threats)


def is_shield_recharge_blocked(threats: Iterable[ActiveThreat]) -> bool:
    return _has_passive(threats, PassiveKind.BLOCK_SHIELD_RECHARGE)


def is_command_disabled(threats: Iterable[ActiveThreat]) -> bool:
    return _has_passive(threats, PassiveKind.DISABLE_COMMAND)


def is_damage_floor_active(threats: Iterable[ActiveThreat]) -> bool:
    return _has_passive(threats, PassiveKind.DAMAGE_FLOOR)


# ============================================================================
# Assignment eligibility
# ============================================================================

def station_for_face(face: CrewFace) -> StationId:
    """The station a face belongs to; threat-detected dice go to the scanners."""
    for station, station_face in STATION_FACES.items():
        if station_face == face:
            return station
    return StationId.SCANNERS


def can_assign_to_station(die: CrewDie, station: StationId, command_disabled: bool) -> bool:
    if not die.location.is_pool:
        return False
    if station not in ASSIGNABLE_STATIONS:
        return False
    if command_disabled and station == StationId.COMMANDER:
        return False
    return die.face == STATION_FACES[station]


def can_assign_to_threat(die: CrewDie, threat: ActiveThreat, phase: TurnPhase) -> bool:
    if phase != TurnPhase.ASSIGNING:
        return False
    if not die.location.is_pool:
        return False
    if threat.card.kind != ThreatKind.INTERNAL:
        return False
    requirement = threat.card.resolution
    if requirement is None:
        return False
    return die.face == requirement.face
