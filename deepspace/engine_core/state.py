"""
Game State - Immutable snapshot of a running game.

Design principles:
- Immutable: every transition builds a new GameState, nothing is mutated
- Complete: a snapshot holds everything needed to continue the game
- Observable: readers always see a fully applied transition
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable

from ..card_schema.threat_card import ThreatCard, CrewFace, ThreatSymbol


CREW_SIZE = 6
STARTING_HULL = 8
STARTING_SHIELDS = 4


class GameStatus(Enum):
    """Run status, orthogonal to the turn phase."""
    IDLE = "idle"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class LossReason(Enum):
    HULL = "hull"
    CREW = "crew"


class TurnPhase(Enum):
    """Phases of the turn cycle."""
    ROLLING = "rolling"
    ASSIGNING = "assigning"
    DRAWING = "drawing"
    ACTIVATING = "activating"
    GATHERING = "gathering"


class Difficulty(Enum):
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"


class StationId(Enum):
    """Ship stations. Only the first five accept dice directly."""
    COMMANDER = "commander"
    TACTICAL = "tactical"
    ENGINEERING = "engineering"
    MEDICAL = "medical"
    SCIENCE = "science"
    SCANNERS = "scanners"
    INFIRMARY = "infirmary"


ASSIGNABLE_STATIONS: frozenset[StationId] = frozenset({
    StationId.COMMANDER,
    StationId.TACTICAL,
    StationId.ENGINEERING,
    StationId.MEDICAL,
    StationId.SCIENCE,
})

# Face a die must show to be placed on each assignable station
STATION_FACES: dict[StationId, CrewFace] = {
    StationId.COMMANDER: CrewFace.COMMANDER,
    StationId.TACTICAL: CrewFace.TACTICAL,
    StationId.ENGINEERING: CrewFace.ENGINEERING,
    StationId.MEDICAL: CrewFace.MEDICAL,
    StationId.SCIENCE: CrewFace.SCIENCE,
}


class StationAbility(Enum):
    """Once-per-turn action budgets."""
    MEDICAL = "medical"
    SCIENCE = "science"
    COMMANDER = "commander"


# ============================================================================
# Die location
# ============================================================================

class LocationKind(Enum):
    POOL = "pool"
    INFIRMARY = "infirmary"
    SCANNERS = "scanners"
    STATION = "station"
    AWAY_MISSION = "away_mission"


@dataclass(frozen=True)
class DieLocation:
    """
    Where a crew die is.

    station is set only for STATION, threat_id only for AWAY_MISSION.
    Build values with the class helpers, not the constructor.
    """
    kind: LocationKind
    station: StationId | None = None
    threat_id: str | None = None

    @classmethod
    def at_station(cls, station: StationId) -> DieLocation:
        return cls(kind=LocationKind.STATION, station=station)

    @classmethod
    def away_mission(cls, threat_id: str) -> DieLocation:
        return cls(kind=LocationKind.AWAY_MISSION, threat_id=threat_id)

    @property
    def is_pool(self) -> bool:
        return self.kind == LocationKind.POOL

    @property
    def is_away_mission(self) -> bool:
        return self.kind == LocationKind.AWAY_MISSION

    def is_station(self, station: StationId) -> bool:
        return self.kind == LocationKind.STATION and self.station == station

    def label(self) -> str:
        """Short human-readable form."""
        if self.kind == LocationKind.STATION:
            return self.station.value
        if self.kind == LocationKind.AWAY_MISSION:
            return f"threat-{self.threat_id}"
        return self.kind.value


POOL = DieLocation(LocationKind.POOL)
INFIRMARY = DieLocation(LocationKind.INFIRMARY)
SCANNERS = DieLocation(LocationKind.SCANNERS)


# ============================================================================
# Runtime objects
# ============================================================================

@dataclass(frozen=True)
class CrewDie:
    """One of the six crew dice."""
    id: int
    face: CrewFace
    location: DieLocation = POOL

    def moved_to(self, location: DieLocation) -> CrewDie:
        return CrewDie(id=self.id, face=self.face, location=location)

    def with_face(self, face: CrewFace) -> CrewDie:
        return CrewDie(id=self.id, face=face, location=self.location)


@dataclass(frozen=True)
class ActiveThreat:
    """
    A threat card instance in play.

    The id is the card id plus a counter, since duplicate cards
    can be in play at the same time.
    """
    id: str
    card: ThreatCard
    health: int
    stasis_tokens: int = 0
    away_mission: tuple[int, ...] = ()
    is_destroyed: bool = False

    def _copy_with(self, **kwargs) -> ActiveThreat:
        return replace(self, **kwargs)


def make_crew(face: CrewFace = CrewFace.TACTICAL) -> tuple[CrewDie, ...]:
    """Six dice in the pool, all showing the same face."""
    return tuple(CrewDie(id=i, face=face) for i in range(CREW_SIZE))


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer.
    """
    status: GameStatus = GameStatus.IDLE
    phase: TurnPhase = TurnPhase.ROLLING
    difficulty: Difficulty = Difficulty.NORMAL

    # Ship
    hull: int = STARTING_HULL
    max_hull: int = STARTING_HULL
    shields: int = STARTING_SHIELDS
    max_shields: int = STARTING_SHIELDS

    # Crew
    crew: tuple[CrewDie, ...] = field(default_factory=make_crew)

    # Threats
    active_threats: tuple[ActiveThreat, ...] = ()
    deck: tuple[ThreatCard, ...] = ()
    discard: tuple[ThreatCard, ...] = ()

    threat_die_face: ThreatSymbol | None = None

    # Selection bookkeeping
    selected_die_id: int | None = None
    tactical_dice: tuple[int, ...] = ()  # committed to the next tactical fire

    # Event log for the current turn
    log: tuple[str, ...] = ()

    loss_reason: LossReason | None = None

    turn_number: int = 0
    elapsed_seconds: int = 0

    drawn_card: ThreatCard | None = None

    # Derived passive flags
    shield_recharge_blocked: bool = False
    command_disabled: bool = False

    setup_draws_remaining: int = 0
    used_station_actions: frozenset[StationAbility] = frozenset()

    # Next suffix for threat instance ids
    next_instance_id: int = 0

    @property
    def is_playing(self) -> bool:
        return self.status == GameStatus.PLAYING

    def get_die(self, die_id: int | None) -> CrewDie | None:
        """Get a crew die by ID."""
        for die in self.crew:
            if die.id == die_id:
                return die
        return None

    def get_threat(self, threat_id: str | None) -> ActiveThreat | None:
        """Get an active threat by instance ID."""
        for threat in self.active_threats:
            if threat.id == threat_id:
                return threat
        return None

    def dice_at(self, location: DieLocation) -> tuple[CrewDie, ...]:
        return tuple(d for d in self.crew if d.location == location)

    def with_log(self, *lines: str) -> GameState:
        """Return new state with lines appended to the event log."""
        return self._copy_with(log=self.log + lines)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)


def replace_die(crew: Iterable[CrewDie], die: CrewDie) -> tuple[CrewDie, ...]:
    """Return crew with the die of the same id swapped in."""
    return tuple(die if d.id == die.id else d for d in crew)


def replace_threat(
    threats: Iterable[ActiveThreat], threat: ActiveThreat
) -> tuple[ActiveThreat, ...]:
    """Return threats with the instance of the same id swapped in."""
    return tuple(threat if t.id == threat.id else t for t in threats)
