"""
Pydantic Schemas for API - Request/response models at the engine boundary.

These models define the contract between a presentation layer and the engine.
Requests carry a `type` tag naming the action; each converts to an engine
Action. Snapshots render a GameState as plain data and rebuild it for
verbatim restoration.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has expired
- INVALID_ACTION: Action is not legal in the current state
- VALIDATION_ERROR: Request body could not be parsed
"""

from __future__ import annotations
from enum import Enum
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, Field

from ..card_schema.threat_card import CrewFace, ThreatSymbol
from ..catalogue import get_card
from ..engine_core.action import Action, ActionType
from ..engine_core.state import (
    ActiveThreat,
    CrewDie,
    Difficulty,
    DieLocation,
    GameState,
    GameStatus,
    LocationKind,
    LossReason,
    StationAbility,
    StationId,
    TurnPhase,
)


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_ACTION = "INVALID_ACTION"
    VALIDATION_ERROR = "VALIDATION_ERROR"


class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


# =============================================================================
# Snapshot Models
# =============================================================================

class DieSnapshot(BaseModel):
    """A crew die and where it is."""
    id: int
    face: CrewFace
    location: LocationKind
    station: Optional[StationId] = None
    threat_id: Optional[str] = None

    @classmethod
    def from_die(cls, die: CrewDie) -> DieSnapshot:
        return cls(
            id=die.id,
            face=die.face,
            location=die.location.kind,
            station=die.location.station,
            threat_id=die.location.threat_id,
        )

    def to_die(self) -> CrewDie:
        location = DieLocation(
            kind=self.location, station=self.station, threat_id=self.threat_id
        )
        return CrewDie(id=self.id, face=self.face, location=location)


class ActiveThreatSnapshot(BaseModel):
    """A threat in play."""
    id: str
    card_id: str
    name: str = ""
    health: int
    max_health: int = 0
    stasis_tokens: int = 0
    away_mission: list[int] = Field(default_factory=list)
    is_destroyed: bool = False

    @classmethod
    def from_threat(cls, threat: ActiveThreat) -> ActiveThreatSnapshot:
        return cls(
            id=threat.id,
            card_id=threat.card.id,
            name=threat.card.name,
            health=threat.health,
            max_health=threat.card.max_health,
            stasis_tokens=threat.stasis_tokens,
            away_mission=list(threat.away_mission),
            is_destroyed=threat.is_destroyed,
        )

    def to_threat(self) -> ActiveThreat:
        return ActiveThreat(
            id=self.id,
            card=get_card(self.card_id),
            health=self.health,
            stasis_tokens=self.stasis_tokens,
            away_mission=tuple(self.away_mission),
            is_destroyed=self.is_destroyed,
        )


class GameStateSnapshot(BaseModel):
    """
    Full game state as plain data.

    Cards are referenced by catalogue id; to_state raises UnknownCardError
    for ids the catalogue does not know.
    """
    status: GameStatus
    phase: TurnPhase
    difficulty: Difficulty
    hull: int
    max_hull: int
    shields: int
    max_shields: int
    crew: list[DieSnapshot]
    active_threats: list[ActiveThreatSnapshot] = Field(default_factory=list)
    deck: list[str] = Field(default_factory=list, description="Card ids, top first")
    discard: list[str] = Field(default_factory=list)
    threat_die_face: Optional[ThreatSymbol] = None
    selected_die_id: Optional[int] = None
    tactical_dice: list[int] = Field(default_factory=list)
    log: list[str] = Field(default_factory=list)
    loss_reason: Optional[LossReason] = None
    turn_number: int = 0
    elapsed_seconds: int = 0
    drawn_card: Optional[str] = None
    shield_recharge_blocked: bool = False
    command_disabled: bool = False
    setup_draws_remaining: int = 0
    used_station_actions: list[StationAbility] = Field(default_factory=list)
    next_instance_id: int = 0

    @classmethod
    def from_state(cls, state: GameState) -> GameStateSnapshot:
        return cls(
            status=state.status,
            phase=state.phase,
            difficulty=state.difficulty,
            hull=state.hull,
            max_hull=state.max_hull,
            shields=state.shields,
            max_shields=state.max_shields,
            crew=[DieSnapshot.from_die(d) for d in state.crew],
            active_threats=[ActiveThreatSnapshot.from_threat(t) for t in state.active_threats],
            deck=[c.id for c in state.deck],
            discard=[c.id for c in state.discard],
            threat_die_face=state.threat_die_face,
            selected_die_id=state.selected_die_id,
            tactical_dice=list(state.tactical_dice),
            log=list(state.log),
            loss_reason=state.loss_reason,
            turn_number=state.turn_number,
            elapsed_seconds=state.elapsed_seconds,
            drawn_card=state.drawn_card.id if state.drawn_card else None,
            shield_recharge_blocked=state.shield_recharge_blocked,
            command_disabled=state.command_disabled,
            setup_draws_remaining=state.setup_draws_remaining,
            used_station_actions=sorted(state.used_station_actions, key=lambda a: a.value),
            next_instance_id=state.next_instance_id,
        )

    def to_state(self) -> GameState:
        return GameState(
            status=self.status,
            phase=self.phase,
            difficulty=self.difficulty,
            hull=self.hull,
            max_hull=self.max_hull,
            shields=self.shields,
            max_shields=self.max_shields,
            crew=tuple(d.to_die() for d in self.crew),
            active_threats=tuple(t.to_threat() for t in self.active_threats),
            deck=tuple(get_card(cid) for cid in self.deck),
            discard=tuple(get_card(cid) for cid in self.discard),
            threat_die_face=self.threat_die_face,
            selected_die_id=self.selected_die_id,
            tactical_dice=tuple(self.tactical_dice),
            log=tuple(self.log),
            loss_reason=self.loss_reason,
            turn_number=self.turn_number,
            elapsed_seconds=self.elapsed_seconds,
            drawn_card=get_card(self.drawn_card) if self.drawn_card else None,
            shield_recharge_blocked=self.shield_recharge_blocked,
            command_disabled=self.command_disabled,
            setup_draws_remaining=self.setup_draws_remaining,
            used_station_actions=frozenset(self.used_station_actions),
            next_instance_id=self.next_instance_id,
        )


# =============================================================================
# Action Request Models
# =============================================================================

class NewGameRequest(BaseModel):
    type: Literal["new_game"] = "new_game"
    difficulty: Difficulty = Difficulty.NORMAL

    def to_action(self) -> Action:
        return Action.new_game(self.difficulty)


class SimpleActionRequest(BaseModel):
    """Actions that carry no payload."""
    type: Literal[
        "tick",
        "start_roll",
        "use_engineering",
        "use_medical",
        "use_medical_scanners",
        "use_science_shields",
        "end_assign_phase",
        "acknowledge_draw",
        "start_threat_roll",
        "acknowledge_activate",
        "acknowledge_gather",
    ]

    def to_action(self) -> Action:
        return Action.simple(ActionType(self.type))


class RollCompleteRequest(BaseModel):
    type: Literal["roll_complete"] = "roll_complete"
    faces: list[CrewFace] = Field(description="One face per pool die, in crew order")

    def to_action(self) -> Action:
        return Action.roll_complete(self.faces)


class SelectDieRequest(BaseModel):
    type: Literal["select_die"] = "select_die"
    die_id: Optional[int] = Field(None, description="None clears the selection")

    def to_action(self) -> Action:
        return Action.select_die(self.die_id)


class AssignToStationRequest(BaseModel):
    type: Literal["assign_to_station"] = "assign_to_station"
    die_id: int
    station: StationId

    def to_action(self) -> Action:
        return Action.assign_to_station(self.die_id, self.station)


class AssignToThreatRequest(BaseModel):
    type: Literal["assign_to_threat"] = "assign_to_threat"
    die_id: int
    threat_id: str

    def to_action(self) -> Action:
        return Action.assign_to_threat(self.die_id, self.threat_id)


class TargetThreatRequest(BaseModel):
    """Station abilities aimed at one threat."""
    type: Literal["use_tactical", "use_science_stasis"]
    threat_id: str

    def to_action(self) -> Action:
        if self.type == "use_tactical":
            return Action.use_tactical(self.threat_id)
        return Action.use_science_stasis(self.threat_id)


class CommanderRerollRequest(BaseModel):
    type: Literal["use_commander_reroll"] = "use_commander_reroll"
    faces: Optional[list[CrewFace]] = Field(None, description="Rolled by the engine when omitted")

    def to_action(self) -> Action:
        return Action.use_commander_reroll(self.faces)


class CommanderChangeRequest(BaseModel):
    type: Literal["use_commander_change"] = "use_commander_change"
    die_id: int
    face: CrewFace

    def to_action(self) -> Action:
        return Action.use_commander_change(self.die_id, self.face)


class ThreatRollCompleteRequest(BaseModel):
    type: Literal["threat_roll_complete"] = "threat_roll_complete"
    face: ThreatSymbol

    def to_action(self) -> Action:
        return Action.threat_roll_complete(self.face)


class LoadStateRequest(BaseModel):
    type: Literal["load_state"] = "load_state"
    state: GameStateSnapshot

    def to_action(self) -> Action:
        return Action.load_state(self.state.to_state())


ActionRequest = Annotated[
    Union[
        NewGameRequest,
        SimpleActionRequest,
        RollCompleteRequest,
        SelectDieRequest,
        AssignToStationRequest,
        AssignToThreatRequest,
        TargetThreatRequest,
        CommanderRerollRequest,
        CommanderChangeRequest,
        ThreatRollCompleteRequest,
        LoadStateRequest,
    ],
    Field(discriminator="type"),
]


class DispatchRequest(BaseModel):
    """Request to apply one action to a session."""
    action: ActionRequest


class CreateSessionRequest(BaseModel):
    """Request to start a new game session."""
    difficulty: Difficulty = Difficulty.NORMAL
    seed: Optional[int] = Field(None, description="Seed for reproducible games")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class SessionResponse(BaseModel):
    """A session and its current game state."""
    session_id: str
    status: SessionStatus
    state: GameStateSnapshot


class ActionInfo(BaseModel):
    """A legal action, described for display."""
    type: ActionType
    die_id: Optional[int] = None
    station: Optional[StationId] = None
    threat_id: Optional[str] = None
    face: Optional[CrewFace] = None

    @classmethod
    def from_action(cls, action: Action) -> ActionInfo:
        payload = action.payload
        return cls(
            type=action.action_type,
            die_id=payload.die_id,
            station=payload.station,
            threat_id=payload.threat_id,
            face=payload.face,
        )


class LegalActionsResponse(BaseModel):
    session_id: str
    actions: list[ActionInfo] = Field(default_factory=list)
