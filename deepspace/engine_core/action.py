"""
Action System - The closed set of actions the reducer accepts.

Actions represent:
1. Meta actions (new game, timer tick, state load)
2. Phase actions (rolls, assignments, station abilities, acknowledgements)

Each action is a tag (ActionType) plus a small payload. The reducer
dispatches on the tag; an action it has no handler for leaves the state
unchanged.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..card_schema.threat_card import CrewFace, ThreatSymbol
from .state import Difficulty, StationId


class ActionType(Enum):
    """Types of actions in the system."""
    # Meta
    NEW_GAME = "new_game"
    TICK = "tick"
    LOAD_STATE = "load_state"  # bypasses all validation

    # Rolling phase
    START_ROLL = "start_roll"
    ROLL_COMPLETE = "roll_complete"

    # Assigning phase - placement
    SELECT_DIE = "select_die"
    ASSIGN_TO_STATION = "assign_to_station"
    ASSIGN_TO_THREAT = "assign_to_threat"

    # Assigning phase - station abilities
    USE_ENGINEERING = "use_engineering"
    USE_MEDICAL = "use_medical"
    USE_MEDICAL_SCANNERS = "use_medical_scanners"
    USE_TACTICAL = "use_tactical"
    USE_SCIENCE_SHIELDS = "use_science_shields"
    USE_SCIENCE_STASIS = "use_science_stasis"
    USE_COMMANDER_REROLL = "use_commander_reroll"
    USE_COMMANDER_CHANGE = "use_commander_change"
    END_ASSIGN_PHASE = "end_assign_phase"

    # Drawing phase
    ACKNOWLEDGE_DRAW = "acknowledge_draw"

    # Activating phase
    START_THREAT_ROLL = "start_threat_roll"
    THREAT_ROLL_COMPLETE = "threat_roll_complete"
    ACKNOWLEDGE_ACTIVATE = "acknowledge_activate"

    # Gathering phase
    ACKNOWLEDGE_GATHER = "acknowledge_gather"


@dataclass(frozen=True)
class ActionPayload:
    """
    Payload for an action.

    Different action types use different fields; the rest stay None.
    """
    difficulty: Difficulty | None = None
    die_id: int | None = None
    station: StationId | None = None
    threat_id: str | None = None
    face: CrewFace | None = None
    faces: tuple[CrewFace, ...] | None = None
    threat_face: ThreatSymbol | None = None
    state: Any | None = None  # GameState, for LOAD_STATE


@dataclass(frozen=True)
class Action:
    """A complete action to be applied to the game state."""
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def simple(cls, action_type: ActionType) -> Action:
        """Factory for payload-free actions."""
        return cls(action_type=action_type)

    @classmethod
    def new_game(cls, difficulty: Difficulty = Difficulty.NORMAL) -> Action:
        return cls(ActionType.NEW_GAME, ActionPayload(difficulty=difficulty))

    @classmethod
    def load_state(cls, state: Any) -> Action:
        return cls(ActionType.LOAD_STATE, ActionPayload(state=state))

    @classmethod
    def roll_complete(cls, faces: list[CrewFace] | tuple[CrewFace, ...]) -> Action:
        """Factory for a crew roll result, one face per pool die in crew order."""
        return cls(ActionType.ROLL_COMPLETE, ActionPayload(faces=tuple(faces)))

    @classmethod
    def select_die(cls, die_id: int | None) -> Action:
        return cls(ActionType.SELECT_DIE, ActionPayload(die_id=die_id))

    @classmethod
    def assign_to_station(cls, die_id: int, station: StationId) -> Action:
        return cls(ActionType.ASSIGN_TO_STATION, ActionPayload(die_id=die_id, station=station))

    @classmethod
    def assign_to_threat(cls, die_id: int, threat_id: str) -> Action:
        return cls(ActionType.ASSIGN_TO_THREAT, ActionPayload(die_id=die_id, threat_id=threat_id))

    @classmethod
    def use_tactical(cls, threat_id: str) -> Action:
        return cls(ActionType.USE_TACTICAL, ActionPayload(threat_id=threat_id))

    @classmethod
    def use_science_stasis(cls, threat_id: str) -> Action:
        return cls(ActionType.USE_SCIENCE_STASIS, ActionPayload(threat_id=threat_id))

    @classmethod
    def use_commander_reroll(cls, faces: list[CrewFace] | tuple[CrewFace, ...] | None = None) -> Action:
        """Factory for a commander reroll; faces are rolled by the engine when omitted."""
        return cls(
            ActionType.USE_COMMANDER_REROLL,
            ActionPayload(faces=tuple(faces) if faces is not None else None),
        )

    @classmethod
    def use_commander_change(cls, die_id: int, face: CrewFace) -> Action:
        return cls(ActionType.USE_COMMANDER_CHANGE, ActionPayload(die_id=die_id, face=face))

    @classmethod
    def threat_roll_complete(cls, face: ThreatSymbol) -> Action:
        return cls(ActionType.THREAT_ROLL_COMPLETE, ActionPayload(threat_face=face))
