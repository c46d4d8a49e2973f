"""
Engine Core - Deterministic game state management and rules resolution.

The engine is the runtime that:
1. Builds the threat deck
2. Manages GameState
3. Generates legal actions
4. Applies actions via the reducer
5. Resolves stations and threat activations
"""

from .state import (
    GameState,
    GameStatus,
    TurnPhase,
    Difficulty,
    LossReason,
    StationId,
    StationAbility,
    CrewDie,
    ActiveThreat,
    DieLocation,
    LocationKind,
)
from .action import Action, ActionType, ActionPayload
from .reducer import Reducer, apply_action, make_initial_state
from .action_generator import ActionGenerator, legal_actions
from .dice import RandomSource, calculate_tactical_damage
from .deck import build_deck, draw_card

__all__ = [
    "GameState",
    "GameStatus",
    "TurnPhase",
    "Difficulty",
    "LossReason",
    "StationId",
    "StationAbility",
    "CrewDie",
    "ActiveThreat",
    "DieLocation",
    "LocationKind",
    "Action",
    "ActionType",
    "ActionPayload",
    "Reducer",
    "apply_action",
    "make_initial_state",
    "ActionGenerator",
    "legal_actions",
    "RandomSource",
    "calculate_tactical_damage",
    "build_deck",
    "draw_card",
]
