"""
Action Generator - Generates legal actions from a game state.

The action generator is used by:
1. Bots to enumerate possible moves
2. UI to show available actions

Design: Generates fully specified Action objects. Roll results are
filled in from the random source, so a generated roll action is ready
to dispatch.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..card_schema.threat_card import CrewFace
from .action import Action, ActionType
from .dice import RandomSource
from .state import (
    GameState,
    TurnPhase,
    StationId,
    StationAbility,
    INFIRMARY,
    SCANNERS,
)
from .stations import (
    count_at_station,
    station_for_face,
    can_assign_to_station,
    can_assign_to_threat,
)
from .threats import can_target_threat


@dataclass
class ActionGenerator:
    """Generates legal actions for the current game state."""
    rng: RandomSource = field(default_factory=RandomSource)

    def generate(self, state: GameState) -> list[Action]:
        """
        Generate every action that would be accepted right now.

        Returns an empty list when the game is not being played.
        """
        if not state.is_playing:
            return []

        if state.phase == TurnPhase.ROLLING:
            pool = sum(1 for d in state.crew if d.location.is_pool)
            return [Action.roll_complete(self.rng.roll_crew_faces(pool))]

        if state.phase == TurnPhase.ASSIGNING:
            return self._generate_assign_actions(state)

        if state.phase == TurnPhase.DRAWING:
            return [Action.simple(ActionType.ACKNOWLEDGE_DRAW)]

        if state.phase == TurnPhase.ACTIVATING:
            if state.threat_die_face is None:
                return [Action.threat_roll_complete(self.rng.roll_threat_face())]
            return [Action.simple(ActionType.ACKNOWLEDGE_ACTIVATE)]

        return [Action.simple(ActionType.ACKNOWLEDGE_GATHER)]

    def _generate_assign_actions(self, state: GameState) -> list[Action]:
        actions: list[Action] = []
        actions.extend(self._generate_placements(state))
        actions.extend(self._generate_station_abilities(state))
        actions.append(Action.simple(ActionType.END_ASSIGN_PHASE))
        return actions

    def _generate_placements(self, state: GameState) -> list[Action]:
        actions = []
        for die in state.crew:
            if not die.location.is_pool:
                continue
            station = station_for_face(die.face)
            if can_assign_to_station(die, station, state.command_disabled):
                actions.append(Action.assign_to_station(die.id, station))
            for threat in state.active_threats:
                if can_assign_to_threat(die, threat, state.phase):
                    actions.append(Action.assign_to_threat(die.id, threat.id))
        return actions

    def _generate_station_abilities(self, state: GameState) -> list[Action]:
        actions = []
        used = state.used_station_actions

        if count_at_station(state.crew, StationId.ENGINEERING) > 0 and state.hull < state.max_hull:
            actions.append(Action.simple(ActionType.USE_ENGINEERING))

        if state.tactical_dice:
            for threat in state.active_threats:
                if can_target_threat(threat, state.active_threats):
                    actions.append(Action.use_tactical(threat.id))

        if StationAbility.MEDICAL not in used and count_at_station(state.crew, StationId.MEDICAL) > 0:
            if state.dice_at(INFIRMARY):
                actions.append(Action.simple(ActionType.USE_MEDICAL))
            if state.dice_at(SCANNERS):
                actions.append(Action.simple(ActionType.USE_MEDICAL_SCANNERS))

        if StationAbility.SCIENCE not in used and count_at_station(state.crew, StationId.SCIENCE) > 0:
            if not state.shield_recharge_blocked and state.shields < state.max_shields:
                actions.append(Action.simple(ActionType.USE_SCIENCE_SHIELDS))
            for threat in state.active_threats:
                actions.append(Action.use_science_stasis(threat.id))

        if (
            not state.command_disabled
            and StationAbility.COMMANDER not in used
            and count_at_station(state.crew, StationId.COMMANDER) > 0
        ):
            actions.append(Action.use_commander_reroll())
            for die in state.crew:
                if not die.location.is_pool:
                    continue
                for face in CrewFace:
                    if face not in (die.face, CrewFace.THREAT):
                        actions.append(Action.use_commander_change(die.id, face))

        return actions


def legal_actions(state: GameState, rng: RandomSource | None = None) -> list[Action]:
    """Convenience function to generate legal actions."""
    return ActionGenerator(rng=rng or RandomSource()).generate(state)
