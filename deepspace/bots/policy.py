"""
Bot Policy - Interface for automated play.

A BotPolicy takes a game state and the legal actions and picks one.
Policies are used by the game loop to simulate full games.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
import random

from ..card_schema.threat_card import ThreatKind
from ..engine_core.action import Action, ActionType
from ..engine_core.state import GameState, INFIRMARY


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains the action to take, an explanation (for logs)
    and how many actions were considered.
    """
    action: Action
    explanation: str = ""
    evaluated_actions: int = 0
    best_score: float = 0.0


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    Implementations can range from random play to simple heuristics.
    """

    @abstractmethod
    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        """
        Select an action from the legal actions.

        Raises ValueError when there is nothing to choose from.
        """

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - selects actions uniformly at random.

    Used for testing and as a baseline.
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        action = self.rng.choice(legal_actions)
        return BotDecision(
            action=action,
            explanation="Selected randomly",
            evaluated_actions=len(legal_actions),
        )


class HeuristicPolicy(BotPolicy):
    """
    Greedy policy - scores each legal action and takes the best.

    Priorities, highest first: finish away missions, shoot what can be
    killed, staff stations, use station abilities, then end the phase.
    """

    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        scored = [(self.score(state, action), i, action) for i, action in enumerate(legal_actions)]
        best_score, _, best = max(scored, key=lambda item: (item[0], -item[1]))
        return BotDecision(
            action=best,
            explanation=f"Highest heuristic score ({best_score:.1f})",
            evaluated_actions=len(legal_actions),
            best_score=best_score,
        )

    def score(self, state: GameState, action: Action) -> float:
        action_type = action.action_type
        payload = action.payload

        if action_type == ActionType.ASSIGN_TO_THREAT:
            return 90.0

        if action_type == ActionType.USE_TACTICAL:
            target = state.get_threat(payload.threat_id)
            if target is None:
                return 0.0
            # Prefer the weakest target, and the boss above all
            bonus = 20.0 if target.card.is_boss else 0.0
            return 80.0 + bonus - target.health

        if action_type == ActionType.ASSIGN_TO_STATION:
            return 70.0

        if action_type == ActionType.USE_MEDICAL:
            return 60.0 + len(state.dice_at(INFIRMARY))

        if action_type == ActionType.USE_SCIENCE_SHIELDS:
            return 50.0 + (state.max_shields - state.shields)

        if action_type == ActionType.USE_SCIENCE_STASIS:
            target = state.get_threat(payload.threat_id)
            if target is None or target.card.kind == ThreatKind.INTERNAL:
                return 10.0
            return 40.0 + target.card.effect.hull_damage

        if action_type == ActionType.USE_MEDICAL_SCANNERS:
            return 35.0

        if action_type == ActionType.USE_ENGINEERING:
            return 30.0

        if action_type == ActionType.USE_COMMANDER_REROLL:
            return 20.0

        if action_type == ActionType.USE_COMMANDER_CHANGE:
            return 5.0

        if action_type == ActionType.END_ASSIGN_PHASE:
            return 1.0

        # Rolls and acknowledgements are the only option in their phase
        return 0.0
