"""
Game Loop - Drives a session to completion with a bot policy.

The loop:
1. Ask the action generator for legal actions
2. Let the policy pick one
3. Dispatch it through the session
4. Repeat until the game is won, lost, or the step limit is hit
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from ..bots import BotPolicy
from ..engine_core.action_generator import ActionGenerator
from ..engine_core.state import GameStatus, LossReason
from .manager import Session

logger = logging.getLogger(__name__)

MAX_STEPS = 5000


@dataclass
class GameSummary:
    """Outcome of one simulated game."""
    status: GameStatus
    loss_reason: LossReason | None
    turns: int
    hull: int
    steps: int
    log: list[str] = field(default_factory=list)

    @property
    def won(self) -> bool:
        return self.status == GameStatus.WON


class GameLoop:
    """
    Plays a session with a policy.

    Usage:
        session = SessionManager().create_session(seed=7)
        summary = GameLoop(session, HeuristicPolicy()).run()
    """

    def __init__(self, session: Session, policy: BotPolicy, max_steps: int = MAX_STEPS):
        self.session = session
        self.policy = policy
        self.max_steps = max_steps
        self.generator = ActionGenerator(rng=session.rng)

    def step(self) -> bool:
        """Take one action. Returns False when there is nothing left to do."""
        state = self.session.game_state
        actions = self.generator.generate(state)
        if not actions:
            return False
        decision = self.policy.select_action(state, actions)
        logger.debug("%s: %s", decision.action.action_type.value, decision.explanation)
        self.session.dispatch(decision.action)
        return True

    def run(self) -> GameSummary:
        steps = 0
        while steps < self.max_steps and self.step():
            steps += 1

        state = self.session.game_state
        if state.status == GameStatus.PLAYING:
            logger.warning(
                "Session %s stopped after %d steps without a result",
                self.session.session_id, steps,
            )
        return GameSummary(
            status=state.status,
            loss_reason=state.loss_reason,
            turns=state.turn_number,
            hull=state.hull,
            steps=steps,
            log=list(state.log),
        )
