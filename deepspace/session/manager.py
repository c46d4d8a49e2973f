"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Presentation layer starts a session (in-memory only)
2. During the game:
   - Actions are dispatched through the session's reducer
   - Rolls are supplied by the session's random source
3. Game ends or the user quits -> session removed

No persistence: a session lives only as long as the process.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import time
import uuid

from ..engine_core.action import Action
from ..engine_core.dice import RandomSource
from ..engine_core.reducer import Reducer, make_initial_state
from ..engine_core.state import Difficulty, GameState, GameStatus

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


@dataclass
class Session:
    """
    An ephemeral game session.

    Holds the current snapshot plus the reducer and random source that
    produce the next one. Readers only ever see complete snapshots.
    """
    session_id: str
    created_at: float
    rng: RandomSource
    reducer: Reducer
    game_state: GameState = field(default_factory=make_initial_state)
    state: SessionState = SessionState.ACTIVE
    actions_applied: int = 0

    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    def dispatch(self, action: Action) -> GameState:
        """Apply one action and keep the resulting snapshot."""
        previous = self.game_state
        self.game_state = self.reducer.apply(previous, action)
        if self.game_state is not previous:
            self.actions_applied += 1
        if self.game_state.status in (GameStatus.WON, GameStatus.LOST):
            if self.state == SessionState.ACTIVE:
                logger.info(
                    "Session %s finished: %s", self.session_id, self.game_state.status.value
                )
            self.state = SessionState.GAME_OVER
        elif self.game_state.status == GameStatus.PLAYING:
            self.state = SessionState.ACTIVE
        return self.game_state

    def roll_crew(self) -> Action:
        """Roll every pool die and build the matching roll action."""
        pool = sum(1 for d in self.game_state.crew if d.location.is_pool)
        return Action.roll_complete(self.rng.roll_crew_faces(pool))

    def roll_threat(self) -> Action:
        return Action.threat_roll_complete(self.rng.roll_threat_face())


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions and start their first game
    - Track active sessions
    - Clean up finished sessions
    """

    def __init__(self, session_ttl: int = 3600):
        self._sessions: dict[str, Session] = {}
        self.session_ttl = session_ttl

    def create_session(
        self,
        difficulty: Difficulty = Difficulty.NORMAL,
        seed: int | None = None,
    ) -> Session:
        """
        Create a new session and start a game in it.

        Args:
            difficulty: Deck difficulty
            seed: Optional seed for reproducible rolls and shuffles
        """
        rng = RandomSource(seed)
        session = Session(
            session_id=str(uuid.uuid4()),
            created_at=time.time(),
            rng=rng,
            reducer=Reducer(rng=rng),
        )
        session.dispatch(Action.new_game(difficulty))
        self._sessions[session.session_id] = session
        logger.info("Created session %s (%s)", session.session_id, difficulty.value)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """Remove a session. Returns False if it did not exist."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        if session.state == SessionState.ACTIVE:
            session.state = SessionState.ABANDONED
        logger.info("Ended session %s (%s)", session_id, session.state.value)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [sid for sid, session in self._sessions.items() if session.is_active()]

    def cleanup_stale_sessions(self, now: float | None = None) -> int:
        """Drop finished sessions older than the TTL. Returns how many were removed."""
        now = time.time() if now is None else now
        stale = [
            sid for sid, session in self._sessions.items()
            if not session.is_active() and now - session.created_at > self.session_ttl
        ]
        for sid in stale:
            self.end_session(sid)
        return len(stale)
