"""
Tests for sessions and the autoplay game loop.
"""

from ..bots import HeuristicPolicy, RandomPolicy
from ..engine_core.action import Action, ActionType
from ..engine_core.state import Difficulty, GameStatus, TurnPhase
from ..session import GameLoop, SessionManager, SessionState


class TestSessionManager:
    """Tests for session lifecycle."""

    def test_create_starts_game(self):
        manager = SessionManager()
        session = manager.create_session(difficulty=Difficulty.EASY, seed=5)
        assert session.game_state.status == GameStatus.PLAYING
        assert session.game_state.phase == TurnPhase.DRAWING
        assert session.game_state.difficulty == Difficulty.EASY
        assert manager.get_session(session.session_id) is session
        assert manager.list_active_sessions() == [session.session_id]

    def test_seeded_sessions_match(self):
        manager = SessionManager()
        a = manager.create_session(seed=11)
        b = manager.create_session(seed=11)
        assert [c.id for c in a.game_state.deck] == [c.id for c in b.game_state.deck]

    def test_end_session(self):
        manager = SessionManager()
        session = manager.create_session(seed=1)
        assert manager.end_session(session.session_id)
        assert session.state == SessionState.ABANDONED
        assert manager.get_session(session.session_id) is None
        assert not manager.end_session(session.session_id)

    def test_dispatch_counts_applied(self):
        session = SessionManager().create_session(seed=2)
        before = session.actions_applied
        session.dispatch(Action.simple(ActionType.ACKNOWLEDGE_GATHER))  # wrong phase
        assert session.actions_applied == before
        session.dispatch(Action.simple(ActionType.ACKNOWLEDGE_DRAW))
        assert session.actions_applied == before + 1

    def test_roll_helpers(self):
        session = SessionManager().create_session(seed=3)
        roll = session.roll_crew()
        assert roll.action_type == ActionType.ROLL_COMPLETE
        assert len(roll.payload.faces) == 6
        assert session.roll_threat().payload.threat_face is not None

    def test_cleanup_stale(self):
        manager = SessionManager(session_ttl=10)
        active = manager.create_session(seed=4)
        finished = manager.create_session(seed=5)
        finished.state = SessionState.GAME_OVER
        removed = manager.cleanup_stale_sessions(now=finished.created_at + 60)
        assert removed == 1
        assert manager.get_session(finished.session_id) is None
        assert manager.get_session(active.session_id) is active


class TestGameLoop:
    """Tests for autoplay."""

    def test_heuristic_game_finishes(self):
        session = SessionManager().create_session(seed=21)
        summary = GameLoop(session, HeuristicPolicy()).run()
        assert summary.status in (GameStatus.WON, GameStatus.LOST)
        assert summary.steps > 0
        assert session.state == SessionState.GAME_OVER

    def test_random_game_finishes(self):
        session = SessionManager().create_session(difficulty=Difficulty.HARD, seed=8)
        summary = GameLoop(session, RandomPolicy(seed=8)).run()
        assert summary.status in (GameStatus.WON, GameStatus.LOST)
        assert summary.won == (summary.status == GameStatus.WON)

    def test_step_limit(self):
        session = SessionManager().create_session(seed=9)
        summary = GameLoop(session, HeuristicPolicy(), max_steps=3).run()
        assert summary.steps == 3
        assert summary.status == GameStatus.PLAYING
