"""
Tests for the framework-agnostic GameService.
"""

import pytest

from ..api import CreateSessionRequest, ErrorCode, ErrorResponse, GameService, SessionResponse
from ..api.schemas import GameStateSnapshot, SessionStatus
from ..engine_core.state import Difficulty, TurnPhase


@pytest.fixture
def service() -> GameService:
    return GameService()


@pytest.fixture
def session_id(service: GameService) -> str:
    return service.create_session(CreateSessionRequest(seed=42)).session_id


class TestGameService:
    """Tests for GameService."""

    def test_create_session(self, service):
        response = service.create_session(CreateSessionRequest(difficulty=Difficulty.EASY, seed=1))
        assert isinstance(response, SessionResponse)
        assert response.status == SessionStatus.ACTIVE
        assert response.state.difficulty == Difficulty.EASY
        assert response.state.phase == TurnPhase.DRAWING
        assert service.list_sessions() == [response.session_id]

    def test_unknown_session(self, service):
        response = service.get_state("nope")
        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.SESSION_NOT_FOUND
        assert service.dispatch("nope", {"type": "tick"}).error_code == ErrorCode.SESSION_NOT_FOUND

    def test_dispatch_raw_body(self, service, session_id):
        response = service.dispatch(session_id, {"type": "acknowledge_draw"})
        assert isinstance(response, SessionResponse)
        assert response.state.setup_draws_remaining == 1

    def test_validation_error(self, service, session_id):
        response = service.dispatch(session_id, {"type": "assign_to_station", "die_id": "x"})
        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.VALIDATION_ERROR
        assert response.details["errors"]

    def test_invalid_action(self, service, session_id):
        """Actions the engine ignores come back as INVALID_ACTION."""
        response = service.dispatch(session_id, {"type": "end_assign_phase"})
        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.INVALID_ACTION
        assert response.details["phase"] == "drawing"

    def test_rolls(self, service, session_id):
        service.dispatch(session_id, {"type": "acknowledge_draw"})
        service.dispatch(session_id, {"type": "acknowledge_draw"})
        response = service.roll_crew(session_id)
        assert isinstance(response, SessionResponse)
        assert response.state.phase == TurnPhase.ASSIGNING

        assert service.roll_threat(session_id).error_code == ErrorCode.INVALID_ACTION

    def test_legal_actions(self, service, session_id):
        response = service.get_legal_actions(session_id)
        assert [a.type.value for a in response.actions] == ["acknowledge_draw"]

    def test_load_state(self, service, session_id):
        current = service.get_state(session_id).state
        data = current.model_dump(mode="json")
        data["hull"] = 3
        response = service.load_state(session_id, GameStateSnapshot.model_validate(data))
        assert response.state.hull == 3

    def test_load_state_restores_phase(self, service, session_id):
        """A loaded snapshot drives what is legal next."""
        data = service.get_state(session_id).state.model_dump(mode="json")
        data["phase"] = "activating"
        data["drawn_card"] = None
        response = service.load_state(session_id, GameStateSnapshot.model_validate(data))
        assert response.state.phase == TurnPhase.ACTIVATING
        types = [a.type.value for a in service.get_legal_actions(session_id).actions]
        assert types == ["threat_roll_complete"]

    def test_load_state_unknown_session(self, service, session_id):
        snapshot = service.get_state(session_id).state
        response = service.load_state("missing", snapshot)
        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.SESSION_NOT_FOUND

    def test_load_unknown_card(self, service, session_id):
        data = service.get_state(session_id).state.model_dump(mode="json")
        data["deck"] = ["black-hole"]
        response = service.dispatch(session_id, {"type": "load_state", "state": data})
        assert response.error_code == ErrorCode.VALIDATION_ERROR

    def test_end_session(self, service, session_id):
        assert service.end_session(session_id)
        assert service.get_state(session_id).error_code == ErrorCode.SESSION_NOT_FOUND
