"""
Tests for API pydantic schemas.

Validates that:
- Action requests parse by their type tag and convert to engine actions
- Snapshots render and rebuild game state
- Error codes are properly structured
"""

import pytest
from pydantic import ValidationError

from ..api.schemas import (
    DispatchRequest,
    ErrorCode,
    ErrorResponse,
    GameStateSnapshot,
    LoadStateRequest,
)
from ..card_schema.threat_card import CrewFace, ThreatSymbol
from ..catalogue import UnknownCardError
from ..catalogue.cards import NEBULA, PIRATES, FILLER_CARD
from ..engine_core.action import ActionType
from ..engine_core.state import (
    DieLocation,
    Difficulty,
    StationAbility,
    StationId,
    INFIRMARY,
)


def parse(body):
    return DispatchRequest.model_validate({"action": body}).action.to_action()


class TestActionRequests:
    """Tests for action request parsing."""

    def test_simple_action(self):
        action = parse({"type": "end_assign_phase"})
        assert action.action_type == ActionType.END_ASSIGN_PHASE

    def test_new_game(self):
        action = parse({"type": "new_game", "difficulty": "hard"})
        assert action.payload.difficulty == Difficulty.HARD

    def test_assign_to_station(self):
        action = parse({"type": "assign_to_station", "die_id": 2, "station": "medical"})
        assert action.action_type == ActionType.ASSIGN_TO_STATION
        assert action.payload.die_id == 2
        assert action.payload.station == StationId.MEDICAL

    def test_roll_complete(self):
        action = parse({"type": "roll_complete", "faces": ["threat", "science"]})
        assert action.payload.faces == (CrewFace.THREAT, CrewFace.SCIENCE)

    def test_target_requests(self):
        assert parse({"type": "use_tactical", "threat_id": "scout-1"}).action_type == ActionType.USE_TACTICAL
        stasis = parse({"type": "use_science_stasis", "threat_id": "scout-1"})
        assert stasis.action_type == ActionType.USE_SCIENCE_STASIS
        assert stasis.payload.threat_id == "scout-1"

    def test_commander_requests(self):
        assert parse({"type": "use_commander_reroll"}).payload.faces is None
        change = parse({"type": "use_commander_change", "die_id": 1, "face": "medical"})
        assert change.payload.face == CrewFace.MEDICAL

    def test_threat_roll(self):
        action = parse({"type": "threat_roll_complete", "face": "skull"})
        assert action.payload.threat_face == ThreatSymbol.SKULL

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            parse({"type": "self_destruct"})

    def test_bad_station_rejected(self):
        with pytest.raises(ValidationError):
            parse({"type": "assign_to_station", "die_id": 0, "station": "bridge"})


class TestSnapshots:
    """Tests for GameStateSnapshot."""

    def test_round_trip(self, assigning_state, make_threat):
        """A snapshot rebuilds an equal state."""
        nebula = make_threat(NEBULA, away_mission=(1,))
        crew = list(assigning_state.crew)
        crew[0] = crew[0].moved_to(DieLocation.at_station(StationId.TACTICAL))
        crew[1] = crew[1].moved_to(DieLocation.away_mission(nebula.id))
        crew[2] = crew[2].moved_to(INFIRMARY)
        state = assigning_state._copy_with(
            crew=tuple(crew),
            active_threats=(nebula, make_threat(PIRATES, health=1, stasis_tokens=1)),
            discard=(FILLER_CARD,),
            drawn_card=PIRATES,
            tactical_dice=(0,),
            used_station_actions=frozenset({StationAbility.SCIENCE}),
            log=("one", "two"),
        )
        snapshot = GameStateSnapshot.from_state(state)
        assert snapshot.to_state() == state

    def test_json_dump(self, playing_state):
        data = GameStateSnapshot.from_state(playing_state).model_dump(mode="json")
        assert data["status"] == "playing"
        assert data["phase"] == "rolling"
        assert data["deck"][-1] == "ouroboros"
        assert data["crew"][0]["location"] == "pool"

    def test_snapshot_from_json(self, playing_state):
        data = GameStateSnapshot.from_state(playing_state).model_dump(mode="json")
        assert GameStateSnapshot.model_validate(data).to_state() == playing_state

    def test_unknown_card(self, playing_state):
        snapshot = GameStateSnapshot.from_state(playing_state)
        snapshot.deck.append("black-hole")
        with pytest.raises(UnknownCardError):
            snapshot.to_state()

    def test_load_state_request(self, playing_state):
        request = LoadStateRequest(state=GameStateSnapshot.from_state(playing_state))
        action = request.to_action()
        assert action.action_type == ActionType.LOAD_STATE
        assert action.payload.state == playing_state


class TestErrorResponse:
    """Tests for ErrorResponse."""

    def test_error_fields(self):
        error = ErrorResponse(error="Session not found", error_code=ErrorCode.SESSION_NOT_FOUND)
        data = error.model_dump()
        assert data["error_code"] == "SESSION_NOT_FOUND"
        assert data["api_version"] == "v1"
        assert data["details"] is None
