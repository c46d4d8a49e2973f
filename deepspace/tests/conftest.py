"""
Pytest fixtures for Deep Space tests.
"""

import pytest

from ..card_schema.threat_card import ThreatCard
from ..catalogue import BOSS_CARD, FILLER_CARD
from ..engine_core.dice import RandomSource
from ..engine_core.reducer import Reducer
from ..engine_core.state import (
    ActiveThreat,
    DieLocation,
    GameState,
    GameStatus,
    TurnPhase,
    StationId,
)


@pytest.fixture
def rng() -> RandomSource:
    """Seeded random source so shuffles and rolls replay exactly."""
    return RandomSource(seed=1234)


@pytest.fixture
def reducer(rng: RandomSource) -> Reducer:
    return Reducer(rng=rng)


@pytest.fixture
def playing_state() -> GameState:
    """A game in the rolling phase with a short, harmless deck."""
    return GameState(
        status=GameStatus.PLAYING,
        phase=TurnPhase.ROLLING,
        deck=(FILLER_CARD, FILLER_CARD, BOSS_CARD),
        turn_number=1,
    )


@pytest.fixture
def assigning_state(playing_state: GameState) -> GameState:
    return playing_state._copy_with(phase=TurnPhase.ASSIGNING)


@pytest.fixture
def activating_state(playing_state: GameState) -> GameState:
    """Activation phase with shields down so damage lands on the hull."""
    return playing_state._copy_with(phase=TurnPhase.ACTIVATING, shields=0)


@pytest.fixture
def make_threat():
    """Factory for an active threat instance of a card."""
    def _make(card: ThreatCard, health: int | None = None, number: int = 1, **kwargs) -> ActiveThreat:
        return ActiveThreat(
            id=f"{card.id}-{number}",
            card=card,
            health=card.max_health if health is None else health,
            **kwargs,
        )
    return _make


@pytest.fixture
def place_dice():
    """Factory that moves dice (by id) to a station, keeping their faces."""
    def _place(state: GameState, station: StationId, *die_ids: int, face=None) -> GameState:
        crew = []
        for d in state.crew:
            if d.id in die_ids:
                if face is not None:
                    d = d.with_face(face)
                d = d.moved_to(DieLocation.at_station(station))
            crew.append(d)
        return state._copy_with(crew=tuple(crew))
    return _place
