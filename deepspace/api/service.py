"""
API Service - Business logic layer between a presentation layer and the engine.

The service:
1. Translates requests to engine actions
2. Manages sessions
3. Formats responses as snapshots

This layer is framework-agnostic (can be mounted in any web framework or
driven directly from a UI loop).
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
from typing import Any

from pydantic import ValidationError

from ..catalogue import UnknownCardError
from ..engine_core.action_generator import legal_actions
from .schemas import (
    ActionInfo,
    CreateSessionRequest,
    DispatchRequest,
    ErrorCode,
    ErrorResponse,
    GameStateSnapshot,
    LegalActionsResponse,
    LoadStateRequest,
    SessionResponse,
    SessionStatus,
)
from ..session import SessionManager, Session

logger = logging.getLogger(__name__)


@dataclass
class GameService:
    """
    Main service for driving games.

    Usage:
        service = GameService()
        session = service.create_session(CreateSessionRequest(seed=3))
        response = service.dispatch(session.session_id, {"type": "start_roll"})
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_session(self, request: CreateSessionRequest | None = None) -> SessionResponse:
        """Start a new game in a fresh session."""
        request = request or CreateSessionRequest()
        session = self.session_manager.create_session(
            difficulty=request.difficulty, seed=request.seed
        )
        return self._session_to_response(session)

    def get_state(self, session_id: str) -> SessionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_to_response(session)

    def dispatch(
        self,
        session_id: str,
        request: DispatchRequest | dict[str, Any],
    ) -> SessionResponse | ErrorResponse:
        """
        Apply one action to a session.

        Accepts a parsed DispatchRequest or the raw action body, e.g.
        {"type": "assign_to_station", "die_id": 2, "station": "medical"}.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        if isinstance(request, dict):
            try:
                request = DispatchRequest.model_validate({"action": request})
            except ValidationError as e:
                return ErrorResponse(
                    error="Invalid action request",
                    error_code=ErrorCode.VALIDATION_ERROR,
                    details={"errors": e.errors(include_url=False, include_context=False)},
                )

        try:
            action = request.action.to_action()
        except UnknownCardError as e:
            return ErrorResponse(
                error=f"Unknown card: {e.args[0]}",
                error_code=ErrorCode.VALIDATION_ERROR,
            )
        return self._apply(session, action)

    def roll_crew(self, session_id: str) -> SessionResponse | ErrorResponse:
        """Roll the pool dice with the session's random source."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._apply(session, session.roll_crew())

    def roll_threat(self, session_id: str) -> SessionResponse | ErrorResponse:
        """Roll the threat die with the session's random source."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._apply(session, session.roll_threat())

    def load_state(
        self, session_id: str, snapshot: GameStateSnapshot
    ) -> SessionResponse | ErrorResponse:
        """Replace a session's state with a saved snapshot."""
        return self.dispatch(session_id, DispatchRequest(action=LoadStateRequest(state=snapshot)))

    def get_legal_actions(self, session_id: str) -> LegalActionsResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        actions = legal_actions(session.game_state, session.rng)
        return LegalActionsResponse(
            session_id=session_id,
            actions=[ActionInfo.from_action(a) for a in actions],
        )

    def end_session(self, session_id: str) -> bool:
        return self.session_manager.end_session(session_id)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Helpers
    # =========================================================================

    def _apply(self, session: Session, action) -> SessionResponse | ErrorResponse:
        previous = session.game_state
        if session.dispatch(action) is previous:
            return ErrorResponse(
                error=f"Action {action.action_type.value} is not legal now",
                error_code=ErrorCode.INVALID_ACTION,
                details={"status": previous.status.value, "phase": previous.phase.value},
            )
        return self._session_to_response(session)

    def _not_found(self, session_id: str) -> ErrorResponse:
        logger.warning("Session %s not found", session_id)
        return ErrorResponse(
            error="Session not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
            details={"session_id": session_id},
        )

    def _session_to_response(self, session: Session) -> SessionResponse:
        return SessionResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            state=GameStateSnapshot.from_state(session.game_state),
        )
