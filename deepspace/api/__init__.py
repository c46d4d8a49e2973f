"""
API module - Framework-agnostic service and pydantic schemas.

The GameService can be mounted behind any web framework or used
directly by a UI loop.
"""

from .schemas import (
    ErrorCode,
    ErrorResponse,
    SessionStatus,
    SessionResponse,
    CreateSessionRequest,
    DispatchRequest,
    GameStateSnapshot,
    DieSnapshot,
    ActiveThreatSnapshot,
    LegalActionsResponse,
    ActionInfo,
)
from .service import GameService

__all__ = [
    "ErrorCode",
    "ErrorResponse",
    "SessionStatus",
    "SessionResponse",
    "CreateSessionRequest",
    "DispatchRequest",
    "GameStateSnapshot",
    "DieSnapshot",
    "ActiveThreatSnapshot",
    "LegalActionsResponse",
    "ActionInfo",
    "GameService",
]
