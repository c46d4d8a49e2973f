"""
Session Module - Manages ephemeral game sessions.

A session represents one play-through:
- Created when the player starts a game
- Holds the current game state snapshot
- Dispatches actions and supplies rolls
- Removed when the game ends

Sessions are in-memory only.
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import GameLoop, GameSummary

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameLoop",
    "GameSummary",
]
