"""
Configuration - Environment-driven settings.

Environment variables:
    DEEPSPACE_ENV          development | production (default development)
    DEEPSPACE_LOG_LEVEL    logging level name (default INFO, WARNING in production)
    DEEPSPACE_DIFFICULTY   easy | normal | hard (default normal)
    DEEPSPACE_SEED         integer seed for reproducible games (optional)
    DEEPSPACE_SESSION_TTL  seconds before an idle finished session is dropped (default 3600)
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import os

from .engine_core.state import Difficulty


@dataclass(frozen=True)
class Settings:
    env: str = "development"
    log_level: str = "INFO"
    difficulty: Difficulty = Difficulty.NORMAL
    seed: int | None = None
    session_ttl: int = 3600

    @classmethod
    def from_env(cls) -> Settings:
        """Read settings from the process environment."""
        seed = os.getenv("DEEPSPACE_SEED")
        env = os.getenv("DEEPSPACE_ENV", "development").lower()
        default_level = "WARNING" if env == "production" else "INFO"
        return cls(
            env=env,
            log_level=os.getenv("DEEPSPACE_LOG_LEVEL", default_level).upper(),
            difficulty=Difficulty(os.getenv("DEEPSPACE_DIFFICULTY", "normal").lower()),
            seed=int(seed) if seed else None,
            session_ttl=int(os.getenv("DEEPSPACE_SESSION_TTL", "3600")),
        )


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging for command-line use."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
