"""
Tests for the command-line interface.
"""

import pytest

from ..cli import main
from ..config import Settings
from ..engine_core.state import Difficulty


class TestCLI:
    """Tests for CLI commands."""

    def test_validate(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["validate"])
        assert excinfo.value.code == 0
        assert "Catalogue valid" in capsys.readouterr().out

    def test_deck(self, capsys):
        main(["deck", "--difficulty", "hard", "--seed", "3"])
        out = capsys.readouterr().out
        assert "Deck (25 cards)" in out
        assert out.strip().splitlines()[-1].endswith("Ouroboros [external, alien]")

    def test_simulate(self, capsys):
        main(["simulate", "--games", "2", "--seed", "5", "--policy", "heuristic"])
        out = capsys.readouterr().out
        assert "Game 1:" in out
        assert "Game 2:" in out
        assert "HeuristicPolicy on normal" in out

    def test_no_command(self):
        with pytest.raises(SystemExit):
            main([])


class TestSettings:
    """Tests for environment settings."""

    def test_defaults(self, monkeypatch):
        for name in ("DEEPSPACE_ENV", "DEEPSPACE_LOG_LEVEL", "DEEPSPACE_DIFFICULTY",
                     "DEEPSPACE_SEED", "DEEPSPACE_SESSION_TTL"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings.env == "development"
        assert settings.difficulty == Difficulty.NORMAL
        assert settings.seed is None
        assert settings.log_level == "INFO"
        assert settings.session_ttl == 3600

    def test_production_logs_warnings(self, monkeypatch):
        monkeypatch.setenv("DEEPSPACE_ENV", "production")
        monkeypatch.delenv("DEEPSPACE_LOG_LEVEL", raising=False)
        assert Settings.from_env().log_level == "WARNING"

        monkeypatch.setenv("DEEPSPACE_LOG_LEVEL", "debug")
        assert Settings.from_env().log_level == "DEBUG"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("DEEPSPACE_DIFFICULTY", "HARD")
        monkeypatch.setenv("DEEPSPACE_SEED", "17")
        monkeypatch.setenv("DEEPSPACE_LOG_LEVEL", "debug")
        settings = Settings.from_env()
        assert settings.difficulty == Difficulty.HARD
        assert settings.seed == 17
        assert settings.log_level == "DEBUG"
