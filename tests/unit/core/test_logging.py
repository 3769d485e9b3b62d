"""Tests for structured logging setup."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
import structlog

from pf_engine.core.config import Settings
from pf_engine.core.logging import (
    add_engine_context,
    bind_context,
    clear_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)


if TYPE_CHECKING:
    from collections.abc import Generator


def _engine_handlers() -> list[logging.Handler]:
    return [h for h in logging.getLogger().handlers if h.get_name() == "pf_engine"]


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Restore structlog defaults and drop engine handlers around each test."""
    root = logging.getLogger()
    original_level = root.level
    structlog.reset_defaults()
    clear_context()
    yield
    clear_context()
    structlog.reset_defaults()
    for handler in _engine_handlers():
        root.removeHandler(handler)
        handler.close()
    root.setLevel(original_level)


class TestAddEngineContext:
    """Tests for the engine context processor."""

    def test_adds_app_name(self) -> None:
        """Test that the processor tags the event."""
        event = add_engine_context(None, "info", {"event": "hello"})
        assert event["app"] == "pf_engine"
        assert event["event"] == "hello"

    def test_keeps_existing_app(self) -> None:
        """Test that an embedding application's tag is not overwritten."""
        event = add_engine_context(None, "info", {"event": "hello", "app": "sheet"})
        assert event["app"] == "sheet"


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that JSON mode emits parseable lines with context."""
        configure_logging(level="INFO", json_format=True)
        bind_context(character_id="abc123")

        get_logger("test").info("Level gained", new_level=5)

        line = capsys.readouterr().out.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "Level gained"
        assert payload["new_level"] == 5
        assert payload["character_id"] == "abc123"
        assert payload["app"] == "pf_engine"
        assert payload["level"] == "info"
        assert payload["logger"] == "test"

    def test_level_filtering(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that messages below the level are dropped."""
        configure_logging(level="WARNING", json_format=True)

        get_logger("test").info("hidden")

        assert "hidden" not in capsys.readouterr().out

    def test_reconfigure_replaces_handlers(self) -> None:
        """Test that calling twice does not stack handlers."""
        configure_logging(level="INFO")
        configure_logging(level="DEBUG")

        assert len(_engine_handlers()) == 1
        assert logging.getLogger().level == logging.DEBUG

    def test_log_file_receives_json(self, tmp_path: Path) -> None:
        """Test that the log file gets one JSON object per entry."""
        log_file = tmp_path / "engine.log"
        configure_logging(level="INFO", log_file=str(log_file))

        get_logger("test").warning("Slots exhausted", spell_level=3)
        for handler in _engine_handlers():
            handler.flush()

        payload = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
        assert payload["event"] == "Slots exhausted"
        assert payload["level"] == "warning"


class TestConfigureFromSettings:
    """Tests for settings-driven configuration."""

    def test_explicit_settings(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that level and format come from the settings."""
        configure_logging_from_settings(Settings(log_level="DEBUG", json_logs=True))

        get_logger("test").debug("Spell slots calculated", caster_level=5)

        payload = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert payload["caster_level"] == 5

    def test_environment_settings(
        self,
        mock_env_vars: dict[str, str],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test that the cached settings are used by default."""
        configure_logging_from_settings()

        get_logger("test").debug("Derived stats computed")

        payload = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert payload["level"] == "debug"


class TestContext:
    """Tests for context binding helpers."""

    def test_clear_context(self) -> None:
        """Test that cleared context no longer appears in entries."""
        bind_context(character_id="abc123")
        clear_context()

        assert structlog.contextvars.get_contextvars() == {}

    def test_bind_context(self) -> None:
        """Test that bound values are visible to the contextvars processor."""
        bind_context(character_id="abc123", level=3)

        assert structlog.contextvars.get_contextvars() == {"character_id": "abc123", "level": 3}
