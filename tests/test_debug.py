"""Tests for the opt-in debug log file."""

from __future__ import annotations

import logging
from pathlib import Path

from pathcomplete.utils.debug import (
    DEBUG_ENV_VAR,
    debug_enabled,
    disable_debug_log,
    enable_debug_log,
)


class TestDebugEnabled:
    def test_flag(self) -> None:
        assert debug_enabled({DEBUG_ENV_VAR: "1"})
        assert not debug_enabled({DEBUG_ENV_VAR: "0"})
        assert not debug_enabled({})


class TestEnableDebugLog:
    """Test enable_debug_log function."""

    def test_disabled_by_default(self, tmp_path: Path) -> None:
        """Nothing is attached and no file is created without the flag."""
        log_path = tmp_path / "debug.log"

        handler = enable_debug_log(log_path, environ={})

        assert handler is None
        assert not log_path.exists()

    def test_writes_session_banner_and_records(self, tmp_path: Path) -> None:
        log_path = tmp_path / "nested" / "debug.log"
        package_logger = logging.getLogger("pathcomplete")
        previous_level = package_logger.level

        handler = enable_debug_log(log_path, environ={DEBUG_ENV_VAR: "1"})
        assert handler is not None
        try:
            logging.getLogger("pathcomplete.resolver.classifier").debug("resolved %s", "/repo")
            logging.getLogger("pathcomplete.source").debug("second record")
        finally:
            disable_debug_log(handler)
            package_logger.setLevel(previous_level)

        content = log_path.read_text(encoding="utf-8")
        assert content.count("New Session:") == 1
        assert "resolved /repo" in content
        assert "second record" in content
        assert handler not in package_logger.handlers

    def test_repeated_calls_reuse_handler(self, tmp_path: Path) -> None:
        """Enabling twice in one process attaches a single handler."""
        log_path = tmp_path / "debug.log"
        package_logger = logging.getLogger("pathcomplete")
        previous_level = package_logger.level

        first = enable_debug_log(log_path, environ={DEBUG_ENV_VAR: "1"})
        second = enable_debug_log(log_path, environ={DEBUG_ENV_VAR: "1"})
        try:
            assert first is not None
            assert second is first
            attached = [handler for handler in package_logger.handlers if handler is first]
            assert len(attached) == 1
        finally:
            disable_debug_log(first)
            package_logger.setLevel(previous_level)
