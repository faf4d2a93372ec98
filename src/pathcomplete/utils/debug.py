"""Opt-in debug log file for tracing completion decisions."""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Mapping, Optional

DEBUG_ENV_VAR = "PATHCOMPLETE_DEBUG"
DEFAULT_LOG_PATH = Path("~/tmp/pathcomplete.log")
PACKAGE_LOGGER = "pathcomplete"


class SessionFileHandler(logging.FileHandler):
    """Append-mode file handler that writes a session banner before its first record."""

    def __init__(self, filename: Path) -> None:
        super().__init__(filename, mode="a", encoding="utf-8", delay=True)
        self._started = False

    def emit(self, record: logging.LogRecord) -> None:
        if not self._started:
            self._started = True
            if self.stream is None:
                self.stream = self._open()
            rule = "=" * 80
            stamp = time.strftime("%Y-%m-%d %H:%M:%S")
            self.stream.write(f"\n{rule}\nNew Session: {stamp}\n{rule}\n")
        super().emit(record)


def debug_enabled(environ: Optional[Mapping[str, str]] = None) -> bool:
    return (os.environ if environ is None else environ).get(DEBUG_ENV_VAR) == "1"


def enable_debug_log(
    path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[logging.Handler]:
    """Send DEBUG records of the package logger to a file when the env flag is set."""
    if not debug_enabled(environ):
        return None

    target = Path(path or DEFAULT_LOG_PATH).expanduser()
    logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in logger.handlers:
        if isinstance(existing, SessionFileHandler) and existing.baseFilename == os.path.abspath(target):
            return existing

    target.parent.mkdir(parents=True, exist_ok=True)
    handler = SessionFileHandler(target)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter("%(asctime)s | %(name)s | %(message)s", "%Y-%m-%d %H:%M:%S"))

    logger.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    return handler


def disable_debug_log(handler: logging.Handler) -> None:
    logging.getLogger(PACKAGE_LOGGER).removeHandler(handler)
    handler.close()
