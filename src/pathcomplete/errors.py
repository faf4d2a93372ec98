"""Exceptions raised by the completion core."""

from __future__ import annotations


class PathCompleteError(Exception):
    """Base class for pathcomplete errors."""


class DirectoryUnreadable(PathCompleteError):
    """The scan directory is missing or cannot be opened."""

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        message = f"Cannot read directory {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class PreviewUnavailable(PathCompleteError):
    """A best-effort preview could not be produced."""

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"No preview for {path}: {reason}" if reason else f"No preview for {path}")


class InvalidOption(PathCompleteError, ValueError):
    """A configuration value has the wrong name or type."""
