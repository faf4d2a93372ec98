"""Completion source configuration and option merging."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple

from pathcomplete.errors import InvalidOption
from pathcomplete.models import CompletionRequest
from pathcomplete.resolver.decoration import (
    DEFAULT_DECORATION_RULES,
    DecorationRule,
    DecorationScope,
)

BaseDirectoryProvider = Callable[[Optional[CompletionRequest]], str]

DEFAULT_MAX_PREVIEW_LINES = 20

# Option names used by editor-side configuration blobs.
_ALIASES = {
    "trailing_slash": "trailing_slash_on_insert",
    "get_cwd": "base_directory_provider",
    "max_lines": "max_preview_lines",
}


def buffer_directory(request: Optional[CompletionRequest]) -> str:
    """Directory holding the request's buffer, or the working directory."""
    if request is not None and request.buffer_path:
        return os.path.dirname(os.path.abspath(request.buffer_path))
    return os.getcwd()


@dataclass(slots=True, frozen=True)
class CompletionConfig:
    trailing_slash_on_insert: bool = False
    label_trailing_slash: bool = True
    base_directory_provider: BaseDirectoryProvider = buffer_directory
    decoration_rules: Tuple[DecorationRule, ...] = DEFAULT_DECORATION_RULES
    max_preview_lines: int = DEFAULT_MAX_PREVIEW_LINES

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None) -> "CompletionConfig":
        """Merge a per-source option blob over the defaults and validate it."""
        known = {field.name for field in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in (options or {}).items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise InvalidOption(f"Unknown option: {key}")
            values[name] = value

        for name in ("trailing_slash_on_insert", "label_trailing_slash"):
            if name in values and not isinstance(values[name], bool):
                raise InvalidOption(f"{name} must be a boolean")
        if "base_directory_provider" in values and not callable(values["base_directory_provider"]):
            raise InvalidOption("base_directory_provider must be callable")
        if "max_preview_lines" in values:
            lines = values["max_preview_lines"]
            if isinstance(lines, bool) or not isinstance(lines, int) or lines < 0:
                raise InvalidOption("max_preview_lines must be a non-negative integer")
        if "decoration_rules" in values:
            values["decoration_rules"] = _parse_rules(values["decoration_rules"])

        return cls(**values)


def _parse_rules(raw: Any) -> Tuple[DecorationRule, ...]:
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        raise InvalidOption("decoration_rules must be a list")
    rules = []
    for item in raw:
        if isinstance(item, DecorationRule):
            rules.append(item)
            continue
        try:
            if isinstance(item, str):
                rules.append(DecorationRule(item))
            elif isinstance(item, Mapping):
                scope = DecorationScope(item.get("scope", DecorationScope.FIRST_SEGMENT.value))
                rules.append(DecorationRule(item["marker"], scope))
            else:
                raise TypeError("expected a marker string or a mapping")
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidOption(f"Invalid decoration rule {item!r}: {exc}") from exc
    return tuple(rules)
