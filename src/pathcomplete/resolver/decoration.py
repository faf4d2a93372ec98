"""Marker prefixes that are stripped for resolution and put back on candidates."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from pathcomplete.models import MarkerState


class DecorationScope(Enum):
    """Which candidates get the marker reinserted."""

    FIRST_SEGMENT = "first_segment"
    NONE = "none"


@dataclass(slots=True, frozen=True)
class DecorationRule:
    marker: str
    scope: DecorationScope = DecorationScope.FIRST_SEGMENT

    def __post_init__(self) -> None:
        if len(self.marker) != 1 or self.marker == "/":
            raise ValueError(f"Marker must be a single non-separator character, got {self.marker!r}")


DEFAULT_DECORATION_RULES: tuple[DecorationRule, ...] = (DecorationRule("@"),)


def marker_state(fragment: str, rules: Sequence[DecorationRule]) -> MarkerState:
    """Work out whether ``fragment`` starts with a marker and if candidates need it back.

    Reinsertion only applies while the user is still typing the first segment,
    i.e. no separator follows the marker yet.
    """
    for rule in rules:
        if fragment.startswith(rule.marker):
            first_segment = "/" not in fragment[len(rule.marker):]
            decorate = rule.scope is DecorationScope.FIRST_SEGMENT and first_segment
            return MarkerState(marker=rule.marker, has_marker=True, decorate_first_segment=decorate)
    return MarkerState()
