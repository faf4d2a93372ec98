"""Text helpers for locating the word under the cursor."""

from __future__ import annotations

import re
from typing import List, Tuple

# What the host should filter on: one path segment, no whitespace or quotes.
KEYWORD_PATTERN = r"[^\s'\"`/]*"

_KEYWORD_AT_END = re.compile(KEYWORD_PATTERN + r"$")
_WORD_BOUNDARY = frozenset(" \t\"'")
_LINE_RUNS = re.compile(r"[^\r\n]+")


def fragment_start(line: str) -> int:
    """Index just past the last whitespace or quote character in ``line``."""
    for index in range(len(line) - 1, -1, -1):
        if line[index] in _WORD_BOUNDARY or line[index].isspace():
            return index + 1
    return 0


def current_fragment(line: str) -> Tuple[int, str]:
    """Return ``(start, fragment)`` for the word being typed at the end of ``line``."""
    start = fragment_start(line)
    return start, line[start:]


def keyword_start(line: str) -> int:
    """Index where the trailing keyword (a single path segment) starts."""
    match = _KEYWORD_AT_END.search(line)
    return match.start() if match else len(line)


def split_lines(text: str, *, limit: int | None = None) -> List[str]:
    """Split text into its non-empty line runs, keeping at most ``limit`` of them."""
    lines: List[str] = []
    if limit is not None and limit <= 0:
        return lines
    for match in _LINE_RUNS.finditer(text):
        lines.append(match.group(0))
        if limit is not None and len(lines) >= limit:
            break
    return lines
