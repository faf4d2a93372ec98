"""Decide whether the text before the cursor is a path and which directory to scan.

The checks run in a fixed order. Rejections come first, then the prefix
grammars from most to least specific: ``../`` also contains a separator, so it
has to be recognised before the generic relative case.
"""

from __future__ import annotations

import logging
import os
import re
from enum import Enum
from typing import Optional

from pathcomplete.config import CompletionConfig
from pathcomplete.models import CompletionRequest, EditorMode, ResolvedDirectory
from pathcomplete.resolver.decoration import marker_state
from pathcomplete.utils.files import canonicalize, home_directory, lookup_env
from pathcomplete.utils.text import current_fragment

LOGGER = logging.getLogger(__name__)

SEPARATOR = "/"
HIDDEN_TRIGGER = "."

_ENV_NAME = re.compile(r"\$([A-Za-z_][A-Za-z0-9_]*)")
_ARITHMETIC = re.compile(r"^[\d)]\s*/")
_DIVISION_OPERAND = re.compile(r"(?:^|\s)(?:[\d.]+|\S*\))\s+/\s+$")
_ONLY_SLASHES = re.compile(r"^[\s/]*$")


class PathGrammar(Enum):
    ABSOLUTE = "absolute"
    HOME = "home"
    PARENT = "parent"
    CURRENT = "current"
    ENVIRONMENT = "environment"
    RELATIVE = "relative"
    BARE = "bare"


def is_slash_comment(filetype: str, commentstring: str) -> bool:
    """True when the buffer has a filetype whose comments start with ``/*`` or ``//``."""
    if not filetype:
        return False
    return "/*" in commentstring or "//" in commentstring


def rejection_reason(path: str, *, before: str = "", slash_comment: bool = False) -> Optional[str]:
    """Return why ``path`` is not a path fragment, or ``None`` when it may be one.

    ``before`` is the line text preceding the fragment.
    """
    if "://" in path:
        return "url"
    if path.endswith("</"):
        return "html closing tag"
    if _ARITHMETIC.match(path):
        return "arithmetic"
    if _DIVISION_OPERAND.search(before):
        return "division operand"
    if slash_comment and _ONLY_SLASHES.match(path):
        return "slash comment"
    return None


def classify(path: str) -> PathGrammar:
    if path.startswith(SEPARATOR):
        return PathGrammar.ABSOLUTE
    if path.startswith("~/"):
        return PathGrammar.HOME
    if path.startswith("../"):
        return PathGrammar.PARENT
    if path.startswith("./"):
        return PathGrammar.CURRENT
    if path.startswith("$"):
        return PathGrammar.ENVIRONMENT
    if SEPARATOR in path:
        return PathGrammar.RELATIVE
    return PathGrammar.BARE


def _dir_part(path: str) -> Optional[str]:
    """Everything before the final separator, or ``None`` without one."""
    index = path.rfind(SEPARATOR)
    if index < 0:
        return None
    return path[:index]


def _under(root: str, rest: str) -> str:
    directory = _dir_part(rest)
    if directory is None:
        return root
    return root + SEPARATOR + directory


def scan_directory(path: str, base: str) -> Optional[str]:
    """Directory to list for ``path``, before canonicalisation.

    Returns ``None`` for ``$NAME`` fragments with an invalid or undefined name.
    """
    grammar = classify(path)
    LOGGER.debug("grammar for %r: %s", path, grammar.value)

    if grammar is PathGrammar.ABSOLUTE:
        return _dir_part(path) or SEPARATOR
    if grammar is PathGrammar.HOME:
        return _under(home_directory(), path[2:])
    if grammar is PathGrammar.PARENT:
        directory = _dir_part(path)
        return base + SEPARATOR + (directory if directory is not None else "..")
    if grammar is PathGrammar.CURRENT:
        return _under(base, path[2:])
    if grammar is PathGrammar.ENVIRONMENT:
        match = _ENV_NAME.match(path)
        if match is None:
            LOGGER.debug("invalid environment variable syntax in %r", path)
            return None
        value = lookup_env(match.group(1))
        if value is None:
            LOGGER.debug("environment variable not set: %s", match.group(1))
            return None
        after = path[match.end():]
        if after.startswith(SEPARATOR):
            return _under(value, after[1:])
        return value
    if grammar is PathGrammar.RELATIVE:
        return _under(base, path)
    return base


def base_directory(request: CompletionRequest, config: CompletionConfig) -> str:
    if request.mode is EditorMode.COMMAND:
        return os.getcwd()
    return config.base_directory_provider(request)


def resolve(request: CompletionRequest, config: CompletionConfig) -> Optional[ResolvedDirectory]:
    """Resolve the fragment before the cursor to a directory, or ``None`` if it is not a path."""
    context = request.context
    start, fragment = current_fragment(context.line)
    LOGGER.debug("fragment %r (line %r, offset %d)", fragment, context.line, context.offset)
    if not fragment:
        return None

    state = marker_state(fragment, config.decoration_rules)
    path = fragment[len(state.marker):] if state.has_marker and state.marker else fragment

    reason = rejection_reason(
        path,
        before=context.line[:start],
        slash_comment=is_slash_comment(request.filetype, request.commentstring),
    )
    if reason is not None:
        LOGGER.debug("rejected %r: %s", fragment, reason)
        return None

    scan = scan_directory(path, base_directory(request, config))
    if scan is None:
        return None

    resolved = ResolvedDirectory(
        path=canonicalize(scan),
        include_hidden=context.char_at_offset() == HIDDEN_TRIGGER,
        decorate_first_segment=state.decorate_first_segment,
        marker=state.marker,
    )
    LOGGER.debug("resolved %r to %s", fragment, resolved.path)
    return resolved
