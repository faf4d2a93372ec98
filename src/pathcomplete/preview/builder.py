"""Short previews of regular files for the selected candidate."""

from __future__ import annotations

import logging
from typing import Optional

from pathcomplete.config import DEFAULT_MAX_PREVIEW_LINES
from pathcomplete.errors import PreviewUnavailable
from pathcomplete.models import Documentation
from pathcomplete.preview.filetypes import detect
from pathcomplete.utils.files import read_head
from pathcomplete.utils.text import split_lines

LOGGER = logging.getLogger(__name__)

PREVIEW_BYTES = 1024
BINARY_MARKER = "binary file"
PLAINTEXT = "plaintext"
MARKDOWN = "markdown"


def read_preview(path: str, max_lines: int = DEFAULT_MAX_PREVIEW_LINES) -> Documentation:
    """Build a preview from the first kilobyte of ``path``.

    Raises:
        PreviewUnavailable: if the file cannot be read.
    """
    try:
        head = read_head(path, PREVIEW_BYTES)
    except OSError as exc:
        raise PreviewUnavailable(path, exc.strerror or str(exc)) from exc

    if b"\0" in head:
        return Documentation(kind=PLAINTEXT, value=BINARY_MARKER)

    lines = split_lines(head.decode("utf-8", errors="replace"), limit=max_lines)
    filetype = detect(path)
    if filetype is None:
        return Documentation(kind=PLAINTEXT, value="\n".join(lines))
    return Documentation(kind=MARKDOWN, value="\n".join([f"```{filetype}", *lines, "```"]))


def preview(path: str, max_lines: int = DEFAULT_MAX_PREVIEW_LINES) -> Optional[Documentation]:
    """Like :func:`read_preview` but returns ``None`` instead of raising."""
    try:
        return read_preview(path, max_lines)
    except PreviewUnavailable as exc:
        LOGGER.debug("%s", exc)
        return None
