"""Completion source exposed to editor completion frameworks."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional, Tuple

from pathcomplete.candidates.builder import list_candidates
from pathcomplete.config import CompletionConfig
from pathcomplete.errors import DirectoryUnreadable
from pathcomplete.models import CandidateRecord, CompletionRequest, FileType, ResolvedDirectory
from pathcomplete.preview.builder import preview
from pathcomplete.resolver.classifier import HIDDEN_TRIGGER, SEPARATOR, resolve
from pathcomplete.utils.text import KEYWORD_PATTERN

LOGGER = logging.getLogger(__name__)


class PathSource:
    """High-level API: resolve the fragment, list the directory, preview on demand."""

    def __init__(self, config: Optional[CompletionConfig] = None) -> None:
        self.config = config or CompletionConfig()

    @staticmethod
    def get_trigger_characters() -> List[str]:
        return [SEPARATOR, HIDDEN_TRIGGER]

    @staticmethod
    def get_keyword_pattern() -> str:
        return KEYWORD_PATTERN

    def scan(self, request: CompletionRequest) -> Tuple[Optional[ResolvedDirectory], List[CandidateRecord]]:
        """Resolve once and list the result; the directory is ``None`` when the fragment is not a path."""
        directory = resolve(request, self.config)
        if directory is None:
            return None, []
        try:
            return directory, list_candidates(directory, self.config)
        except DirectoryUnreadable as exc:
            LOGGER.debug("%s", exc)
            return directory, []

    def complete(self, request: CompletionRequest) -> List[CandidateRecord]:
        return self.scan(request)[1]

    async def complete_async(
        self,
        request: CompletionRequest,
        is_current: Optional[Callable[[], bool]] = None,
    ) -> List[CandidateRecord]:
        """Run :meth:`complete` in a worker thread; drop the result if the request went stale."""
        candidates = await asyncio.to_thread(self.complete, request)
        if is_current is not None and not is_current():
            LOGGER.debug("dropping %d candidates for a stale request", len(candidates))
            return []
        return candidates

    def resolve_item(self, candidate: CandidateRecord) -> CandidateRecord:
        """Attach a preview to a regular-file candidate; others are returned unchanged."""
        if candidate.metadata.type is FileType.FILE and candidate.metadata.stat is not None:
            documentation = preview(candidate.metadata.path, self.config.max_preview_lines)
            if documentation is not None:
                candidate.documentation = documentation
        return candidate
