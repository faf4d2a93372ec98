"""Turn a resolved directory into completion candidates."""

from __future__ import annotations

import logging
import os
from typing import List, Optional

from pathcomplete.config import CompletionConfig
from pathcomplete.errors import DirectoryUnreadable
from pathcomplete.models import (
    CandidateRecord,
    EntryKind,
    EntryMetadata,
    FileType,
    ResolvedDirectory,
)
from pathcomplete.utils.files import BrokenLink, Resolved, iter_entries, probe_entry

LOGGER = logging.getLogger(__name__)


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def entry_metadata(path: str, *, is_symlink: bool) -> Optional[EntryMetadata]:
    """Metadata for one entry, or ``None`` when the entry has to be dropped."""
    status = probe_entry(path, is_symlink=is_symlink)
    if isinstance(status, Resolved):
        return EntryMetadata(path=path, type=status.type, stat=status.stat)
    if isinstance(status, BrokenLink):
        return EntryMetadata(path=path, type=FileType.LINK, lstat=status.lstat)
    LOGGER.debug("dropping unreadable entry %s: %s", path, status.error)
    return None


def build_candidate(name: str, metadata: EntryMetadata, config: CompletionConfig) -> CandidateRecord:
    if metadata.type is not FileType.DIRECTORY:
        return CandidateRecord(
            label=name,
            filter_text=name,
            insert_text=name,
            entry_kind=EntryKind.FILE,
            metadata=metadata,
        )
    return CandidateRecord(
        label=name + "/" if config.label_trailing_slash else name,
        filter_text=name,
        insert_text=name + "/",
        entry_kind=EntryKind.FOLDER,
        metadata=metadata,
        word=None if config.trailing_slash_on_insert else name,
    )


def decorate(candidate: CandidateRecord, marker: str) -> None:
    """Put a stripped marker back in front of every text field."""
    candidate.label = marker + candidate.label
    candidate.filter_text = marker + candidate.filter_text
    candidate.insert_text = marker + candidate.insert_text
    if candidate.word is not None:
        candidate.word = marker + candidate.word


def list_candidates(directory: ResolvedDirectory, config: CompletionConfig) -> List[CandidateRecord]:
    """List ``directory`` in filesystem order.

    Raises:
        DirectoryUnreadable: if the directory is missing or cannot be opened.
    """
    marker = directory.marker if directory.decorate_first_segment else None
    candidates: List[CandidateRecord] = []
    try:
        for entry in iter_entries(directory.path):
            if is_hidden(entry.name) and not directory.include_hidden:
                continue
            path = os.path.join(directory.path, entry.name)
            try:
                is_symlink = entry.is_symlink()
            except OSError:
                is_symlink = False
            metadata = entry_metadata(path, is_symlink=is_symlink)
            if metadata is None:
                continue
            candidate = build_candidate(entry.name, metadata, config)
            if marker:
                decorate(candidate, marker)
            candidates.append(candidate)
    except OSError as exc:
        raise DirectoryUnreadable(directory.path, exc.strerror or str(exc)) from exc

    LOGGER.debug("%d candidates from %s", len(candidates), directory.path)
    return candidates
