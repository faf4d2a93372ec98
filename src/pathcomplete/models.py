"""Core pathcomplete data models."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from pathcomplete.utils.text import keyword_start


class EditorMode(Enum):
    """Where the completion was requested from."""

    BUFFER = "buffer"
    COMMAND = "command"


class FileType(Enum):
    """Filesystem entry type as reported by stat/lstat."""

    FILE = "file"
    DIRECTORY = "directory"
    LINK = "link"
    OTHER = "other"


class EntryKind(Enum):
    """Completion item kind, valued as LSP ``CompletionItemKind``."""

    FILE = 17
    FOLDER = 19


@dataclass(slots=True, frozen=True)
class CursorContext:
    """Line text up to the cursor plus the keyword offset within it."""

    line: str
    offset: int

    @classmethod
    def at_end(cls, line: str) -> "CursorContext":
        return cls(line=line, offset=keyword_start(line))

    def char_at_offset(self) -> str:
        if 0 <= self.offset < len(self.line):
            return self.line[self.offset]
        return ""


@dataclass(slots=True, frozen=True)
class CompletionRequest:
    """Everything a host hands over for one completion request."""

    context: CursorContext
    buffer_path: Optional[str] = None
    filetype: str = ""
    commentstring: str = ""
    mode: EditorMode = EditorMode.BUFFER

    @classmethod
    def from_line(cls, line: str, **kwargs: Any) -> "CompletionRequest":
        return cls(context=CursorContext.at_end(line), **kwargs)


@dataclass(slots=True, frozen=True)
class MarkerState:
    marker: Optional[str] = None
    has_marker: bool = False
    decorate_first_segment: bool = False


@dataclass(slots=True, frozen=True)
class ResolvedDirectory:
    """Absolute directory to scan and how its candidates must be decorated."""

    path: str
    include_hidden: bool = False
    decorate_first_segment: bool = False
    marker: Optional[str] = None


@dataclass(slots=True)
class EntryMetadata:
    """Filesystem facts about a candidate, consumed by the preview step."""

    path: str
    type: FileType
    stat: Optional[os.stat_result] = None
    lstat: Optional[os.stat_result] = None

    def to_dict(self) -> Dict[str, Any]:
        source = self.stat if self.stat is not None else self.lstat
        data: Dict[str, Any] = {"path": self.path, "type": self.type.value}
        if source is not None:
            data["size"] = source.st_size
            data["mtime"] = source.st_mtime
            data["mode"] = source.st_mode
        return data


@dataclass(slots=True, frozen=True)
class Documentation:
    kind: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind, "value": self.value}


@dataclass(slots=True)
class CandidateRecord:
    """One completion candidate handed to the host."""

    label: str
    filter_text: str
    insert_text: str
    entry_kind: EntryKind
    metadata: EntryMetadata
    word: Optional[str] = None
    documentation: Optional[Documentation] = None

    def to_dict(self) -> Dict[str, Any]:
        item: Dict[str, Any] = {
            "label": self.label,
            "filterText": self.filter_text,
            "insertText": self.insert_text,
            "kind": self.entry_kind.value,
            "data": self.metadata.to_dict(),
        }
        if self.word is not None:
            item["word"] = self.word
        if self.documentation is not None:
            item["documentation"] = self.documentation.to_dict()
        return item
