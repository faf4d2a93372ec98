"""Utility helpers for working with the filesystem."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from typing import Iterator, Mapping, Optional, Union

from pathcomplete.models import FileType


@dataclass(slots=True, frozen=True)
class Resolved:
    """The entry (or its link target) could be stat'ed."""

    type: FileType
    stat: os.stat_result


@dataclass(slots=True, frozen=True)
class BrokenLink:
    """A symbolic link whose target is missing."""

    lstat: os.stat_result


@dataclass(slots=True, frozen=True)
class Unreadable:
    """Neither the entry nor the link itself could be stat'ed."""

    error: Optional[OSError] = None


EntryStatus = Union[Resolved, BrokenLink, Unreadable]


def file_type_of(mode: int) -> FileType:
    if stat.S_ISDIR(mode):
        return FileType.DIRECTORY
    if stat.S_ISREG(mode):
        return FileType.FILE
    if stat.S_ISLNK(mode):
        return FileType.LINK
    return FileType.OTHER


def iter_entries(path: str) -> Iterator[os.DirEntry]:
    """Yield directory entries in listing order. Raises ``OSError`` on failure."""
    with os.scandir(path) as entries:
        yield from entries


def probe_entry(path: str, *, is_symlink: bool) -> EntryStatus:
    """Classify an entry by following links, falling back to the link itself."""
    try:
        result = os.stat(path)
    except OSError as exc:
        if not is_symlink:
            return Unreadable(exc)
        try:
            return BrokenLink(os.lstat(path))
        except OSError as link_exc:
            return Unreadable(link_exc)
    return Resolved(file_type_of(result.st_mode), result)


def canonicalize(path: str) -> str:
    """Absolute path with symlinks and ``..`` resolved; missing parts are kept."""
    return os.path.realpath(path)


def home_directory() -> str:
    return os.path.expanduser("~")


def lookup_env(name: str, environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    return (os.environ if environ is None else environ).get(name)


def read_head(path: str, size: int = 1024) -> bytes:
    """Read at most ``size`` bytes from the start of a file."""
    with open(path, "rb") as handle:
        return handle.read(size)
