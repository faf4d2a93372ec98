"""Tests for the completion source facade."""

from __future__ import annotations

import asyncio
import re
from pathlib import Path
from unittest.mock import patch

from pathcomplete.config import CompletionConfig
from pathcomplete.models import CompletionRequest, EntryKind, FileType
from pathcomplete.source import PathSource


def _source(base: Path, **kwargs) -> PathSource:
    directory = str(base)
    return PathSource(CompletionConfig(base_directory_provider=lambda _request: directory, **kwargs))


class TestHostInterface:
    """Values the host framework reads once."""

    def test_trigger_characters(self) -> None:
        assert PathSource.get_trigger_characters() == ["/", "."]

    def test_keyword_pattern_stops_at_separators(self) -> None:
        pattern = re.compile(PathSource.get_keyword_pattern())
        assert pattern.fullmatch("nvim")
        assert pattern.fullmatch(".config")
        assert not pattern.fullmatch("docs/nvim")
        assert not pattern.fullmatch("two words")
        assert not pattern.fullmatch("'quoted'")

    def test_default_config(self) -> None:
        assert PathSource().config == CompletionConfig()


class TestComplete:
    """Test PathSource.complete."""

    def test_not_a_path_short_circuits(self, tmp_path: Path) -> None:
        """The builder never runs for rejected fragments."""
        with patch("pathcomplete.source.list_candidates") as mock_list:
            result = _source(tmp_path).complete(CompletionRequest.from_line("https://x/"))
        assert result == []
        mock_list.assert_not_called()

    def test_unreadable_directory_yields_nothing(self, tmp_path: Path) -> None:
        result = _source(tmp_path).complete(CompletionRequest.from_line("./missing/"))
        assert result == []

    def test_candidates(self, tmp_path: Path) -> None:
        (tmp_path / "src").mkdir()
        (tmp_path / "readme").write_text("hello")

        result = _source(tmp_path).complete(CompletionRequest.from_line("./"))

        by_label = {candidate.label: candidate for candidate in result}
        assert set(by_label) == {"src/", "readme"}
        assert by_label["src/"].entry_kind is EntryKind.FOLDER

    def test_hidden_trigger(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("A=1")
        (tmp_path / "readme").write_text("hello")

        result = _source(tmp_path).complete(CompletionRequest.from_line("./."))

        assert {candidate.label for candidate in result} == {".env", "readme"}


class TestScan:
    """Test PathSource.scan."""

    def test_base_directory_queried_once(self, tmp_path: Path) -> None:
        (tmp_path / "readme").write_text("hello")
        calls = []

        def provider(request):
            calls.append(request)
            return str(tmp_path)

        source = PathSource(CompletionConfig(base_directory_provider=provider))
        directory, candidates = source.scan(CompletionRequest.from_line("./"))

        assert directory is not None
        assert [candidate.label for candidate in candidates] == ["readme"]
        assert len(calls) == 1

    def test_not_a_path(self, tmp_path: Path) -> None:
        assert _source(tmp_path).scan(CompletionRequest.from_line("10 / 2")) == (None, [])

    def test_unreadable_directory_keeps_directory(self, tmp_path: Path) -> None:
        directory, candidates = _source(tmp_path).scan(CompletionRequest.from_line("./missing/"))

        assert directory is not None
        assert directory.path.endswith("missing")
        assert candidates == []


class TestCompleteAsync:
    """Test PathSource.complete_async."""

    def test_returns_candidates(self, tmp_path: Path) -> None:
        (tmp_path / "readme").write_text("hello")
        request = CompletionRequest.from_line("./")

        result = asyncio.run(_source(tmp_path).complete_async(request))

        assert [candidate.label for candidate in result] == ["readme"]

    def test_stale_request_is_dropped(self, tmp_path: Path) -> None:
        (tmp_path / "readme").write_text("hello")
        request = CompletionRequest.from_line("./")

        result = asyncio.run(_source(tmp_path).complete_async(request, is_current=lambda: False))

        assert result == []


class TestResolveItem:
    """Previews are attached lazily to regular files only."""

    def test_file_gets_documentation(self, tmp_path: Path) -> None:
        (tmp_path / "main.py").write_text("print('hi')\n")
        source = _source(tmp_path)
        [candidate] = source.complete(CompletionRequest.from_line("./"))

        resolved = source.resolve_item(candidate)

        assert resolved.documentation is not None
        assert resolved.documentation.kind == "markdown"
        assert "print('hi')" in resolved.documentation.value

    def test_directory_has_no_documentation(self, tmp_path: Path) -> None:
        (tmp_path / "docs").mkdir()
        source = _source(tmp_path)
        [candidate] = source.complete(CompletionRequest.from_line("./"))

        assert source.resolve_item(candidate).documentation is None

    def test_broken_link_has_no_documentation(self, tmp_path: Path) -> None:
        (tmp_path / "dangling").symlink_to(tmp_path / "missing")
        source = _source(tmp_path)
        [candidate] = source.complete(CompletionRequest.from_line("./"))

        assert candidate.metadata.type is FileType.LINK
        assert source.resolve_item(candidate).documentation is None

    def test_vanished_file_keeps_candidate(self, tmp_path: Path) -> None:
        path = tmp_path / "temp.txt"
        path.write_text("soon gone")
        source = _source(tmp_path)
        [candidate] = source.complete(CompletionRequest.from_line("./"))
        path.unlink()

        resolved = source.resolve_item(candidate)

        assert resolved is candidate
        assert resolved.documentation is None

    def test_max_preview_lines(self, tmp_path: Path) -> None:
        (tmp_path / "log.unknownext").write_text("a\nb\nc\n")
        source = _source(tmp_path, max_preview_lines=2)
        [candidate] = source.complete(CompletionRequest.from_line("./"))

        resolved = source.resolve_item(candidate)

        assert resolved.documentation is not None
        assert resolved.documentation.value == "a\nb"
