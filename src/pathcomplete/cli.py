"""Command line interface for pathcomplete."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pathcomplete.config import CompletionConfig
from pathcomplete.errors import InvalidOption, PreviewUnavailable
from pathcomplete.models import CompletionRequest, CursorContext, EditorMode
from pathcomplete.preview.builder import read_preview
from pathcomplete.source import PathSource
from pathcomplete.utils.debug import enable_debug_log
from pathcomplete.web.app import app as web_app


console = Console()
app = typer.Typer(help="pathcomplete - filesystem path completion for editors")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")
    enable_debug_log()


def _build_config(
    base_dir: Optional[Path],
    trailing_slash: bool,
    label_slash: bool,
    markers: Optional[List[str]],
) -> CompletionConfig:
    options: dict = {
        "trailing_slash_on_insert": trailing_slash,
        "label_trailing_slash": label_slash,
    }
    if base_dir is not None:
        directory = str(base_dir)
        options["base_directory_provider"] = lambda _request: directory
    if markers is not None:
        options["decoration_rules"] = markers
    try:
        return CompletionConfig.from_options(options)
    except InvalidOption as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def complete(
    line: str = typer.Argument(..., help="Line text up to the cursor."),
    offset: Optional[int] = typer.Option(None, help="Keyword start offset (defaults to the last segment)."),
    base_dir: Optional[Path] = typer.Option(
        None, "--base-dir", help="Directory relative paths resolve against.", resolve_path=True
    ),
    buffer: Optional[Path] = typer.Option(None, "--buffer", help="Path of the file being edited."),
    command_mode: bool = typer.Option(False, "--command-mode", help="Resolve against the working directory."),
    filetype: str = typer.Option("", help="Filetype of the buffer."),
    commentstring: str = typer.Option("", help="Comment template of the buffer, e.g. '// %s'."),
    trailing_slash: bool = typer.Option(False, "--trailing-slash", help="Keep the trailing slash when inserting folders."),
    label_slash: bool = typer.Option(True, "--label-slash/--no-label-slash", help="Show folders with a trailing slash."),
    marker: Optional[List[str]] = typer.Option(None, "--marker", help="Marker characters reinserted on first segments."),
    with_preview: bool = typer.Option(False, "--preview", help="Attach file previews."),
    as_json: bool = typer.Option(False, "--json", help="Print candidates as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """List completion candidates for the path before the cursor."""
    _setup_logging(verbose)
    config = _build_config(base_dir, trailing_slash, label_slash, marker)
    context = CursorContext.at_end(line) if offset is None else CursorContext(line=line, offset=offset)
    request = CompletionRequest(
        context=context,
        buffer_path=str(buffer) if buffer is not None else None,
        filetype=filetype,
        commentstring=commentstring,
        mode=EditorMode.COMMAND if command_mode else EditorMode.BUFFER,
    )

    source = PathSource(config)
    directory, candidates = source.scan(request)
    if with_preview:
        candidates = [source.resolve_item(candidate) for candidate in candidates]

    if as_json:
        payload = {
            "directory": directory.path if directory is not None else None,
            "items": [candidate.to_dict() for candidate in candidates],
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    if directory is None:
        console.print("[yellow]Not a path.[/yellow]")
        return
    console.print(f"Scanning [bold]{escape(directory.path)}[/bold]")
    if not candidates:
        console.print("[yellow]No candidates found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Label")
    table.add_column("Insert")
    table.add_column("Kind")
    table.add_column("Type")
    for candidate in candidates:
        table.add_row(
            escape(candidate.label),
            escape(candidate.insert_text),
            candidate.entry_kind.name.title(),
            candidate.metadata.type.value,
        )
    console.print(table)


@app.command()
def preview(
    path: Path = typer.Argument(..., help="File to preview.", resolve_path=True),
    max_lines: int = typer.Option(CompletionConfig().max_preview_lines, help="Maximum lines to show."),
) -> None:
    """Show the preview a candidate would get."""
    try:
        documentation = read_preview(str(path), max_lines)
    except PreviewUnavailable as exc:
        console.print(f"[yellow]{escape(str(exc))}[/yellow]")
        raise typer.Exit(code=1)
    typer.echo(documentation.value)


@app.command()
def triggers() -> None:
    """Print trigger characters and the keyword pattern."""
    typer.echo("Trigger characters: " + " ".join(PathSource.get_trigger_characters()))
    typer.echo("Keyword pattern: " + PathSource.get_keyword_pattern())


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
) -> None:
    """Serve completions over HTTP."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    console.print(f"Starting completion server on http://{host}:{port}")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
