"""FastAPI application serving completions to out-of-process hosts."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from pathcomplete.config import CompletionConfig
from pathcomplete.errors import InvalidOption
from pathcomplete.models import CompletionRequest, CursorContext, EditorMode
from pathcomplete.preview.builder import preview
from pathcomplete.source import PathSource

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="pathcomplete", version="0.1.0")


class CompletePayload(BaseModel):
    line: str
    offset: Optional[int] = None
    buffer_path: Optional[str] = None
    base_dir: Optional[str] = None
    filetype: str = ""
    commentstring: str = ""
    mode: EditorMode = EditorMode.BUFFER
    options: Dict[str, Any] = Field(default_factory=dict)


class PreviewPayload(BaseModel):
    path: str
    max_lines: int = Field(default=CompletionConfig().max_preview_lines, ge=0)


def _to_request(payload: CompletePayload) -> CompletionRequest:
    if payload.offset is None:
        context = CursorContext.at_end(payload.line)
    else:
        context = CursorContext(line=payload.line, offset=payload.offset)
    return CompletionRequest(
        context=context,
        buffer_path=payload.buffer_path,
        filetype=payload.filetype,
        commentstring=payload.commentstring,
        mode=payload.mode,
    )


def _run_completion(request: CompletionRequest, config: CompletionConfig) -> Dict[str, Any]:
    directory, candidates = PathSource(config).scan(request)
    return {
        "directory": directory.path if directory is not None else None,
        "items": [candidate.to_dict() for candidate in candidates],
    }


@app.get("/triggers")
async def get_triggers() -> Dict[str, Any]:
    return {
        "trigger_characters": PathSource.get_trigger_characters(),
        "keyword_pattern": PathSource.get_keyword_pattern(),
    }


@app.post("/complete")
async def complete(payload: CompletePayload) -> Dict[str, Any]:
    options = dict(payload.options)
    if payload.base_dir is not None:
        base_dir = payload.base_dir
        options["base_directory_provider"] = lambda _request: base_dir
    try:
        config = CompletionConfig.from_options(options)
    except InvalidOption as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    request = _to_request(payload)
    return await asyncio.to_thread(_run_completion, request, config)


@app.post("/preview")
async def preview_file(payload: PreviewPayload) -> Dict[str, Any]:
    """Return the head of any readable file; serve on a local interface only."""
    documentation = await asyncio.to_thread(preview, payload.path, payload.max_lines)
    return {"documentation": documentation.to_dict() if documentation is not None else None}
