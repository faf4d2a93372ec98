"""Infer a syntax name for fenced previews from a file path."""

from __future__ import annotations

import os
from typing import Optional

FILENAMES = {
    "Makefile": "make",
    "makefile": "make",
    "GNUmakefile": "make",
    "Dockerfile": "dockerfile",
    "CMakeLists.txt": "cmake",
    "Gemfile": "ruby",
    "Rakefile": "ruby",
    "Vagrantfile": "ruby",
    "Jenkinsfile": "groovy",
    ".bashrc": "bash",
    ".zshrc": "zsh",
    ".vimrc": "vim",
    ".gitconfig": "gitconfig",
    ".gitignore": "gitignore",
    ".editorconfig": "editorconfig",
}

EXTENSIONS = {
    ".c": "c",
    ".h": "c",
    ".cc": "cpp",
    ".cpp": "cpp",
    ".cxx": "cpp",
    ".hpp": "cpp",
    ".cs": "cs",
    ".css": "css",
    ".scss": "scss",
    ".go": "go",
    ".rs": "rust",
    ".java": "java",
    ".kt": "kotlin",
    ".swift": "swift",
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascriptreact",
    ".ts": "typescript",
    ".tsx": "typescriptreact",
    ".py": "python",
    ".pyi": "python",
    ".rb": "ruby",
    ".php": "php",
    ".pl": "perl",
    ".lua": "lua",
    ".vim": "vim",
    ".sh": "sh",
    ".bash": "bash",
    ".zsh": "zsh",
    ".fish": "fish",
    ".ps1": "ps1",
    ".sql": "sql",
    ".html": "html",
    ".htm": "html",
    ".xml": "xml",
    ".svg": "svg",
    ".json": "json",
    ".jsonc": "jsonc",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".toml": "toml",
    ".ini": "dosini",
    ".cfg": "cfg",
    ".md": "markdown",
    ".markdown": "markdown",
    ".rst": "rst",
    ".tex": "tex",
    ".r": "r",
    ".jl": "julia",
    ".hs": "haskell",
    ".ex": "elixir",
    ".exs": "elixir",
    ".erl": "erlang",
    ".clj": "clojure",
    ".scala": "scala",
    ".dart": "dart",
    ".zig": "zig",
    ".nix": "nix",
    ".tf": "terraform",
    ".proto": "proto",
    ".graphql": "graphql",
    ".diff": "diff",
    ".patch": "diff",
}


def detect(path: str) -> Optional[str]:
    """Return a filetype name for ``path``, or ``None`` if it cannot be inferred."""
    name = os.path.basename(path)
    if name in FILENAMES:
        return FILENAMES[name]
    _, ext = os.path.splitext(name)
    return EXTENSIONS.get(ext.lower())
