"""Shared utilities for querykey-lint."""

from __future__ import annotations

import os
from pathlib import Path


def snippet(source: str, lineno: int, max_len: int = 160) -> str:
    """Return the source line at lineno (1-based), stripped and truncated."""
    lines = source.splitlines()
    if 0 < lineno <= len(lines):
        return lines[lineno - 1].strip()[:max_len]
    return ""

# Directories to skip during file discovery
SKIP_DIRS = {
    ".git", "node_modules", "dist", "build", "out", "coverage",
    ".next", ".nuxt", ".turbo", ".cache", ".parcel-cache", ".svelte-kit",
    ".vercel", ".yarn", "storybook-static", "__pycache__", ".venv", "venv",
}

# Maximum file size to read (skip bundles and generated blobs)
MAX_FILE_SIZE = 2 * 1024 * 1024  # 2 MB


# Declaration files (.d.ts, .d.mts, .d.cts) carry no runtime expressions
_DECLARATION_SUFFIXES = (".d.ts", ".d.mts", ".d.cts")


def is_declaration_file(name: str) -> bool:
    return name.lower().endswith(_DECLARATION_SUFFIXES)


def discover_files(
    workspace: Path,
    extensions: set[str],
    extra_skip_dirs: set[str] | None = None,
) -> list[Path]:
    """Walk workspace for source files, skipping ignored dirs and large files.

    Ignored directories are pruned during the walk, so nothing under
    node_modules and the like is ever listed.
    """
    skip = SKIP_DIRS | (extra_skip_dirs or set())
    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(workspace):
        dirnames[:] = [d for d in dirnames if d not in skip]
        for name in filenames:
            if os.path.splitext(name)[1].lower() not in extensions:
                continue
            if is_declaration_file(name):
                continue
            item = Path(dirpath) / name
            try:
                if item.stat().st_size > MAX_FILE_SIZE:
                    continue
            except OSError:
                continue
            files.append(item)
    return sorted(files)
