"""Filesystem helpers shared by the CLI and the generator."""

from __future__ import annotations

from pathlib import Path

REPOSITORY_MARKER = ".git"


def find_repository_root(start: Path | None = None) -> Path | None:
    """Find the nearest ancestor of ``start`` that holds a ``.git`` entry.

    Args:
        start: Directory to search from (defaults to the working directory)

    Returns:
        The repository root, or None when ``start`` is not inside a repository

    """
    current = (start or Path.cwd()).resolve()
    for path in [current, *current.parents]:
        if (path / REPOSITORY_MARKER).exists():
            return path
    return None


def default_output_root(start: Path | None = None) -> Path:
    """Repository root when inside one, otherwise the starting directory."""
    start_dir = (start or Path.cwd()).resolve()
    return find_repository_root(start_dir) or start_dir
