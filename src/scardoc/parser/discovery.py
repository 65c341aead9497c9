"""Find script source units below a directory.

Walks the tree with :func:`os.walk`, pruning VCS and cache directories,
and filters files by suffix. Exclusion uses gitignore-compatible patterns via
:mod:`pathspec`, both for explicit ``exclude`` patterns and for the
``.gitignore`` at the root of the walk.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

import pathspec

from scardoc.exceptions import SourceReadError

# Directories that are never descended into.
_ALWAYS_SKIP = frozenset({".git", ".hg", ".svn", "__pycache__", ".tox", ".mypy_cache"})


def _load_gitignore(root: Path) -> pathspec.PathSpec | None:
    """Load ``.gitignore`` from *root* if it exists, returning a PathSpec matcher."""
    gitignore = root / ".gitignore"
    if not gitignore.is_file():
        return None
    lines = gitignore.read_text(encoding="utf-8", errors="replace").splitlines()
    return pathspec.PathSpec.from_lines("gitignore", lines)


def discover_source_files(
    root: str | Path,
    extensions: Iterable[str] = (".scar",),
    exclude: Iterable[str] = (),
    respect_gitignore: bool = True,
) -> list[Path]:
    """Return source files below *root*, sorted by path.

    Args:
        root: Directory to walk.
        extensions: File suffixes to accept, compared case-insensitively.
        exclude: Gitignore-style patterns, relative to *root*, to skip.
        respect_gitignore: Also skip paths matched by ``root/.gitignore``.

    Returns:
        Matching file paths.

    Raises:
        SourceReadError: If *root* is not a directory.
    """
    base = Path(root)
    if not base.is_dir():
        raise SourceReadError(f"Source directory not found: {root}")

    suffixes = {ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in extensions}
    exclude = list(exclude)
    exclude_spec = pathspec.PathSpec.from_lines("gitignore", exclude) if exclude else None
    gitignore_spec = _load_gitignore(base) if respect_gitignore else None
    ignore_specs = [spec for spec in (exclude_spec, gitignore_spec) if spec is not None]

    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(str(base)):
        rel_dir = os.path.relpath(dirpath, str(base))

        dirnames[:] = sorted(
            d for d in dirnames
            if d not in _ALWAYS_SKIP
            and not any(
                spec.match_file((os.path.join(rel_dir, d) if rel_dir != "." else d) + "/")
                for spec in ignore_specs
            )
        )

        for fname in filenames:
            if Path(fname).suffix.lower() not in suffixes:
                continue
            rel_path = os.path.join(rel_dir, fname) if rel_dir != "." else fname
            if any(spec.match_file(rel_path) for spec in ignore_specs):
                continue
            found.append(Path(dirpath) / fname)

    return sorted(found)
