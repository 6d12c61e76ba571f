"""Path utilities normalising configured search roots."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

HOME_SHORTHAND = "~"


def expand_home(value: str, home: Path | str) -> str:
    """Replace a leading ``~`` (alone or followed by a separator) with `home`."""

    if value == HOME_SHORTHAND:
        return str(home)
    if value.startswith(HOME_SHORTHAND + "/"):
        return os.path.join(str(home), value[2:])
    return value


def clean_path(value: str | os.PathLike[str]) -> Path:
    """Return an absolute, lexically cleaned path without touching the filesystem."""
    return Path(os.path.abspath(os.fspath(value)))


def is_descendant(path: Path, ancestor: Path) -> bool:
    """Return True if `ancestor` is a strict component prefix of `path`."""

    parts, prefix = path.parts, ancestor.parts
    return len(prefix) < len(parts) and parts[: len(prefix)] == prefix


def normalize_roots(
    raw: Iterable[str | os.PathLike[str] | None],
    *,
    home: Path | str | None = None,
) -> list[Path]:
    """Expand, clean and deduplicate `raw`, keeping only the outermost roots.

    Absent and blank entries are skipped. The result is sorted by path
    components and never holds two paths where one contains the other.
    """

    home_dir = Path.home() if home is None else home

    cleaned: set[Path] = set()
    for item in raw:
        if item is None:
            continue
        value = os.fspath(item)
        if not value.strip():
            continue
        cleaned.add(clean_path(expand_home(value, home_dir)))

    ordered = sorted(cleaned, key=lambda p: p.parts)
    return [
        path
        for path in ordered
        if not any(other != path and is_descendant(path, other) for other in ordered)
    ]


__all__ = ["clean_path", "expand_home", "is_descendant", "normalize_roots"]
