from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Sequence

import yaml


def make_repo(path: Path, *, marker_is_file: bool = False) -> Path:
    """Create `path` and mark it as a git repository."""

    path.mkdir(parents=True, exist_ok=True)
    marker = path / ".git"
    if marker_is_file:
        marker.write_text("gitdir: ../.git/modules/sub\n", encoding="utf-8")
    else:
        (marker / "objects").mkdir(parents=True, exist_ok=True)
    return path


def make_tree(root: Path, repos: Iterable[str], plain: Iterable[str] = ()) -> Path:
    """Build a directory tree with repositories and plain directories."""

    root.mkdir(parents=True, exist_ok=True)
    for relative in plain:
        (root / relative).mkdir(parents=True, exist_ok=True)
    for relative in repos:
        make_repo(root / relative)
    return root


def write_config(dest: Path, **data: object) -> Path:
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return dest


class FakeSelector:
    """Records offered candidates and returns a canned answer."""

    def __init__(self, answer: Optional[str] = None, *, pick_first: bool = False) -> None:
        self.answer = answer
        self.pick_first = pick_first
        self.offered: list[list[str]] = []

    def select(self, candidates: Sequence[str]) -> Optional[str]:
        self.offered.append(list(candidates))
        if self.pick_first and candidates:
            return candidates[0]
        return self.answer


class FakeSessionManager:
    """Keeps sessions in memory and logs every call."""

    def __init__(self, existing: Iterable[str] = ()) -> None:
        self.sessions: dict[str, Optional[Path]] = {name: None for name in existing}
        self.calls: list[tuple[str, ...]] = []

    def ensure_session(self, name: str, path: Path) -> None:
        self.calls.append(("ensure", name, str(path)))
        self.sessions.setdefault(name, path)

    def switch_to(self, name: str) -> None:
        self.calls.append(("switch", name))
