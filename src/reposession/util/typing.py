"""Capability protocols for the external programs repo-session drives."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class Selector(Protocol):
    """Interactive picker choosing one line out of many."""

    def select(self, candidates: Sequence[str]) -> Optional[str]:
        """Return the chosen candidate, or None when the user aborted."""
        ...


@runtime_checkable
class SessionManager(Protocol):
    """Terminal multiplexer able to host named sessions."""

    def ensure_session(self, name: str, path: Path) -> None:
        """Create session `name` rooted at `path` unless it already exists."""
        ...

    def switch_to(self, name: str) -> None:
        """Move the current client to session `name`."""
        ...


__all__ = ["Selector", "SessionManager"]
