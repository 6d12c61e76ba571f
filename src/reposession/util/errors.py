"""Error types shared by the external-program wrappers."""

from __future__ import annotations

from typing import Sequence


class ExternalCommandError(RuntimeError):
    """Raised when an external program cannot be launched or fails."""

    def __init__(self, command: Sequence[str], message: str) -> None:
        self.command = list(command)
        super().__init__(f"{' '.join(self.command)}: {message}")


__all__ = ["ExternalCommandError"]
