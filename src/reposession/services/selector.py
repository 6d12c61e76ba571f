"""fzf-backed candidate selection."""

from __future__ import annotations

import logging
import subprocess
from typing import Optional, Sequence

from reposession.util.errors import ExternalCommandError

# fzf exit statuses meaning "nothing chosen" rather than failure
NO_MATCH = 1
INTERRUPTED = 130

logger = logging.getLogger(__name__)


class FzfSelector:
    """Pipe candidates through fzf and return the picked line."""

    def __init__(self, command: Sequence[str] = ("fzf",)) -> None:
        self.command = list(command)

    def select(self, candidates: Sequence[str]) -> Optional[str]:
        payload = "".join(f"{line}\n" for line in candidates)
        logger.debug("Offering %d candidates to %s", len(candidates), self.command[0])
        try:
            proc = subprocess.run(
                self.command,
                input=payload,
                stdout=subprocess.PIPE,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise ExternalCommandError(self.command, f"failed to launch: {exc}") from exc

        if proc.returncode in (NO_MATCH, INTERRUPTED):
            return None
        if proc.returncode != 0:
            raise ExternalCommandError(self.command, f"exited with status {proc.returncode}")

        selected = proc.stdout.strip()
        return selected or None


__all__ = ["FzfSelector"]
