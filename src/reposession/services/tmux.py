"""tmux session management for a selected directory."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Mapping, Sequence

from reposession.util.errors import ExternalCommandError
from reposession.util.typing import SessionManager

TMUX_ENV_MARKER = "TMUX"

logger = logging.getLogger(__name__)


def session_name_for(path: str | Path) -> str:
    """Return the tmux session name for `path`: its last component, dots as underscores."""

    name = Path(path).name
    if not name:
        raise ValueError(f"Cannot derive a session name from {path!s}")
    return name.replace(".", "_")


def _run(cmd: Sequence[str]) -> subprocess.CompletedProcess[str]:
    try:
        return subprocess.run(
            list(cmd),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise ExternalCommandError(cmd, f"failed to launch: {exc}") from exc


class TmuxSessionManager:
    """Create and switch to tmux sessions.

    `env` is the process environment captured at startup; it decides whether
    we are already inside a tmux client.
    """

    def __init__(self, env: Mapping[str, str], *, tmux: str = "tmux") -> None:
        self.env = dict(env)
        self.tmux = tmux

    def inside_tmux(self) -> bool:
        return TMUX_ENV_MARKER in self.env

    def server_running(self) -> bool:
        if self.inside_tmux():
            return True
        try:
            proc = subprocess.run(
                ["pgrep", self.tmux],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError:
            logger.debug("pgrep unavailable; assuming no tmux server")
            return False
        return proc.returncode == 0

    def has_session(self, name: str) -> bool:
        return _run([self.tmux, "has-session", "-t", name]).returncode == 0

    def ensure_session(self, name: str, path: Path) -> None:
        if self.server_running() and self.has_session(name):
            logger.debug("Reusing tmux session %s", name)
            return
        logger.info("Creating tmux session %s at %s", name, path)
        cmd = [self.tmux, "new-session", "-d", "-s", name, "-c", str(path)]
        proc = _run(cmd)
        if proc.returncode != 0:
            raise ExternalCommandError(cmd, proc.stderr.strip() or f"exited with status {proc.returncode}")

    def switch_to(self, name: str) -> None:
        if self.inside_tmux():
            cmd = [self.tmux, "switch-client", "-t", name]
        else:
            cmd = [self.tmux, "attach-session", "-t", name]
        try:
            # attach takes over the terminal, so nothing is captured
            proc = subprocess.run(cmd, check=False)
        except OSError as exc:
            raise ExternalCommandError(cmd, f"failed to launch: {exc}") from exc
        if proc.returncode != 0:
            raise ExternalCommandError(cmd, f"exited with status {proc.returncode}")


def launch_session(path: str | Path, manager: SessionManager) -> str:
    """Ensure a session for `path` exists and switch to it; return its name."""

    target = Path(path)
    name = session_name_for(target)
    manager.ensure_session(name, target)
    manager.switch_to(name)
    return name


__all__ = ["TmuxSessionManager", "launch_session", "session_name_for"]
