"""Command-line entry point: pick a repository, land in its tmux session."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import typer

from reposession.config import ConfigError, RepoSessionConfig, load_config
from reposession.discovery.scanner import scan_roots
from reposession.services.selector import FzfSelector
from reposession.services.tmux import TmuxSessionManager, launch_session
from reposession.util.errors import ExternalCommandError
from reposession.util.logging import configure_logging
from reposession.util.paths import normalize_roots
from reposession.util.typing import Selector, SessionManager

CONFIG_ENVVAR = "REPOSESSION_CONFIG"

app = typer.Typer(add_completion=False, help="Open a tmux session in a git repository picked with fzf")


def build_selector(cfg: RepoSessionConfig) -> Selector:
    return FzfSelector(cfg.selector_command)


def build_session_manager() -> SessionManager:
    return TmuxSessionManager(os.environ)


def _fail(message: str) -> typer.Exit:
    typer.echo(message, err=True)
    return typer.Exit(code=1)


@app.command()
def pick(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", envvar=CONFIG_ENVVAR, help="Path to YAML configuration file"
    ),
    nested: bool = typer.Option(False, "--nested", help="Also list repositories inside other repositories"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log scan details to stderr"),
) -> None:
    """Scan the configured roots, pick a repository and switch to its session."""

    level = logging.DEBUG if verbose else logging.WARNING
    logger = configure_logging(level=level)

    if config is None:
        raise _fail("Configuration file is required.")

    try:
        cfg = load_config(config.expanduser(), overrides={"nested": True} if nested else None)
    except ConfigError as exc:
        raise _fail(str(exc)) from exc

    if cfg.log_file:
        configure_logging(level=level, log_path=cfg.log_file.expanduser())

    roots = normalize_roots(cfg.search_paths, home=Path.home())
    logger.debug("Scanning roots %s (nested=%s)", [str(r) for r in roots], cfg.nested)
    repos = scan_roots(roots, cfg.nested, max_workers=cfg.max_workers)
    if not repos:
        logger.warning("No git repositories found under the configured search paths")
        raise typer.Exit()

    candidates = sorted(str(repo) for repo in repos)
    try:
        selected = build_selector(cfg).select(candidates)
        if not selected:
            logger.debug("Nothing selected")
            raise typer.Exit()
        session = launch_session(Path(selected), build_session_manager())
    except (ExternalCommandError, ValueError) as exc:
        raise _fail(f"Error: {exc}") from exc

    logger.info("Switched to session %s", session)


def main() -> None:
    app()


__all__ = ["app", "build_selector", "build_session_manager", "main"]
