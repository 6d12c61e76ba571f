"""Concurrent discovery of git repositories below configured roots."""

from __future__ import annotations

import logging
import os
import stat
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

REPO_MARKER = ".git"

DirIdentity = tuple[int, int]

logger = logging.getLogger(__name__)


@dataclass
class DirectoryListing:
    """Findings from reading a single directory."""

    directory: Path
    repos: list[tuple[Path, DirIdentity]] = field(default_factory=list)
    descend: list[tuple[Path, DirIdentity]] = field(default_factory=list)


def is_repository(directory: str | os.PathLike[str]) -> bool:
    """Return True if `directory` directly contains a ``.git`` entry."""
    return os.path.exists(os.path.join(directory, REPO_MARKER))


def list_directory(directory: Path, nested: bool) -> DirectoryListing:
    """Classify the immediate subdirectories of `directory`.

    Repositories are reported, and only queued for descent when `nested` is
    set. Plain directories are always queued. An unreadable directory yields
    an empty listing.
    """

    listing = DirectoryListing(directory)
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                if entry.name == REPO_MARKER:
                    continue
                try:
                    if not entry.is_dir():
                        continue
                    info = entry.stat()
                except OSError as exc:
                    logger.debug("Skipping entry %s: %s", entry.path, exc)
                    continue

                path = Path(entry.path)
                identity = (info.st_dev, info.st_ino)
                if is_repository(path):
                    listing.repos.append((path, identity))
                    if not nested:
                        continue
                listing.descend.append((path, identity))
    except OSError as exc:
        logger.warning("Skipping unreadable directory %s: %s", directory, exc)
    return listing


def _existing_roots(roots: Iterable[str | os.PathLike[str]]) -> list[tuple[Path, DirIdentity]]:
    result: list[tuple[Path, DirIdentity]] = []
    for item in roots:
        root = Path(item)
        try:
            info = root.stat()
        except (FileNotFoundError, NotADirectoryError):
            logger.warning("Path does not exist: %s", root)
            continue
        except OSError as exc:
            logger.warning("Skipping unreadable root %s: %s", root, exc)
            continue
        if not stat.S_ISDIR(info.st_mode):
            logger.warning("Not a directory, skipping: %s", root)
            continue
        result.append((root, (info.st_dev, info.st_ino)))
    return result


def scan_roots(
    roots: Iterable[str | os.PathLike[str]],
    nested: bool = False,
    *,
    max_workers: Optional[int] = None,
) -> list[Path]:
    """Return every repository found below `roots`, in no particular order.

    Each directory read is a separate task on one shared thread pool. Workers
    only return their findings; this thread merges them and queues follow-up
    reads, so no worker waits on another and nothing is shared between them.
    A directory (by device and inode) is read at most once per call.
    """

    seeds = _existing_roots(roots)
    if not seeds:
        return []

    found: list[Path] = []
    reported: set[DirIdentity] = set()
    visited: set[DirIdentity] = set()

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="reposcan") as executor:
        pending: set[Future[DirectoryListing]] = set()
        for root, identity in seeds:
            if identity in visited:
                continue
            visited.add(identity)
            pending.add(executor.submit(list_directory, root, nested))

        while pending:
            done, pending = wait(pending, return_when=FIRST_COMPLETED)
            for future in done:
                listing = future.result()
                for path, identity in listing.repos:
                    if identity not in reported:
                        reported.add(identity)
                        found.append(path)
                for path, identity in listing.descend:
                    if identity in visited:
                        logger.debug("Already visited %s", path)
                        continue
                    visited.add(identity)
                    pending.add(executor.submit(list_directory, path, nested))

    logger.debug("Found %d repositories under %d roots", len(found), len(seeds))
    return found


def scan(
    root: str | os.PathLike[str],
    nested: bool = False,
    *,
    max_workers: Optional[int] = None,
) -> list[Path]:
    """Scan a single root. A missing or non-directory root yields ``[]``."""
    return scan_roots([root], nested, max_workers=max_workers)


__all__ = [
    "DirectoryListing",
    "REPO_MARKER",
    "is_repository",
    "list_directory",
    "scan",
    "scan_roots",
]
