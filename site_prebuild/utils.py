"""Utility helpers for path handling and directory management."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Iterator

logger = logging.getLogger("site_prebuild")


def relative_to_site(path: Path, site_dir: Path) -> str:
    """Express ``path`` relative to the site root using ``/`` separators."""
    return path.relative_to(site_dir).as_posix()


def ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def clear_directory(path: Path) -> None:
    """Delete ``path`` if present, then recreate it as an empty directory.

    A file or symlink at ``path`` is unlinked; a directory is removed recursively.

    Deletion errors are ignored; a failure to recreate the directory propagates.
    """
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.debug("Ignoring error while removing %s: %s", path, exc)
    path.mkdir(parents=True, exist_ok=True)


def walk_files(root: Path) -> Iterator[Path]:
    """Yield every regular file under ``root`` depth-first in name order."""
    with os.scandir(root) as it:
        entries = sorted(it, key=lambda entry: entry.name)
    for entry in entries:
        full = Path(entry.path)
        if entry.is_dir(follow_symlinks=False):
            yield from walk_files(full)
        elif entry.is_file(follow_symlinks=False):
            yield full
        else:
            logger.debug("Skipping non-regular entry %s", full)
