"""
L4 Execution — Filesystem writes that honour dry-run.

Whole-file writes, directory replacement and removal.  Callers that
overwrite or remove existing content back it up first with
``backup_existing``.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from codexup.core.observability.reporter import NULL_LOGGER, InstallLogger

logger = logging.getLogger(__name__)


def read_text(path: Path) -> str:
    """Whole-file read; a missing file reads as the empty document.

    Line endings are returned untouched.
    """
    try:
        with open(path, encoding="utf-8", newline="") as fh:
            return fh.read()
    except FileNotFoundError:
        return ""


def write_text(
    path: Path,
    content: str,
    *,
    dry_run: bool = False,
    log: InstallLogger = NULL_LOGGER,
    mode: int | None = None,
) -> None:
    """Write ``content`` to ``path``, creating parent directories."""
    if dry_run:
        log.log(f"[dry-run] write {path}")
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as fh:
        fh.write(content)
    if mode is not None:
        os.chmod(path, mode)
    logger.debug("wrote %s (%d bytes)", path, len(content))


def replace_tree(
    src: Path,
    dest: Path,
    *,
    dry_run: bool = False,
    log: InstallLogger = NULL_LOGGER,
) -> None:
    """Replace ``dest`` with a copy of the directory ``src``."""
    if dry_run:
        log.log(f"[dry-run] copy {src} -> {dest}")
        return
    if dest.is_symlink() or dest.is_file():
        dest.unlink()
    elif dest.exists():
        shutil.rmtree(dest)
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copytree(src, dest, symlinks=True)
    logger.debug("copied %s → %s", src, dest)


def remove_path(
    path: Path,
    *,
    dry_run: bool = False,
    log: InstallLogger = NULL_LOGGER,
) -> None:
    """Remove a file, symlink or directory tree.  Missing is not an error."""
    if dry_run:
        log.log(f"[dry-run] remove {path}")
        return
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.exists():
        shutil.rmtree(path)
    logger.debug("removed %s", path)


def ensure_symlink(
    target: Path,
    link: Path,
    *,
    dry_run: bool = False,
    log: InstallLogger = NULL_LOGGER,
) -> bool:
    """Point ``link`` at ``target`` unless something already exists there.

    Returns:
        True when a link was created (or would be, under dry-run).
    """
    if link.exists() or link.is_symlink():
        return False
    if dry_run:
        log.log(f"[dry-run] ln -s {target} {link}")
        return True
    link.parent.mkdir(parents=True, exist_ok=True)
    link.symlink_to(target)
    logger.debug("linked %s → %s", link, target)
    return True
