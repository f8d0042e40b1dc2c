"""
L4 Execution — Backup before overwrite.

Every file or directory the installer is about to overwrite or remove
is first copied to ``PATH.backup.<timestamp>``.  The copy completes
before the caller touches the original.
"""

from __future__ import annotations

import logging
import shutil
from datetime import datetime
from pathlib import Path

from codexup.core.observability.reporter import NULL_LOGGER, InstallLogger
from codexup.core.services.installer.domain.backup_naming import backup_path_for

logger = logging.getLogger(__name__)


def backup_existing(
    path: Path,
    *,
    dry_run: bool = False,
    log: InstallLogger = NULL_LOGGER,
    now: datetime | None = None,
) -> Path | None:
    """Copy ``path`` (file or directory tree) to its backup location.

    Symlinks inside a directory are copied as symlinks.

    Returns:
        The backup path, or ``None`` when ``path`` does not exist.  Under
        dry-run the would-be path is returned and nothing is copied.

    Raises:
        OSError: The copy failed; the original has not been modified.
    """
    if not path.exists() and not path.is_symlink():
        return None

    dest = backup_path_for(path, now)
    if dry_run:
        log.log(f"[dry-run] backup {path} -> {dest}")
        return dest

    if path.is_dir() and not path.is_symlink():
        shutil.copytree(path, dest, symlinks=True)
    else:
        shutil.copy2(path, dest, follow_symlinks=False)
    logger.info("Backed up %s → %s", path, dest)
    log.info(f"Backed up {path} to {dest}")
    return dest
