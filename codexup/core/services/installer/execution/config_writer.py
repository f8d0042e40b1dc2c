"""
L4 Execution — config.toml writers.

Read the document (missing file = empty document), run the pure patch,
and only when the text changed: back up the existing file, then write.
A run that changes nothing creates no backup.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from codexup.core.observability.reporter import NULL_LOGGER, InstallLogger
from codexup.core.services.installer.domain.config_patch import (
    patch_notify_config,
    set_root_profile,
)
from codexup.core.services.installer.execution.backup import backup_existing
from codexup.core.services.installer.execution.files import read_text, write_text

logger = logging.getLogger(__name__)


def _apply_patch(
    config_path: Path,
    patch: Callable[[str], str],
    *,
    dry_run: bool,
    log: InstallLogger,
) -> dict[str, Any]:
    before = read_text(config_path)
    after = patch(before)
    if after == before:
        logger.debug("config unchanged: %s", config_path)
        return {"changed": False, "backup": None}

    backup = backup_existing(config_path, dry_run=dry_run, log=log)
    write_text(config_path, after, dry_run=dry_run, log=log)
    return {"changed": True, "backup": str(backup) if backup else None}


def write_notify_config(
    config_path: Path,
    hook_path: Path | str,
    *,
    dry_run: bool = False,
    log: InstallLogger = NULL_LOGGER,
) -> dict[str, Any]:
    """Register ``hook_path`` in the root notify array and enable tui notifications.

    Returns:
        ``{"changed": bool, "backup": str | None}``
    """
    return _apply_patch(
        config_path,
        lambda text: patch_notify_config(text, str(hook_path)),
        dry_run=dry_run,
        log=log,
    )


def write_active_profile(
    config_path: Path,
    profile: str,
    *,
    dry_run: bool = False,
    log: InstallLogger = NULL_LOGGER,
) -> dict[str, Any]:
    """Set the root ``profile = "<name>"`` key.

    Returns:
        ``{"changed": bool, "backup": str | None}``
    """
    return _apply_patch(
        config_path,
        lambda text: set_root_profile(text, profile),
        dry_run=dry_run,
        log=log,
    )
