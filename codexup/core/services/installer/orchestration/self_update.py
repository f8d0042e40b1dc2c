"""
L5 Orchestration — Self update of codex-1up.

The latest release comes from PyPI; the upgrade runs pip in the
interpreter that is running this tool.
"""

from __future__ import annotations

import logging
import sys
from typing import Literal

from pydantic import BaseModel

from codexup import __version__
from codexup.core.models.options import InstallerContext
from codexup.core.services.installer.data.constants import SELF_PACKAGE
from codexup.core.services.installer.detection.registry import get_latest_pypi_version
from codexup.core.services.installer.domain.versions import is_newer
from codexup.core.services.installer.errors import CommandError
from codexup.core.services.installer.execution.subprocess_runner import run_command
from codexup.core.services.installer.prompts import confirm

logger = logging.getLogger(__name__)

_PIP: list[str] = [sys.executable, "-m", "pip"]

SelfUpdateOutcome = Literal["updated", "skipped", "up-to-date", "error"]


class SelfUpdateStatus(BaseModel):
    current: str
    latest: str | None = None
    update_available: bool = False


def check_self_update(current: str = __version__) -> SelfUpdateStatus:
    latest = get_latest_pypi_version(SELF_PACKAGE)
    return SelfUpdateStatus(
        current=current,
        latest=latest,
        update_available=bool(latest and is_newer(latest, current)),
    )


def run_self_update(ctx: InstallerContext, status: SelfUpdateStatus | None = None) -> SelfUpdateOutcome:
    """Check PyPI and upgrade this tool when a newer release exists."""
    log = ctx.logger
    status = status or check_self_update()
    if not status.latest:
        log.warn("Unable to check for codex-1up updates right now.")
        return "error"
    if not status.update_available:
        log.ok(f"codex-1up is up-to-date (v{status.current}).")
        return "up-to-date"

    if ctx.interactive:
        answer = confirm(f"New codex-1up version available (v{status.latest}). Update now?", default=True)
        if answer is None:
            log.info("Update canceled.")
            return "skipped"
        if not answer:
            log.info("Skipping codex-1up update.")
            return "skipped"
    elif not (ctx.options.assume_yes or ctx.options.skip_confirmation or ctx.dry_run):
        log.info(f"codex-1up v{status.latest} is available; re-run with --yes to update.")
        return "skipped"

    log.info(f"Updating codex-1up {status.current} → {status.latest} via pip")
    program, *prefix = _PIP
    try:
        run_command(
            program,
            [*prefix, "install", "--upgrade", f"{SELF_PACKAGE}=={status.latest}"],
            dry_run=ctx.dry_run,
            log=log,
        )
    except CommandError as e:
        log.err(f"codex-1up update failed: {e}")
        return "error"

    if not ctx.dry_run:
        log.ok(f"codex-1up updated to v{status.latest}")
    return "updated"
