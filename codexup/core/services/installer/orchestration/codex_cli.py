"""
L5 Orchestration — Codex CLI install/update.
"""

from __future__ import annotations

import logging

from codexup.core.models.options import InstallerContext
from codexup.core.models.step import StepResult
from codexup.core.services.installer.data.constants import CODEX_BIN, CODEX_PACKAGE
from codexup.core.services.installer.detection.codex_status import get_codex_status
from codexup.core.services.installer.detection.package_manager import resolve_global_runtime_pm
from codexup.core.services.installer.detection.tool_status import is_command_available
from codexup.core.services.installer.execution.subprocess_runner import run_command
from codexup.core.services.installer.prompts import confirm

logger = logging.getLogger(__name__)

STEP = "codex-cli"


def install_codex_cli(ctx: InstallerContext) -> StepResult:
    """Install the Codex CLI when missing, update it when a newer one is published.

    ``install_codex_cli="yes"`` acts without asking; ``None`` asks in an
    interactive session and acts otherwise; ``"no"`` skips the step.
    """
    log = ctx.logger
    choice = ctx.options.install_codex_cli
    if choice == "no":
        log.info("Skipping Codex CLI install (user choice)")
        return StepResult.skipped(STEP, "install_codex_cli=no")

    status = get_codex_status()
    meta = status.model_dump()
    if status.found:
        label = f"v{status.version}" if status.version else "unknown version"
        log.info(f"Found Codex CLI {label}. Checking for newer version...")
    else:
        log.info("Codex CLI not found.")

    action: str | None = None
    if not status.found:
        if choice == "yes" or not ctx.interactive:
            action = "install"
        else:
            answer = confirm("Codex CLI not found. Install now?", default=True)
            if answer is None:
                log.info("Codex CLI install cancelled.")
            elif answer:
                action = "install"
            else:
                log.info("Skipping Codex CLI install.")
    elif status.update_available:
        if choice == "yes" or not ctx.interactive:
            action = "update"
        else:
            answer = confirm(
                f"Codex CLI {status.version} found; latest is v{status.latest}. Update now?",
                default=True,
            )
            if answer is None:
                log.info("Codex CLI update cancelled; keeping existing version.")
            elif answer:
                action = "update"
            else:
                log.info("Keeping existing Codex CLI version as requested.")
    elif status.up_to_date:
        log.ok(f"Codex CLI up-to-date ({status.version})")
        return StepResult.verified(STEP, f"up-to-date ({status.version})", metadata=meta)
    else:
        log.ok("Codex CLI found; unable to verify latest version.")
        return StepResult.verified(STEP, "found; latest version unknown", metadata=meta)

    if action is None:
        return StepResult.skipped(STEP, "declined", metadata=meta)

    spec = f"{CODEX_PACKAGE}@{status.latest}" if status.latest else CODEX_PACKAGE
    manager = resolve_global_runtime_pm(interactive=ctx.interactive, log=log)
    if manager == "none":
        log.warn("Skipping global Node installs because no supported package manager was found.")
        return StepResult.skipped(STEP, "no global package manager", metadata=meta)

    log.info(f"Installing/updating Codex CLI via {manager}")
    args = ["add", "-g", spec] if manager == "pnpm" else ["install", "-g", spec]
    run_command(manager, args, dry_run=ctx.dry_run, log=log)

    meta.update({"action": action, "manager": manager, "package": spec})
    if ctx.dry_run:
        return StepResult.planned(STEP, f"{action} {spec} via {manager}", metadata=meta)

    if is_command_available(CODEX_BIN):
        log.ok("Codex CLI installed")
        done = "installed" if action == "install" else "updated"
        return StepResult.verified(STEP, f"{done} {spec}", metadata=meta)
    log.err("Codex CLI not found after install")
    return StepResult.failure(STEP, "codex not found after install", metadata=meta)
