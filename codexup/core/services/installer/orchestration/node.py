"""
L5 Orchestration — Node.js prerequisite.

Node and npm are needed for the Codex CLI.  When missing they are
installed through nvm (default) or Homebrew.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from codexup.core.models.options import InstallerContext
from codexup.core.models.step import StepResult
from codexup.core.services.installer.data.constants import (
    HOMEBREW_INSTALL_URL,
    NVM_INSTALL_URL,
)
from codexup.core.services.installer.detection.tool_status import is_command_available
from codexup.core.services.installer.domain.versions import parse_semver
from codexup.core.services.installer.errors import NodeInstallError
from codexup.core.services.installer.execution.subprocess_runner import (
    run_capture,
    run_command,
)

logger = logging.getLogger(__name__)

STEP = "node"

_BREW_PREFIXES = (Path("/opt/homebrew/bin"), Path("/usr/local/bin"))


def _node_version() -> str:
    result = run_capture(["node", "-v"])
    return result["stdout"].strip() or "unknown version"


def _prepend_path(directory: Path) -> None:
    """Make binaries installed by this run visible to later steps."""
    current = os.environ.get("PATH", "")
    if str(directory) not in current.split(os.pathsep):
        os.environ["PATH"] = f"{directory}{os.pathsep}{current}" if current else str(directory)
        logger.debug("PATH += %s", directory)


def _activate_nvm_node(nvm_dir: Path) -> None:
    versions = [p for p in (nvm_dir / "versions" / "node").glob("v*") if (p / "bin").is_dir()]
    if not versions:
        return
    newest = max(versions, key=lambda p: parse_semver(p.name) or (0, 0, 0))
    _prepend_path(newest / "bin")


def _install_via_nvm(ctx: InstallerContext) -> None:
    log = ctx.logger
    log.info("Installing Node.js via nvm")
    if ctx.dry_run:
        log.log("[dry-run] install nvm + Node LTS")
        return

    nvm_dir = ctx.paths.home_dir / ".nvm"
    if not nvm_dir.exists():
        log.info("Installing nvm...")
        run_command("bash", ["-c", f"curl -fsSL {NVM_INSTALL_URL} | bash"], log=log)

    script = (
        f'export NVM_DIR="{nvm_dir}" && [ -s "$NVM_DIR/nvm.sh" ] '
        '&& . "$NVM_DIR/nvm.sh" && nvm install --lts'
    )
    run_command("bash", ["-c", script], log=log)
    _activate_nvm_node(nvm_dir)


def _install_homebrew(ctx: InstallerContext) -> None:
    log = ctx.logger
    if sys.platform != "darwin":
        raise NodeInstallError("Homebrew is only available on macOS")
    log.info("Homebrew not found; installing Homebrew")
    run_command("/bin/bash", ["-c", f'/bin/bash -c "$(curl -fsSL {HOMEBREW_INSTALL_URL})"'], log=log)
    for prefix in _BREW_PREFIXES:
        if (prefix / "brew").exists():
            _prepend_path(prefix)
            break


def _install_via_brew(ctx: InstallerContext) -> None:
    log = ctx.logger
    log.info("Installing Node.js via Homebrew")
    if not is_command_available("brew"):
        if ctx.dry_run:
            if sys.platform != "darwin":
                raise NodeInstallError("Homebrew is only available on macOS")
            log.log("[dry-run] install Homebrew")
        else:
            _install_homebrew(ctx)
    run_command("brew", ["install", "node"], dry_run=ctx.dry_run, log=log)


def ensure_node(ctx: InstallerContext) -> StepResult:
    """Make sure ``node`` and ``npm`` are on PATH.

    Raises:
        NodeInstallError: Node is still missing after the install attempt.
    """
    log = ctx.logger
    if is_command_available("node") and is_command_available("npm"):
        version = _node_version()
        log.ok(f"Node.js present ({version})")
        return StepResult.verified(STEP, f"Node.js present ({version})")

    method = ctx.options.install_node
    if method == "skip":
        log.warn("Skipping Node installation; please install Node 18+ manually")
        return StepResult.skipped(STEP, "install_node=skip")

    if method == "brew":
        _install_via_brew(ctx)
    else:
        _install_via_nvm(ctx)

    if ctx.dry_run:
        return StepResult.planned(STEP, f"install Node.js via {method}")

    if not is_command_available("node"):
        log.err("Node installation failed")
        raise NodeInstallError("Node.js installation failed")

    version = _node_version()
    log.ok(f"Node.js installed ({version})")
    return StepResult.verified(STEP, f"Node.js installed ({version})")
