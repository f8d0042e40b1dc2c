"""
L3 Detection — Package managers.

System package manager detection (brew/apt/dnf/pacman/zypper) and the
pnpm/npm resolution used for global Node installs.
"""

from __future__ import annotations

import logging
import os
from typing import Literal

from codexup.core.models.tool import GlobalPmResolution, PackageManager
from codexup.core.observability.reporter import NULL_LOGGER, InstallLogger
from codexup.core.services.installer.detection.tool_status import is_command_available
from codexup.core.services.installer.execution.subprocess_runner import run_capture
from codexup.core.services.installer.prompts import select

logger = logging.getLogger(__name__)

# Probe order matters: a Linux box with Linuxbrew reports brew.
_SYSTEM_PMS: tuple[tuple[str, PackageManager], ...] = (
    ("brew", "brew"),
    ("apt-get", "apt"),
    ("dnf", "dnf"),
    ("pacman", "pacman"),
    ("zypper", "zypper"),
)


def detect_system_package_manager() -> PackageManager | Literal["none"]:
    for binary, manager in _SYSTEM_PMS:
        if is_command_available(binary):
            logger.debug("system package manager: %s", manager)
            return manager
    return "none"


def is_root() -> bool:
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


def needs_sudo() -> bool:
    """Whether privileged commands need a ``sudo`` prefix."""
    return hasattr(os, "geteuid") and not is_root()


def privileged_command(program: str, args: list[str] | None = None) -> tuple[str, list[str]]:
    """Return ``(program, args)``, prefixed with sudo when not root.

    Never prefixes on platforms without ``os.geteuid``.
    """
    args = list(args or [])
    if needs_sudo():
        return "sudo", [program, *args]
    return program, args


def probe_global_runtime_pm(log: InstallLogger = NULL_LOGGER) -> GlobalPmResolution:
    """Classify the global Node package manager.

    pnpm counts only when ``pnpm bin -g`` prints a directory: a pnpm
    without ``PNPM_HOME`` set up fails that probe and cannot install
    globals.
    """
    if is_command_available("pnpm"):
        result = run_capture(["pnpm", "bin", "-g"])
        if not result["ok"]:
            detail = (result["stderr"] or result["error"]).strip()
            log.warn(f"pnpm is installed but global bin dir is not configured: {detail}")
            return GlobalPmResolution.misconfigured("pnpm", "pnpm-error")
        bin_dir = result["stdout"].strip()
        if not bin_dir:
            log.warn("pnpm is installed but reports no global bin dir")
            return GlobalPmResolution.misconfigured("pnpm", "pnpm-empty")
        return GlobalPmResolution.ready("pnpm", bin_dir=bin_dir)

    if is_command_available("npm"):
        return GlobalPmResolution.ready("npm", reason="npm-default")
    return GlobalPmResolution.absent()


def resolve_global_runtime_pm(
    *,
    interactive: bool,
    log: InstallLogger = NULL_LOGGER,
) -> Literal["pnpm", "npm", "none"]:
    """Pick the manager for global installs, asking when pnpm is broken."""
    resolution = probe_global_runtime_pm(log)
    if resolution.is_ready and resolution.manager:
        return resolution.manager
    if not resolution.is_misconfigured:
        return "none"

    npm_available = is_command_available("npm")
    if interactive:
        if not npm_available:
            log.warn("npm not found; cannot fall back from pnpm")
            return "none"
        choice = select(
            "pnpm is misconfigured. How should global packages be installed?",
            [("npm", "Fall back to npm"), ("skip", "Skip global installs")],
            default="npm",
        )
        if choice == "npm":
            return "npm"
        log.info("Skipping global installs")
        return "none"

    if npm_available:
        log.warn("pnpm misconfigured; falling back to npm")
        return "npm"
    log.warn("pnpm misconfigured and npm not found; skipping global installs")
    return "none"
