"""
L3 Detection — Codex CLI version status.

Installed version from ``codex --version`` (falling back to the global
npm tree), latest from the npm registry.
"""

from __future__ import annotations

import json
import logging

from codexup.core.models.tool import CodexStatus
from codexup.core.services.installer.data.constants import CODEX_BIN, CODEX_PACKAGE
from codexup.core.services.installer.detection.registry import get_latest_npm_version
from codexup.core.services.installer.detection.tool_status import is_command_available
from codexup.core.services.installer.domain.versions import extract_version, is_newer
from codexup.core.services.installer.execution.subprocess_runner import run_capture

logger = logging.getLogger(__name__)


def _npm_global_version(package: str) -> str | None:
    result = run_capture(["npm", "ls", "-g", package, "--depth=0", "--json"])
    # npm ls exits 1 on unrelated tree problems but still prints JSON.
    if not result["stdout"].strip():
        return None
    try:
        data = json.loads(result["stdout"])
    except ValueError:
        return None
    dep = (data.get("dependencies") or {}).get(package) if isinstance(data, dict) else None
    version = dep.get("version") if isinstance(dep, dict) else None
    return version if isinstance(version, str) and version else None


def get_installed_codex_version() -> tuple[bool, str | None]:
    """Return ``(found, version)`` for the Codex CLI.

    ``(True, None)`` means the binary is on PATH but no version could be
    determined.
    """
    if not is_command_available(CODEX_BIN):
        return False, None

    result = run_capture([CODEX_BIN, "--version"])
    if result["ok"]:
        version = extract_version(result["stdout"]) or extract_version(result["stderr"])
        if version:
            return True, version

    version = _npm_global_version(CODEX_PACKAGE)
    if version is None:
        logger.debug("codex found but version unknown")
    return True, version


def get_codex_status() -> CodexStatus:
    """Installed and latest Codex CLI versions.

    The registry is only consulted when the CLI is installed.
    """
    found, version = get_installed_codex_version()
    if not found:
        return CodexStatus(found=False)

    latest = get_latest_npm_version(CODEX_PACKAGE)
    update = bool(version and latest and is_newer(latest, version))
    return CodexStatus(found=True, version=version, latest=latest, update_available=update)
