"""
L3 Detection — Latest published versions.

Direct registry fetch first (short timeout), then the package manager
CLI, which honours proxy and registry configuration.  Every failure
degrades to ``None`` ("unknown").
"""

from __future__ import annotations

import json
import logging
import re
import sys
import urllib.error
import urllib.parse
import urllib.request
from typing import Any

from codexup.core.services.installer.data.constants import (
    CLI_FALLBACK_TIMEOUT_S,
    FETCH_TIMEOUT_S,
    NPM_REGISTRY_LATEST,
    PYPI_PROJECT_JSON,
    USER_AGENT,
)
from codexup.core.services.installer.execution.subprocess_runner import run_capture

logger = logging.getLogger(__name__)

_PIP: list[str] = [sys.executable, "-m", "pip"]
_PIP_INDEX_RE = re.compile(r"^\S+\s+\(([^)]+)\)", re.MULTILINE)


def fetch_json(url: str, *, timeout: float = FETCH_TIMEOUT_S) -> dict[str, Any] | None:
    """GET ``url`` and decode a JSON object, or ``None`` on any failure."""
    req = urllib.request.Request(
        url,
        headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
    )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            data = json.loads(resp.read().decode("utf-8"))
    except (urllib.error.URLError, TimeoutError, OSError, ValueError) as e:
        logger.debug("fetch %s failed: %s", url, e)
        return None
    return data if isinstance(data, dict) else None


def _version_field(data: dict[str, Any] | None) -> str | None:
    if not data:
        return None
    version = data.get("version")
    return version.strip() if isinstance(version, str) and version.strip() else None


def get_latest_npm_version(package: str) -> str | None:
    """Latest published version of an npm package."""
    # Scoped names keep their "@" but the "/" must be escaped.
    url = NPM_REGISTRY_LATEST.format(package=urllib.parse.quote(package, safe="@"))
    version = _version_field(fetch_json(url, timeout=FETCH_TIMEOUT_S))
    if version:
        return version

    result = run_capture(["npm", "view", package, "version"], timeout=CLI_FALLBACK_TIMEOUT_S)
    lines = result["stdout"].strip().splitlines()
    if result["ok"] and lines:
        return lines[-1].strip()
    logger.debug("latest npm version unknown for %s: %s", package, result["error"])
    return None


def get_latest_pypi_version(package: str) -> str | None:
    """Latest published version of a PyPI distribution."""
    data = fetch_json(PYPI_PROJECT_JSON.format(package=package), timeout=FETCH_TIMEOUT_S)
    version = _version_field((data or {}).get("info"))
    if version:
        return version

    result = run_capture([*_PIP, "index", "versions", package], timeout=CLI_FALLBACK_TIMEOUT_S)
    if result["ok"]:
        # "codex-1up (0.3.1)"
        match = _PIP_INDEX_RE.search(result["stdout"])
        if match:
            return match.group(1).strip()
    logger.debug("latest PyPI version unknown for %s: %s", package, result["error"])
    return None
