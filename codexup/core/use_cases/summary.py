"""
Summary use case — what an install left behind.

Reads ``~/.codex/config.toml`` for the active profile and the declared
profiles, and checks which tools are on PATH.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from codexup.core.models.options import InstallerPaths
from codexup.core.services.installer.data.constants import CODEX_BIN
from codexup.core.services.installer.data.tools import list_tools
from codexup.core.services.installer.detection.tool_status import (
    get_all_statuses,
    is_command_available,
)

logger = logging.getLogger(__name__)


@dataclass
class ConfigSummary:
    """Active profile and declared profiles of config.toml."""

    path: Path
    exists: bool = False
    profile: str | None = None
    profiles: list[str] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "exists": self.exists,
            "profile": self.profile,
            "profiles": self.profiles,
            "error": self.error,
        }


@dataclass
class InstallSummary:
    config: ConfigSummary
    tools_detected: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"config": self.config.to_dict(), "tools_detected": self.tools_detected}

    def lines(self) -> list[str]:
        cfg = self.config
        active = f" (active profile: {cfg.profile})" if cfg.profile else ""
        out = [
            "",
            "codex-1up: Installation summary",
            "────────────────────────────────",
            f"Config: {cfg.path}{active}",
        ]
        if cfg.profiles:
            out.append(f"Profiles: {', '.join(cfg.profiles)}")
        out += [
            f"Tools detected: {', '.join(self.tools_detected) or 'none'}",
            "",
            "Usage:",
            "  - Switch profile for a session:  codex --profile <name>",
            "  - List available profiles:       codex-1up config profiles",
            "  - Persist active profile:        codex-1up config set-profile <name>",
            "  - Write AGENTS.md to a repo:     codex-1up agents --path . --template default",
            "",
        ]
        return out


def read_config_summary(config_path: Path) -> ConfigSummary:
    """Parse config.toml read-only.  Problems are reported, never raised."""
    summary = ConfigSummary(path=config_path)
    if not config_path.is_file():
        return summary
    summary.exists = True
    try:
        with open(config_path, "rb") as fh:
            data = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.debug("cannot parse %s: %s", config_path, e)
        summary.error = str(e)
        return summary

    profile = data.get("profile")
    summary.profile = profile if isinstance(profile, str) else None
    profiles = data.get("profiles")
    if isinstance(profiles, dict):
        summary.profiles = list(profiles)
    return summary


def build_install_summary(paths: InstallerPaths | None = None) -> InstallSummary:
    paths = paths or InstallerPaths()
    detected = [CODEX_BIN] if is_command_available(CODEX_BIN) else []
    detected += [s.id for s in get_all_statuses(list_tools()) if s.installed]
    return InstallSummary(config=read_config_summary(paths.config_path), tools_detected=detected)
