"""
Status use case — current state of the Codex setup on this machine.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from codexup.core.models.options import InstallerPaths
from codexup.core.models.skill import InstalledSkill
from codexup.core.models.tool import CodexStatus, GlobalPmResolution, ToolStatus
from codexup.core.services.installer.detection.codex_status import (
    get_codex_status,
    get_installed_codex_version,
)
from codexup.core.services.installer.detection.package_manager import (
    detect_system_package_manager,
    probe_global_runtime_pm,
)
from codexup.core.services.installer.detection.tool_status import get_all_statuses
from codexup.core.services.installer.domain.config_patch import notify_config_satisfied
from codexup.core.services.installer.execution.files import read_text
from codexup.core.services.installer.orchestration.skills import list_installed_skills
from codexup.core.use_cases.summary import ConfigSummary, read_config_summary


@dataclass
class StatusResult:
    """Aggregated installer-relevant state."""

    codex: CodexStatus
    tools: list[ToolStatus] = field(default_factory=list)
    system_package_manager: str = "none"
    global_pm: GlobalPmResolution | None = None
    config: ConfigSummary | None = None
    notify_registered: bool = False
    skills: list[InstalledSkill] = field(default_factory=list)

    @property
    def missing_tools(self) -> list[str]:
        return [t.id for t in self.tools if not t.installed]

    def to_dict(self) -> dict:
        return {
            "codex": self.codex.model_dump(),
            "tools": [t.model_dump() for t in self.tools],
            "system_package_manager": self.system_package_manager,
            "global_pm": self.global_pm.model_dump() if self.global_pm else None,
            "config": self.config.to_dict() if self.config else None,
            "notify_registered": self.notify_registered,
            "skills": [s.id for s in self.skills],
        }


def get_status(paths: InstallerPaths | None = None, *, check_latest: bool = True) -> StatusResult:
    """Probe everything the installer manages.

    Args:
        paths: Resolved locations (default: the current user's).
        check_latest: Query the npm registry for the latest Codex CLI.
    """
    paths = paths or InstallerPaths()
    if check_latest:
        codex = get_codex_status()
    else:
        found, version = get_installed_codex_version()
        codex = CodexStatus(found=found, version=version)

    hook = paths.notify_path
    notify_registered = hook.exists() and notify_config_satisfied(
        read_text(paths.config_path), str(hook),
    )

    return StatusResult(
        codex=codex,
        tools=get_all_statuses(),
        system_package_manager=detect_system_package_manager(),
        global_pm=probe_global_runtime_pm(),
        config=read_config_summary(paths.config_path),
        notify_registered=notify_registered,
        skills=list_installed_skills(paths.skills_dir),
    )
