"""
Doctor use case — environment checks with fix hints.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from codexup.core.models.options import InstallerPaths
from codexup.core.services.installer.detection.tool_status import is_command_available
from codexup.core.use_cases.status import StatusResult, get_status


@dataclass
class Check:
    name: str
    ok: bool
    detail: str = ""
    hint: str = ""

    def to_dict(self) -> dict:
        return {"name": self.name, "ok": self.ok, "detail": self.detail, "hint": self.hint}


@dataclass
class DoctorResult:
    checks: list[Check] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(c.ok for c in self.checks)

    def to_dict(self) -> dict:
        return {"ok": self.ok, "checks": [c.to_dict() for c in self.checks]}


def run_doctor(paths: InstallerPaths | None = None, status: StatusResult | None = None) -> DoctorResult:
    paths = paths or InstallerPaths()
    status = status or get_status(paths)
    result = DoctorResult()
    add = result.checks.append

    node_ok = is_command_available("node") and is_command_available("npm")
    add(Check("node", node_ok, hint="" if node_ok else "codex-1up install --install-node nvm"))

    codex = status.codex
    if not codex.found:
        add(Check("codex", False, "not installed", "codex-1up install"))
    elif codex.update_available:
        add(Check("codex", False, f"{codex.version} → {codex.latest}", "codex-1up install --codex-cli yes"))
    elif codex.latest is None:
        add(Check("codex", True, f"{codex.version or 'unknown version'} (latest unknown)"))
    else:
        add(Check("codex", True, codex.version or ""))

    missing = status.missing_tools
    add(Check(
        "tools",
        not missing,
        f"missing: {', '.join(missing)}" if missing else "all installed",
        f"codex-1up tools install {','.join(missing)}" if missing else "",
    ))

    pm = status.global_pm
    if pm is not None and pm.is_misconfigured:
        add(Check("global-pm", False, f"{pm.manager}: {pm.reason}", "pnpm setup  (or use npm)"))
    else:
        add(Check("global-pm", pm is not None and pm.is_ready, (pm.manager or "none") if pm else "none"))

    cfg = status.config
    if cfg is None or not cfg.exists:
        add(Check("config", False, f"{paths.config_path} missing", "codex-1up install"))
    elif cfg.error:
        add(Check("config", False, f"invalid TOML: {cfg.error}", f"fix or restore a backup of {cfg.path}"))
    else:
        add(Check("config", True, f"profile: {cfg.profile or 'unset'}"))

    add(Check(
        "notify",
        status.notify_registered,
        "" if status.notify_registered else "hook not registered",
        "" if status.notify_registered else "codex-1up config notify",
    ))
    return result
