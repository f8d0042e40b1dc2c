"""
L5 Orchestration — Developer tools.

Installs the selected registry tools with the system package manager,
adds ``fd``/``bat`` aliases where distributions rename them, and
re-checks every selected tool afterwards.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from codexup.core.models.options import InstallerContext
from codexup.core.models.step import StepResult
from codexup.core.models.tool import ToolDefinition
from codexup.core.services.installer.data.tools import (
    TOOL_ALIASES,
    all_tool_ids,
    is_known_tool,
    list_tools,
)
from codexup.core.services.installer.detection.package_manager import (
    detect_system_package_manager,
    needs_sudo,
    privileged_command,
)
from codexup.core.services.installer.detection.tool_status import (
    is_command_available,
    is_tool_installed,
)
from codexup.core.services.installer.errors import CommandError, UnknownToolError
from codexup.core.services.installer.execution.files import ensure_symlink
from codexup.core.services.installer.execution.subprocess_runner import run_command
from codexup.core.services.installer.prompts import multi_select

logger = logging.getLogger(__name__)

STEP = "tools"


# ── Selection ───────────────────────────────────────────────────


def parse_tool_selection(raw: str) -> list[str] | None:
    """Parse ``"all"`` or a comma-separated id list.

    Returns:
        ``None`` for all tools, otherwise unique ids in the order given.

    Raises:
        UnknownToolError: Any id is not in the registry.
    """
    text = raw.strip().lower()
    if text == "all":
        return None
    ids: list[str] = []
    for part in text.split(","):
        part = part.strip()
        if part and part not in ids:
            ids.append(part)
    unknown = [t for t in ids if not is_known_tool(t)]
    if unknown:
        raise UnknownToolError(unknown, all_tool_ids())
    return ids


def resolve_selected_tools(ctx: InstallerContext) -> list[ToolDefinition]:
    """Tools picked by ``install_tools``/``tools_selected``, in registry order."""
    opts = ctx.options
    if opts.install_tools == "skip":
        return []
    if opts.install_tools == "all":
        return list_tools()

    wanted = list(opts.tools_selected)
    if not wanted and ctx.interactive:
        picked = multi_select(
            "Tools to install",
            [(t.id, t.label) for t in list_tools()],
        )
        wanted = picked or []
    unknown = [t for t in wanted if not is_known_tool(t)]
    if unknown:
        raise UnknownToolError(unknown, all_tool_ids())
    return [t for t in list_tools() if t.id in wanted]


def unique_packages(tools: list[ToolDefinition], manager: str) -> list[str]:
    packages: list[str] = []
    for tool in tools:
        for pkg in tool.packages_for(manager):
            if pkg not in packages:
                packages.append(pkg)
    return packages


# ── Package manager recipes ─────────────────────────────────────


def _install_packages(ctx: InstallerContext, manager: str, packages: list[str]) -> None:
    log = ctx.logger
    dry = ctx.dry_run

    if manager == "brew":
        run_command("brew", ["update"], dry_run=dry, log=log)
        run_command("brew", ["install", *packages], dry_run=dry, log=log)
        return

    if manager == "apt":
        log.info("Running apt-get update...")
        program, prefix = privileged_command("apt-get")
        try:
            run_command(program, [*prefix, "update", "-y"], dry_run=dry, log=log)
        except CommandError:
            log.warn(f"apt-get update failed; install tools manually: {', '.join(packages)}")
            return
        for pkg in packages:
            try:
                run_command(program, [*prefix, "install", "-y", pkg], dry_run=dry, log=log)
            except CommandError:
                log.warn(f"apt-get install failed for {pkg}; install manually if needed.")
        return

    if manager == "dnf":
        program, prefix = privileged_command("dnf")
        args = [*prefix, "install", "-y", *packages]
    elif manager == "pacman":
        program, prefix = privileged_command("pacman")
        args = [*prefix, "-Sy", "--noconfirm", *packages]
    elif manager == "zypper":
        program, prefix = privileged_command("zypper")
        run_command(program, [*prefix, "refresh"], dry_run=dry, log=log)
        args = [*prefix, "install", "-y", *packages]
    else:
        raise ValueError(f"unsupported package manager: {manager}")

    try:
        run_command(program, args, dry_run=dry, log=log)
    except CommandError as e:
        # Partial installs are reported by the per-tool summary.
        log.warn(f"{manager} install reported an error: {e}")


# ── Aliases ─────────────────────────────────────────────────────


def _ensure_alias(ctx: InstallerContext, source_bin: str, target_bin: str) -> None:
    """Link ``~/.local/bin/<target>`` to ``<source>`` when only the latter exists."""
    if not is_command_available(source_bin) or is_command_available(target_bin):
        return
    source = shutil.which(source_bin) or source_bin
    link = ctx.paths.home_dir / ".local" / "bin" / target_bin
    if ensure_symlink(Path(source), link, dry_run=ctx.dry_run, log=ctx.logger) and not ctx.dry_run:
        ctx.logger.ok(f"{target_bin} alias created at ~/.local/bin/{target_bin}")


# ── Step ────────────────────────────────────────────────────────


def ensure_tools(ctx: InstallerContext) -> StepResult:
    """Install and verify the selected developer tools."""
    log = ctx.logger
    if ctx.options.install_tools == "skip":
        log.info("Skipping developer tool installs (user choice)")
        return StepResult.skipped(STEP, "install_tools=skip")

    tools = resolve_selected_tools(ctx)
    if not tools:
        log.info("Skipping developer tool installs (no tools selected)")
        return StepResult.skipped(STEP, "no tools selected")

    manager = detect_system_package_manager()
    log.info(f"Detected package manager: {manager}")
    if manager == "none":
        log.warn("Could not detect a supported package manager; please install tools manually")
        return StepResult.skipped(STEP, "no supported package manager")

    packages = unique_packages(tools, manager)
    if packages:
        if manager != "brew" and needs_sudo():
            log.warn("Package installation may require sudo password. Please enter it when prompted.")
        _install_packages(ctx, manager, packages)

    selected = {t.id for t in tools}
    for tool_id, (source_bin, target_bin) in TOOL_ALIASES.items():
        if tool_id in selected:
            _ensure_alias(ctx, source_bin, target_bin)

    meta = {"manager": manager, "packages": packages, "tools": [t.id for t in tools]}
    if ctx.dry_run:
        return StepResult.planned(STEP, f"install {', '.join(packages) or 'nothing'}", metadata=meta)

    missing: list[str] = []
    for tool in tools:
        if is_tool_installed(tool):
            log.ok(f"{tool.id} ✓")
        else:
            log.warn(f"{tool.id} not detected after install")
            missing.append(tool.id)

    meta["missing"] = missing
    if missing:
        return StepResult.failure(STEP, f"not detected after install: {', '.join(missing)}", metadata=meta)
    return StepResult.verified(STEP, f"{len(tools)} tool(s) present", metadata=meta)
