"""
L5 Orchestration — AGENTS.md templates.

Global ``~/.codex/AGENTS.md`` during install, and per-repository copies
for ``codex-1up agents --path``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from codexup.core.models.options import InstallerContext
from codexup.core.models.step import StepResult
from codexup.core.observability.reporter import NULL_LOGGER, InstallLogger
from codexup.core.services.installer.data.constants import (
    AGENTS_TEMPLATE_FMT,
    AGENTS_TEMPLATES_DIR,
)
from codexup.core.services.installer.errors import MissingTemplateError
from codexup.core.services.installer.execution.backup import backup_existing
from codexup.core.services.installer.execution.files import read_text, write_text
from codexup.core.services.installer.prompts import confirm

logger = logging.getLogger(__name__)

STEP = "agents"

APPEND_SEPARATOR = "\n---\n\n"


def agents_template_path(templates_dir: Path, name: str = "default") -> Path:
    return templates_dir / AGENTS_TEMPLATES_DIR / AGENTS_TEMPLATE_FMT.format(name=name)


def list_agents_templates(templates_dir: Path) -> list[str]:
    """Template names available for ``agents --template``."""
    prefix, suffix = AGENTS_TEMPLATE_FMT.split("{name}")
    root = templates_dir / AGENTS_TEMPLATES_DIR
    if not root.is_dir():
        return []
    return sorted(
        p.name[len(prefix):-len(suffix)]
        for p in root.glob(AGENTS_TEMPLATE_FMT.format(name="*"))
    )


def write_global_agents(ctx: InstallerContext) -> StepResult:
    """Create, overwrite or extend ``~/.codex/AGENTS.md`` from the default template."""
    log = ctx.logger
    mode = ctx.options.global_agents
    if mode is None:
        answer = ctx.interactive and confirm("Create a global ~/.codex/AGENTS.md now?", default=False)
        mode = "create-default" if answer else "skip"
    if mode == "skip":
        log.info("Skipping global AGENTS.md creation")
        return StepResult.skipped(STEP, "global_agents=skip")

    template = agents_template_path(ctx.paths.templates_dir)
    if not template.is_file():
        log.warn(f"Template not found at {template}")
        return StepResult.skipped(STEP, "template missing")

    target = ctx.paths.agents_path
    content = read_text(template)
    backups: list[str] = []

    if mode == "create-default":
        if target.exists():
            log.info("Global AGENTS.md already exists; leaving unchanged")
            return StepResult.skipped(STEP, "already exists")
        write_text(target, content, dry_run=ctx.dry_run, log=log)
        log.ok(f"Wrote {target}")
    else:
        backup = backup_existing(target, dry_run=ctx.dry_run, log=log)
        if backup:
            backups.append(str(backup))
            log.info(f"Backed up existing AGENTS.md to: {backup}")
        if mode == "overwrite-default":
            write_text(target, content, dry_run=ctx.dry_run, log=log)
            log.ok(f"Wrote {target}")
        else:
            existing = read_text(target)
            merged = existing + APPEND_SEPARATOR + content if existing else content
            write_text(target, merged, dry_run=ctx.dry_run, log=log)
            log.ok(f"Appended template to {target}")

    if ctx.dry_run:
        return StepResult.planned(STEP, f"{mode} {target}", backups=backups)
    return StepResult.verified(STEP, f"{mode} {target}", backups=backups)


def write_repo_agents(
    target: Path,
    templates_dir: Path,
    *,
    template: str = "default",
    dry_run: bool = False,
    log: InstallLogger = NULL_LOGGER,
) -> Path:
    """Write an AGENTS.md template into a repository.

    ``target`` may be a directory (``<dir>/AGENTS.md`` is written) or a
    file path.  An existing file is backed up first.

    Raises:
        MissingTemplateError: The named template is not bundled.
    """
    src = agents_template_path(templates_dir, template)
    if not src.is_file():
        available = ", ".join(list_agents_templates(templates_dir)) or "none"
        raise MissingTemplateError(f"Template not found: {src} (available: {available})")

    dest = target / "AGENTS.md" if target.is_dir() else target
    backup_existing(dest, dry_run=dry_run, log=log)
    write_text(dest, read_text(src), dry_run=dry_run, log=log)
    return dest
