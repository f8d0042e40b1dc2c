"""
L5 Orchestration — ~/.codex/config.toml and the notify hook.

``ensure_config`` writes the bundled template (fresh installs or when
overwrite is confirmed) and the active profile.  ``ensure_notify_hook``
installs ``notify.sh`` and registers it in the config.
"""

from __future__ import annotations

import logging

from codexup.core.models.options import PROFILES, InstallerContext
from codexup.core.models.step import StepResult
from codexup.core.services.installer.data.constants import CONFIG_TEMPLATE, NOTIFY_TEMPLATE
from codexup.core.services.installer.domain.config_patch import (
    notify_config_satisfied,
    set_root_profile,
)
from codexup.core.services.installer.execution.backup import backup_existing
from codexup.core.services.installer.execution.config_writer import (
    write_active_profile,
    write_notify_config,
)
from codexup.core.services.installer.execution.files import read_text, write_text
from codexup.core.services.installer.prompts import confirm, select

logger = logging.getLogger(__name__)

CONFIG_STEP = "config"
NOTIFY_STEP = "notify"

DEFAULT_PROFILE = "balanced"

_PROFILE_LABELS = {
    "balanced": "balanced (default)",
    "safe": "safe",
    "minimal": "minimal",
    "yolo": "yolo (risky)",
}


def _decide_overwrite(ctx: InstallerContext) -> bool:
    choice = ctx.options.overwrite_config
    if choice is not None:
        return choice == "yes"
    if not ctx.interactive:
        return False
    answer = confirm(
        "Overwrite existing ~/.codex/config.toml with the latest template? (backup will be created)",
        default=False,
    )
    return bool(answer)


def _decide_profile(ctx: InstallerContext) -> str:
    if ctx.options.profile:
        return ctx.options.profile
    if ctx.interactive:
        picked = select(
            "Active profile",
            [(p, _PROFILE_LABELS[p]) for p in PROFILES],
            default=DEFAULT_PROFILE,
        )
        if picked:
            return picked
    return DEFAULT_PROFILE


def ensure_config(ctx: InstallerContext) -> StepResult:
    """Write the config template and/or the active profile.

    The profile is only changed when the template was (re)written or a
    profile was chosen explicitly; an existing config otherwise keeps
    its profile.
    """
    log = ctx.logger
    paths = ctx.paths
    cfg = paths.config_path
    exists = cfg.exists()

    write_template = not exists or _decide_overwrite(ctx)
    backups: list[str] = []

    if write_template:
        template = paths.templates_dir / CONFIG_TEMPLATE
        if not template.is_file():
            log.warn(f"Config template missing at {template}; skipping config write")
            return StepResult.skipped(CONFIG_STEP, "template missing")

        profile = _decide_profile(ctx)
        content = set_root_profile(read_text(template), profile)
        backup = backup_existing(cfg, dry_run=ctx.dry_run, log=log)
        if backup:
            backups.append(str(backup))
        write_text(cfg, content, dry_run=ctx.dry_run, log=log)
        log.ok(f"Wrote {cfg} (profile: {profile})")
        meta = {"template_written": True, "profile": profile}
    elif ctx.options.profile:
        log.info("Keeping existing config (no overwrite).")
        outcome = write_active_profile(cfg, ctx.options.profile, dry_run=ctx.dry_run, log=log)
        if outcome["backup"]:
            backups.append(outcome["backup"])
        if outcome["changed"]:
            log.ok(f"Active profile set to {ctx.options.profile}")
        meta = {"template_written": False, "profile": ctx.options.profile}
        if not outcome["changed"]:
            return StepResult.verified(CONFIG_STEP, "profile already set", backups=backups, metadata=meta)
    else:
        log.info("Keeping existing config (no overwrite).")
        log.info("Profile unchanged (existing config kept).")
        return StepResult.skipped(CONFIG_STEP, "existing config kept")

    if ctx.dry_run:
        return StepResult.planned(CONFIG_STEP, f"write {cfg}", backups=backups, metadata=meta)
    return StepResult.verified(CONFIG_STEP, f"wrote {cfg}", backups=backups, metadata=meta)


def _install_hook_script(ctx: InstallerContext) -> tuple[bool, list[str]]:
    """Copy notification.sh into place.  Returns ``(changed, backups)``."""
    log = ctx.logger
    target = ctx.paths.notify_path
    template = ctx.paths.templates_dir / NOTIFY_TEMPLATE
    content = read_text(template)

    if not target.exists():
        write_text(target, content, dry_run=ctx.dry_run, log=log, mode=0o755)
        log.ok("Installed notify hook to ~/.codex/notify.sh")
        return True, []

    overwrite = ctx.options.notify == "yes"
    if ctx.options.notify is None and ctx.interactive:
        overwrite = bool(confirm("Overwrite existing ~/.codex/notify.sh? (backup will be created)", default=False))
    if not overwrite:
        log.info("Keeping existing notify hook")
        return False, []
    if read_text(target) == content:
        log.info("Notify hook already up to date")
        return False, []

    backup = backup_existing(target, dry_run=ctx.dry_run, log=log)
    write_text(target, content, dry_run=ctx.dry_run, log=log, mode=0o755)
    log.ok("Updated notify hook (backup created)")
    return True, [str(backup)] if backup else []


def ensure_notify_hook(ctx: InstallerContext) -> StepResult:
    """Install notify.sh and register it under the root ``notify`` array."""
    log = ctx.logger
    if ctx.options.notify == "no":
        log.info("Skipping notify hook installation")
        return StepResult.skipped(NOTIFY_STEP, "notify=no")

    template = ctx.paths.templates_dir / NOTIFY_TEMPLATE
    if not template.is_file():
        log.warn(f"Notification template missing at {template}; skipping notify hook install")
        return StepResult.skipped(NOTIFY_STEP, "template missing")

    hook_changed, backups = _install_hook_script(ctx)

    cfg = ctx.paths.config_path
    hook = ctx.paths.notify_path
    outcome = write_notify_config(cfg, hook, dry_run=ctx.dry_run, log=log)
    if outcome["backup"]:
        backups.append(outcome["backup"])
    if outcome["changed"]:
        log.ok("Enabled notify hook and tui notifications in config")

    meta = {"hook_changed": hook_changed, "config_changed": outcome["changed"]}
    if ctx.dry_run:
        if hook_changed or outcome["changed"]:
            return StepResult.planned(NOTIFY_STEP, "install notify hook", backups=backups, metadata=meta)
        return StepResult.verified(NOTIFY_STEP, "already configured", metadata=meta)

    if hook.exists() and notify_config_satisfied(read_text(cfg), str(hook)):
        return StepResult.verified(NOTIFY_STEP, "notify hook registered", backups=backups, metadata=meta)
    return StepResult.failure(NOTIFY_STEP, "notify hook not registered after write", backups=backups, metadata=meta)
