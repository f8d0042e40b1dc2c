"""
CLI commands for ~/.codex/config.toml.
"""

from __future__ import annotations

import sys

import click

from codexup.ui.cli.context import build_context, emit_json, fail


@click.group()
def config() -> None:
    """Codex config — profiles, active profile, notify hook."""


@config.command("profiles")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def profiles(as_json: bool) -> None:
    """List profiles declared in config.toml."""
    from codexup.core.models.options import InstallerPaths
    from codexup.core.use_cases.summary import read_config_summary

    summary = read_config_summary(InstallerPaths().config_path)

    if as_json:
        emit_json(summary.to_dict())
        sys.exit(0 if summary.exists and not summary.error else 1)

    if not summary.exists:
        fail(f"Config not found: {summary.path}")
    if summary.error:
        fail(f"Cannot parse {summary.path}: {summary.error}")

    if not summary.profiles:
        click.echo("No profiles defined.")
        return
    for name in summary.profiles:
        marker = click.style(" (active)", fg="green") if name == summary.profile else ""
        click.echo(f"{name}{marker}")


@config.command("set-profile")
@click.argument("name", type=click.Choice(["balanced", "safe", "minimal", "yolo"]))
@click.option("--dry-run", is_flag=True, help="Print actions without making changes.")
@click.pass_context
def set_profile(ctx: click.Context, name: str, dry_run: bool) -> None:
    """Persist the active profile in config.toml (backup kept)."""
    from codexup.core.services.installer.execution.config_writer import write_active_profile

    installer_ctx = build_context(ctx, use_settings=False, dry_run=dry_run)
    cfg = installer_ctx.paths.config_path
    if not cfg.exists():
        fail(f"Config not found: {cfg} (run codex-1up install first)")

    try:
        outcome = write_active_profile(cfg, name, dry_run=dry_run, log=installer_ctx.logger)
    except OSError as e:
        fail(e)
    if dry_run:
        return
    if outcome["changed"]:
        installer_ctx.logger.ok(f"Active profile set to {name}")
    else:
        installer_ctx.logger.info(f"Active profile already {name}")


@config.command("notify")
@click.option("--dry-run", is_flag=True, help="Print actions without making changes.")
@click.option("--overwrite", is_flag=True, help="Replace an existing notify.sh (backup kept).")
@click.pass_context
def notify(ctx: click.Context, dry_run: bool, overwrite: bool) -> None:
    """Install the notify hook and register it in config.toml."""
    from codexup.core.services.installer.orchestration.orchestrator import run_step
    from codexup.core.services.installer.orchestration.config_steps import ensure_notify_hook

    installer_ctx = build_context(
        ctx,
        use_settings=False,
        notify="yes" if overwrite else None,
        dry_run=dry_run,
    )
    result = run_step(installer_ctx, "notify", ensure_notify_hook)
    sys.exit(0 if result.ok else 1)
