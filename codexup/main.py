"""
codex-1up — CLI entrypoint.

Usage:
    codex-1up --help
    codex-1up install --yes
    codex-1up status
    codex-1up tools list
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from codexup import __version__
from codexup.core.observability.logging_config import setup_logging
from codexup.core.services.installer.errors import InstallerError, NotFoundError
from codexup.ui.cli.context import build_context, emit_json, fail, settings_path_option

_YES_NO = click.Choice(["yes", "no"])


@click.group()
@click.version_option(version=__version__, prog_name="codex-1up")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Installer settings YAML (default: ~/.codex-1up/settings.yml).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    settings_path: str | None,
) -> None:
    """codex-1up — install and configure the Codex CLI and its tooling."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["settings_path"] = settings_path_option(settings_path)

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("CODEXUP_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("CODEXUP_LOG_FILE"),
        log_file_level=os.environ.get("CODEXUP_LOG_FILE_LEVEL"),
    )


# ── install ─────────────────────────────────────────────────────


def _selection(raw: str | None) -> tuple[str | None, tuple[str, ...] | None]:
    """Map an ``all`` / ``skip`` / id-list flag to ``(mode, selected)``."""
    if raw is None:
        return None, None
    text = raw.strip().lower()
    if text in ("all", "skip"):
        return text, None
    return "select", tuple(p.strip() for p in text.split(",") if p.strip())


_STATUS_STYLE = {
    "verified": ("✅", "green"),
    "planned": ("📝", "cyan"),
    "skipped": ("⏭️ ", "white"),
    "failed": ("❌", "red"),
}


@cli.command()
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Non-interactive; accept safe defaults.")
@click.option("--dry-run", is_flag=True, help="Print actions without making changes.")
@click.option("--skip-confirmation", is_flag=True, help="Skip prompts.")
@click.option("--profile", type=click.Choice(["balanced", "safe", "minimal", "yolo"]), default=None,
              help="Active profile to write into config.toml.")
@click.option("--overwrite-config", type=_YES_NO, default=None,
              help="Replace an existing config.toml with the template (backup kept).")
@click.option("--tools", "tools", default=None, metavar="all|skip|ID[,ID...]",
              help="Developer tools to install.")
@click.option("--codex-cli", "codex_cli", type=_YES_NO, default=None, help="Install/update the Codex CLI.")
@click.option("--install-node", type=click.Choice(["nvm", "brew", "skip"]), default=None,
              help="How to install Node.js when missing.")
@click.option("--notify", type=_YES_NO, default=None, help="Install (yes) or skip (no) the notify hook.")
@click.option("--global-agents",
              type=click.Choice(["create-default", "overwrite-default", "append-default", "skip"]),
              default=None, help="What to do with ~/.codex/AGENTS.md.")
@click.option("--skills", "skills", default=None, metavar="all|skip|ID[,ID...]",
              help="Bundled skills to install.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(
    ctx: click.Context,
    assume_yes: bool,
    dry_run: bool,
    skip_confirmation: bool,
    profile: str | None,
    overwrite_config: str | None,
    tools: str | None,
    codex_cli: str | None,
    install_node: str | None,
    notify: str | None,
    global_agents: str | None,
    skills: str | None,
    as_json: bool,
) -> None:
    """Install and configure Codex CLI, tools, config, hook, skills and AGENTS.md."""
    from codexup.core.observability.logging_config import attach_transcript, detach_transcript
    from codexup.core.services.installer.domain.backup_naming import backup_timestamp
    from codexup.core.services.installer.orchestration.orchestrator import run_install
    from codexup.core.services.installer.orchestration.tools import parse_tool_selection
    from codexup.core.use_cases.summary import build_install_summary

    tools_mode, tools_selected = _selection(tools)
    if tools_mode == "select":
        try:
            tools_selected = tuple(parse_tool_selection(",".join(tools_selected or ())) or ())
        except NotFoundError as e:
            fail(e)
    skills_mode, skills_selected = _selection(skills)

    installer_ctx = build_context(
        ctx,
        as_json=as_json,
        profile=profile,
        overwrite_config=overwrite_config,
        install_tools=tools_mode,
        tools_selected=tools_selected,
        install_codex_cli=codex_cli,
        install_node=install_node,
        notify=notify,
        global_agents=global_agents,
        skills=skills_mode,
        skills_selected=skills_selected,
        dry_run=dry_run,
        assume_yes=assume_yes,
        skip_confirmation=skip_confirmation,
    )

    handler = None
    if not dry_run:
        log_file = installer_ctx.paths.logs_dir / f"install-{backup_timestamp()}.log"
        handler = attach_transcript(log_file)
        installer_ctx.logger.info(f"Logging to {log_file}")
    try:
        report = run_install(installer_ctx)
    finally:
        if handler is not None:
            detach_transcript(handler)

    summary = build_install_summary(installer_ctx.paths)
    if as_json:
        emit_json({**report.to_dict(), "summary": summary.to_dict()}, installer_ctx)
        sys.exit(0 if report.ok else 1)

    click.echo()
    click.secho("Steps:", bold=True)
    for result in report.results:
        icon, color = _STATUS_STYLE[result.status]
        click.secho(f"   {icon} {result.step:<10} {result.status:<9} {result.message}", fg=color)
        for backup in result.backups:
            click.echo(f"      backup: {backup}")
    for line in summary.lines():
        click.echo(line)
    sys.exit(0 if report.ok else 1)


# ── update ──────────────────────────────────────────────────────


@cli.command()
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Apply the update without prompting.")
@click.option("--dry-run", is_flag=True, help="Print actions without making changes.")
@click.option("--skip-confirmation", is_flag=True, help="Skip prompts.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def update(ctx: click.Context, assume_yes: bool, dry_run: bool, skip_confirmation: bool, as_json: bool) -> None:
    """Check for and apply codex-1up updates."""
    from codexup.core.services.installer.orchestration.self_update import (
        check_self_update,
        run_self_update,
    )

    installer_ctx = build_context(
        ctx,
        as_json=as_json,
        use_settings=False,
        dry_run=dry_run,
        assume_yes=assume_yes,
        skip_confirmation=skip_confirmation,
    )
    status = check_self_update()
    outcome = run_self_update(installer_ctx, status)

    if as_json:
        emit_json({"outcome": outcome, **status.model_dump()}, installer_ctx)
    sys.exit(1 if outcome == "error" else 0)


# ── status / doctor ─────────────────────────────────────────────


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--offline", is_flag=True, help="Do not query the registry for the latest Codex CLI.")
def status(as_json: bool, offline: bool) -> None:
    """Show Codex CLI, tools, config and hook status."""
    from codexup.core.use_cases.status import get_status

    result = get_status(check_latest=not offline)

    if as_json:
        emit_json(result.to_dict())
        return

    codex = result.codex
    click.secho("\n🤖 Codex CLI", fg="cyan", bold=True)
    if not codex.found:
        click.secho("   ❌ not installed", fg="red")
    else:
        click.echo(f"   version: {codex.version or 'unknown'}")
        if codex.latest is None:
            click.echo("   latest:  unknown")
        elif codex.update_available:
            click.secho(f"   latest:  {codex.latest} (update available)", fg="yellow")
        else:
            click.secho(f"   latest:  {codex.latest} (up to date)", fg="green")

    click.secho("\n🧰 Tools", fg="cyan", bold=True)
    for tool in result.tools:
        mark = click.style("✓", fg="green") if tool.installed else click.style("✖", fg="red")
        click.echo(f"   {mark} {tool.id}")
    click.echo(f"   package manager: {result.system_package_manager}")
    pm = result.global_pm
    if pm is not None:
        label = pm.manager or "none"
        extra = f" ({pm.reason})" if pm.is_misconfigured else ""
        click.echo(f"   global node pm:  {label} [{pm.state}]{extra}")

    cfg = result.config
    click.secho("\n⚙️  Config", fg="cyan", bold=True)
    if cfg is None or not cfg.exists:
        click.echo("   not found")
    else:
        click.echo(f"   {cfg.path}")
        click.echo(f"   profile:  {cfg.profile or 'unset'}")
        if cfg.profiles:
            click.echo(f"   profiles: {', '.join(cfg.profiles)}")
    click.echo(f"   notify hook: {'registered' if result.notify_registered else 'not registered'}")
    if result.skills:
        click.echo(f"   skills: {', '.join(s.id for s in result.skills)}")
    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def doctor(as_json: bool) -> None:
    """Run environment checks and suggest fixes."""
    from codexup.core.use_cases.doctor import run_doctor

    result = run_doctor()

    if as_json:
        emit_json(result.to_dict())
        sys.exit(0 if result.ok else 1)

    for check in result.checks:
        if check.ok:
            click.secho(f"✅ {check.name}", fg="green", nl=False)
        else:
            click.secho(f"❌ {check.name}", fg="red", nl=False)
        click.echo(f"  {check.detail}" if check.detail else "")
        if check.hint:
            click.echo(f"   → {check.hint}")
    sys.exit(0 if result.ok else 1)


# ── agents ──────────────────────────────────────────────────────


@cli.command()
@click.option("--path", "target", required=True, type=click.Path(), help="Target repo directory or file.")
@click.option("--template", default="default", show_default=True, help="AGENTS template name.")
@click.option("--dry-run", is_flag=True, help="Print actions without making changes.")
@click.pass_context
def agents(ctx: click.Context, target: str, template: str, dry_run: bool) -> None:
    """Write an AGENTS.md template into a repository."""
    from codexup.core.services.installer.orchestration.agents import write_repo_agents

    installer_ctx = build_context(ctx, use_settings=False, dry_run=dry_run)
    try:
        dest = write_repo_agents(
            Path(target).expanduser(),
            installer_ctx.paths.templates_dir,
            template=template,
            dry_run=dry_run,
            log=installer_ctx.logger,
        )
    except (InstallerError, OSError) as e:
        fail(e)
    if not dry_run:
        click.echo(f"Wrote {dest}")


# ── Register sub-command groups from codexup/ui/cli/ ─────────────

from codexup.ui.cli.config import config  # noqa: E402
from codexup.ui.cli.skills import skills  # noqa: E402
from codexup.ui.cli.tools import tools  # noqa: E402

cli.add_command(config)
cli.add_command(skills)
cli.add_command(tools)


if __name__ == "__main__":
    cli()
