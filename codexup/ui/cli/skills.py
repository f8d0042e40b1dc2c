"""
CLI commands for bundled Codex skills.
"""

from __future__ import annotations

import sys

import click

from codexup.ui.cli.context import build_context, emit_json, fail, split_ids


@click.group()
def skills() -> None:
    """Codex skills — list, install, remove."""


@skills.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def list_cmd(as_json: bool) -> None:
    """List bundled skills and what is installed."""
    from codexup.core.models.options import InstallerPaths
    from codexup.core.services.installer.orchestration.skills import (
        list_bundled_skills,
        list_installed_skills,
    )

    paths = InstallerPaths()
    bundled = list_bundled_skills(paths.templates_dir)
    installed = list_installed_skills(paths.skills_dir)
    installed_ids = {s.id for s in installed}

    if as_json:
        emit_json({
            "bundled": [{"id": s.id, "name": s.name, "description": s.description} for s in bundled],
            "installed": [{"id": s.id, "path": str(s.path)} for s in installed],
        })
        return

    click.secho("Bundled skills:", bold=True)
    if not bundled:
        click.echo("   (none)")
    for s in bundled:
        mark = click.style("✓", fg="green") if s.id in installed_ids else " "
        click.echo(f"   {mark} {s.id:<24} {s.description}")

    extra = [s for s in installed if s.id not in {b.id for b in bundled}]
    if extra:
        click.secho("Other installed skills:", bold=True)
        for s in extra:
            click.echo(f"     {s.id:<24} {s.path}")


@skills.command("install")
@click.argument("skill_ids")
@click.option("--dry-run", is_flag=True, help="Print actions without making changes.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install_cmd(ctx: click.Context, skill_ids: str, dry_run: bool, as_json: bool) -> None:
    """Install bundled skills by id (comma-separated) or 'all'."""
    from codexup.core.services.installer.errors import NotFoundError
    from codexup.core.services.installer.orchestration.skills import install_skills

    ids = split_ids(skill_ids)
    if not ids:
        raise click.BadParameter("Skill id required", param_hint="SKILL_IDS")
    install_all = ids == ["all"]

    installer_ctx = build_context(
        ctx,
        as_json=as_json,
        use_settings=False,
        skills="all" if install_all else "select",
        skills_selected=() if install_all else tuple(ids),
        dry_run=dry_run,
    )
    try:
        result = install_skills(installer_ctx)
    except NotFoundError as e:
        fail(e)

    if as_json:
        emit_json(result.model_dump(), installer_ctx)
    sys.exit(0 if result.ok else 1)


@skills.command("remove")
@click.argument("skill_id")
@click.option("--dry-run", is_flag=True, help="Print actions without making changes.")
@click.pass_context
def remove_cmd(ctx: click.Context, skill_id: str, dry_run: bool) -> None:
    """Remove an installed skill (a backup is kept)."""
    from codexup.core.services.installer.errors import NotFoundError
    from codexup.core.services.installer.orchestration.skills import remove_skill

    installer_ctx = build_context(ctx, use_settings=False, dry_run=dry_run)
    try:
        remove_skill(installer_ctx, skill_id.strip())
    except (NotFoundError, OSError) as e:
        fail(e)
