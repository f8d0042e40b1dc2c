"""
CLI commands for developer tools.

Thin wrappers over ``codexup.core.services.installer``.
"""

from __future__ import annotations

import sys

import click

from codexup.ui.cli.context import build_context, emit_json, fail


@click.group()
def tools() -> None:
    """Developer tools — list, install, doctor."""


@tools.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def list_cmd(as_json: bool) -> None:
    """List known tools and installation status."""
    from codexup.core.services.installer.data.tools import list_tools
    from codexup.core.services.installer.detection.tool_status import get_all_statuses

    defs = {t.id: t for t in list_tools()}
    statuses = get_all_statuses()

    if as_json:
        emit_json({"tools": [
            {**s.model_dump(), "label": defs[s.id].label, "bins": list(defs[s.id].bins)}
            for s in statuses
        ]})
        return

    for s in statuses:
        mark = click.style("✓", fg="green") if s.installed else click.style("✖", fg="red")
        click.echo(f"{s.id} {mark}")


@tools.command("install")
@click.argument("tool_ids")
@click.option("--dry-run", is_flag=True, help="Print actions without making changes.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install_cmd(ctx: click.Context, tool_ids: str, dry_run: bool, as_json: bool) -> None:
    """Install tools by id (comma-separated) or 'all'."""
    from codexup.core.services.installer.errors import NotFoundError
    from codexup.core.services.installer.orchestration.orchestrator import run_step
    from codexup.core.services.installer.orchestration.tools import (
        ensure_tools,
        parse_tool_selection,
    )

    if not tool_ids.strip():
        raise click.BadParameter("Tool id required", param_hint="TOOL_IDS")
    try:
        selected = parse_tool_selection(tool_ids)
    except NotFoundError as e:
        fail(e)

    installer_ctx = build_context(
        ctx,
        as_json=as_json,
        use_settings=False,
        install_tools="all" if selected is None else "select",
        tools_selected=tuple(selected or ()),
        dry_run=dry_run,
    )
    result = run_step(installer_ctx, "tools", ensure_tools)

    if as_json:
        emit_json(result.model_dump(), installer_ctx)
    sys.exit(0 if result.ok else 1)


@tools.command("doctor")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def doctor_cmd(as_json: bool) -> None:
    """Show missing tools and hints."""
    from codexup.core.services.installer.data.tools import all_tool_ids
    from codexup.core.services.installer.detection.tool_status import get_all_statuses

    missing = [s.id for s in get_all_statuses() if not s.installed]

    if as_json:
        emit_json({"missing": missing, "known": all_tool_ids()})
        return

    if not missing:
        click.secho("All tools are installed.", fg="green")
        return
    click.echo(f"Missing tools: {', '.join(missing)}")
    click.echo(f"Known tools: {', '.join(all_tool_ids())}")
    click.echo(f"Install with: codex-1up tools install {','.join(missing)}")
