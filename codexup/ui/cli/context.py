"""
Shared CLI plumbing — build an ``InstallerContext`` from click state.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, NoReturn

import click
from pydantic import ValidationError

from codexup.core.config.loader import ConfigError, build_options, load_settings
from codexup.core.models.options import InstallerContext, InstallerPaths
from codexup.core.observability.reporter import ConsoleLogger, RecordingLogger


def build_context(
    ctx: click.Context,
    *,
    as_json: bool = False,
    use_settings: bool = True,
    **flags: Any,
) -> InstallerContext:
    """Merge settings file and CLI flags into a ready-to-use context.

    ``--json`` swaps the console logger for a recording one so stdout
    carries only the JSON document.
    """
    obj = ctx.obj or {}
    settings: dict[str, Any] = {}
    if use_settings:
        try:
            settings = load_settings(obj.get("settings_path"))
        except ConfigError as e:
            raise click.ClickException(str(e)) from e

    try:
        options = build_options(settings, **flags)
    except ValidationError as e:
        raise click.BadParameter(str(e)) from e

    logger = RecordingLogger() if as_json else ConsoleLogger(quiet=obj.get("quiet", False))
    return InstallerContext(options=options, logger=logger, paths=InstallerPaths())


def emit_json(payload: dict, installer_ctx: InstallerContext | None = None) -> None:
    """Print ``payload`` (plus recorded log lines) as JSON on stdout."""
    if installer_ctx is not None and isinstance(installer_ctx.logger, RecordingLogger):
        payload = {**payload, "log": [{"level": lvl, "message": msg} for lvl, msg in installer_ctx.logger.records]}
    click.echo(json.dumps(payload, indent=2, default=str))


def fail(error: Exception | str) -> NoReturn:
    """Report a user-facing error and exit 1."""
    click.secho(f"❌ {error}", fg="red", err=True)
    sys.exit(1)


def split_ids(raw: str) -> list[str]:
    return [p.strip() for p in raw.split(",") if p.strip()]


def settings_path_option(value: str | None) -> Path | None:
    return Path(value).expanduser() if value else None
