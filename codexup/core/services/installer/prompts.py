"""
Interactive prompts used by installer steps.

Thin wrappers over ``click.confirm`` / ``click.prompt``.  Ctrl-C or EOF
(``click.Abort``) returns ``None``, which steps treat as cancellation.
Tests patch these functions rather than click itself.
"""

from __future__ import annotations

import click


def confirm(message: str, *, default: bool = True) -> bool | None:
    try:
        return click.confirm(message, default=default)
    except click.Abort:
        return None


def select(
    message: str,
    choices: list[tuple[str, str]],
    *,
    default: str | None = None,
) -> str | None:
    """Single choice from ``(value, label)`` pairs."""
    for value, label in choices:
        click.echo(f"  {value:<20} {label}")
    try:
        return click.prompt(
            message,
            type=click.Choice([value for value, _ in choices]),
            default=default,
            show_choices=True,
        )
    except click.Abort:
        return None


def multi_select(
    message: str,
    choices: list[tuple[str, str]],
    *,
    default_all: bool = True,
) -> list[str] | None:
    """Comma-separated choice of any number of ``(value, label)`` pairs."""
    values = [value for value, _ in choices]
    for value, label in choices:
        click.echo(f"  {value:<20} {label}")
    while True:
        try:
            raw = click.prompt(
                f"{message} (comma-separated, blank for none)",
                default=",".join(values) if default_all else "",
                show_default=default_all,
            )
        except click.Abort:
            return None
        picked = [p.strip() for p in raw.split(",") if p.strip()]
        unknown = [p for p in picked if p not in values]
        if not unknown:
            return picked
        click.secho(f"Unknown: {', '.join(unknown)}", fg="yellow", err=True)
