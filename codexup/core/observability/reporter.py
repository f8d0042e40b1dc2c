"""
Installer loggers — user-facing progress output.

Installer steps talk to an ``InstallLogger`` with five verbs:
``log`` (plain/dry-run lines), ``info``, ``ok``, ``warn`` and ``err``.

``ConsoleLogger`` prints with click and mirrors every line into the
transcript logger.  ``NullLogger`` is the default everywhere a logger
is optional, so call sites never check for ``None``.
"""

from __future__ import annotations

import logging
from typing import Protocol

import click

from codexup.core.observability.logging_config import TRANSCRIPT_LOGGER

_transcript = logging.getLogger(TRANSCRIPT_LOGGER)
# Lines already reach the terminal through click; keep them off the root handlers.
_transcript.propagate = False
_transcript.addHandler(logging.NullHandler())


class InstallLogger(Protocol):
    """The logging capability threaded through installer steps."""

    def log(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def ok(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def err(self, message: str) -> None: ...


class NullLogger:
    """Logger that discards everything."""

    def log(self, message: str) -> None:
        pass

    def info(self, message: str) -> None:
        pass

    def ok(self, message: str) -> None:
        pass

    def warn(self, message: str) -> None:
        pass

    def err(self, message: str) -> None:
        pass


NULL_LOGGER = NullLogger()


class ConsoleLogger:
    """Print installer progress to the terminal.

    Args:
        quiet: Suppress ``log``/``info`` lines on the terminal.  They are
            still written to the transcript.
    """

    def __init__(self, *, quiet: bool = False) -> None:
        self.quiet = quiet

    def log(self, message: str) -> None:
        _transcript.info(message)
        if not self.quiet:
            click.echo(message)

    def info(self, message: str) -> None:
        _transcript.info(message)
        if not self.quiet:
            click.secho(f"ℹ️  {message}", fg="cyan")

    def ok(self, message: str) -> None:
        _transcript.info(message)
        click.secho(f"✅ {message}", fg="green")

    def warn(self, message: str) -> None:
        _transcript.warning(message)
        click.secho(f"⚠️  {message}", fg="yellow", err=True)

    def err(self, message: str) -> None:
        _transcript.error(message)
        click.secho(f"❌ {message}", fg="red", err=True)


class RecordingLogger:
    """Collects ``(level, message)`` pairs; used by ``--json`` output."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def log(self, message: str) -> None:
        self.records.append(("log", message))

    def info(self, message: str) -> None:
        self.records.append(("info", message))

    def ok(self, message: str) -> None:
        self.records.append(("ok", message))

    def warn(self, message: str) -> None:
        self.records.append(("warn", message))

    def err(self, message: str) -> None:
        self.records.append(("err", message))

    def messages(self, level: str | None = None) -> list[str]:
        return [m for lvl, m in self.records if level is None or lvl == level]
