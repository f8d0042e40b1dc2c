"""
Installer error taxonomy.

Probes never raise: they return None/False and log.  The classes below
are raised by steps and user-requested actions and reach the CLI layer,
which reports them and exits non-zero.
"""

from __future__ import annotations

from collections.abc import Iterable


class InstallerError(Exception):
    """Base class for installer failures."""


class CommandError(InstallerError):
    """An external command could not be run or reported failure."""

    def __init__(self, message: str, *, command: list[str] | None = None) -> None:
        super().__init__(message)
        self.command = command or []


class SpawnError(CommandError):
    """The program is missing or cannot be executed."""


class NonZeroExitError(CommandError):
    """The program ran and exited with a non-zero status."""

    def __init__(self, code: int, *, command: list[str] | None = None) -> None:
        super().__init__(f"Command failed ({code}): {' '.join(command or [])}", command=command)
        self.code = code


class NodeInstallError(InstallerError):
    """Node.js is still missing after an install attempt."""


class NotFoundError(InstallerError):
    """A user-supplied id does not name a known item."""

    kind = "item"

    def __init__(self, unknown: Iterable[str], known: Iterable[str]) -> None:
        self.unknown = list(unknown)
        self.known = list(known)
        super().__init__(
            f"Unknown {self.kind} id(s): {', '.join(self.unknown)}. "
            f"Known: {', '.join(self.known) or 'none'}"
        )


class UnknownToolError(NotFoundError):
    kind = "tool"


class SkillNotFoundError(NotFoundError):
    kind = "skill"


class MissingTemplateError(InstallerError):
    """A bundled template file is not where the package expects it."""
