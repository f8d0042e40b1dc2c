"""
Tool and version models — registry entries and probe results.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PackageManager = Literal["brew", "apt", "dnf", "pacman", "zypper"]
GlobalPm = Literal["pnpm", "npm"]


class ToolDefinition(BaseModel):
    """A developer tool the installer knows how to verify and install.

    ``bins`` are tried in order when checking for the tool (e.g. Debian
    ships fd as ``fdfind``).  A package manager missing from ``packages``
    cannot install the tool.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    label: str = ""
    bins: tuple[str, ...]
    packages: dict[str, tuple[str, ...]] = Field(default_factory=dict)

    def packages_for(self, manager: str) -> tuple[str, ...]:
        return self.packages.get(manager, ())


class ToolStatus(BaseModel):
    """Whether a tool is currently on PATH.  Never persisted."""

    id: str
    installed: bool


class CodexStatus(BaseModel):
    """Installed vs latest version of the Codex CLI.

    ``latest`` is ``None`` when the registry could not be reached; callers
    must treat that as unknown, not as up to date.
    """

    found: bool
    version: str | None = None
    latest: str | None = None
    update_available: bool = False

    @property
    def latest_known(self) -> bool:
        return self.latest is not None

    @property
    def up_to_date(self) -> bool:
        """Confirmed current: both versions known and no update pending."""
        return bool(self.found and self.version and self.latest and not self.update_available)


class GlobalPmResolution(BaseModel):
    """Outcome of probing pnpm/npm for global installs.

    Exactly one of three shapes, built through the class methods:
    ``ready(manager)``, ``misconfigured(manager, reason)`` or ``absent()``.
    """

    state: Literal["ready", "misconfigured", "absent"]
    manager: GlobalPm | None = None
    reason: str = ""
    bin_dir: str | None = None

    @property
    def is_ready(self) -> bool:
        return self.state == "ready"

    @property
    def is_misconfigured(self) -> bool:
        return self.state == "misconfigured"

    @classmethod
    def ready(cls, manager: GlobalPm, *, bin_dir: str | None = None, reason: str = "") -> GlobalPmResolution:
        return cls(state="ready", manager=manager, bin_dir=bin_dir, reason=reason)

    @classmethod
    def misconfigured(cls, manager: GlobalPm, reason: str) -> GlobalPmResolution:
        return cls(state="misconfigured", manager=manager, reason=reason)

    @classmethod
    def absent(cls) -> GlobalPmResolution:
        return cls(state="absent", reason="no-node-pm")
