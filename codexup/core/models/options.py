"""
Installer options and context — the read-only inputs of every step.

``InstallerOptions`` collects every user- or flag-supplied choice.  It is
built once per invocation (settings file merged under CLI flags) and is
frozen afterwards.  ``InstallerContext`` pairs the options with a logger
and the resolved filesystem locations.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from codexup.core.observability.reporter import NULL_LOGGER, InstallLogger

Profile = Literal["balanced", "safe", "minimal", "yolo"]
YesNo = Literal["yes", "no"]
SelectMode = Literal["all", "select", "skip"]
GlobalAgentsMode = Literal["create-default", "overwrite-default", "append-default", "skip"]
NodeInstallMethod = Literal["nvm", "brew", "skip"]

PROFILES: tuple[str, ...] = ("balanced", "safe", "minimal", "yolo")


class InstallerOptions(BaseModel):
    """Every choice that shapes an install run.

    ``None`` on a yes/no style field means "not decided": the step asks
    in an interactive session and falls back to its default otherwise.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    profile: Profile | None = None
    overwrite_config: YesNo | None = None

    install_tools: SelectMode = "all"
    tools_selected: tuple[str, ...] = ()

    install_codex_cli: YesNo | None = None
    install_node: NodeInstallMethod = "nvm"

    notify: YesNo | None = None
    global_agents: GlobalAgentsMode | None = None

    skills: SelectMode = "skip"
    skills_selected: tuple[str, ...] = ()

    dry_run: bool = False
    assume_yes: bool = False
    skip_confirmation: bool = False

    def with_overrides(self, **changes: object) -> InstallerOptions:
        """Return a copy with ``changes`` applied (``None`` values ignored)."""
        data = self.model_dump()
        data.update({k: v for k, v in changes.items() if v is not None})
        return InstallerOptions.model_validate(data)


class InstallerPaths(BaseModel):
    """Filesystem locations resolved once per invocation."""

    model_config = ConfigDict(frozen=True)

    home_dir: Path = Field(default_factory=Path.home)
    root_dir: Path = Field(default_factory=lambda: Path(__file__).resolve().parents[2])
    log_dir: Path | None = None

    @property
    def codex_dir(self) -> Path:
        return self.home_dir / ".codex"

    @property
    def config_path(self) -> Path:
        return self.codex_dir / "config.toml"

    @property
    def notify_path(self) -> Path:
        return self.codex_dir / "notify.sh"

    @property
    def agents_path(self) -> Path:
        return self.codex_dir / "AGENTS.md"

    @property
    def skills_dir(self) -> Path:
        return self.codex_dir / "skills"

    @property
    def templates_dir(self) -> Path:
        return self.root_dir / "templates"

    @property
    def logs_dir(self) -> Path:
        return self.log_dir or (self.home_dir / ".codex-1up" / "logs")


@dataclass(frozen=True)
class InstallerContext:
    """Options, logger and paths handed to every installer step."""

    options: InstallerOptions = field(default_factory=InstallerOptions)
    logger: InstallLogger = NULL_LOGGER
    paths: InstallerPaths = field(default_factory=InstallerPaths)
    # Forces interactive/non-interactive; None = decide from the terminal.
    interactive_override: bool | None = None

    @property
    def dry_run(self) -> bool:
        return self.options.dry_run

    @property
    def interactive(self) -> bool:
        """Whether steps may prompt the user."""
        if self.interactive_override is not None:
            return self.interactive_override
        opts = self.options
        return (
            sys.stdout.isatty()
            and not opts.dry_run
            and not opts.skip_confirmation
            and not opts.assume_yes
        )
