"""
L0 Data — Developer tool registry.

Static catalog of the tools ``codex-1up`` installs.  Defined once at
import time, never mutated, looked up by id.  Order matters: listing and
status output follow this order.
"""

from __future__ import annotations

from codexup.core.models.tool import ToolDefinition


def _same_everywhere(pkg: str) -> dict[str, tuple[str, ...]]:
    return {pm: (pkg,) for pm in ("brew", "apt", "dnf", "pacman", "zypper")}


TOOL_DEFS: tuple[ToolDefinition, ...] = (
    ToolDefinition(id="rg", label="ripgrep", bins=("rg",), packages=_same_everywhere("ripgrep")),
    ToolDefinition(
        id="fd",
        label="fd",
        bins=("fd", "fdfind"),
        packages={
            "brew": ("fd",),
            "apt": ("fd-find",),
            "dnf": ("fd-find",),
            "pacman": ("fd",),
            "zypper": ("fd",),
        },
    ),
    ToolDefinition(id="fzf", label="fzf", bins=("fzf",), packages=_same_everywhere("fzf")),
    ToolDefinition(id="jq", label="jq", bins=("jq",), packages=_same_everywhere("jq")),
    ToolDefinition(id="yq", label="yq", bins=("yq",), packages=_same_everywhere("yq")),
    ToolDefinition(
        id="ast-grep",
        label="ast-grep",
        bins=("ast-grep", "sg"),
        packages=_same_everywhere("ast-grep"),
    ),
    ToolDefinition(id="bat", label="bat", bins=("bat", "batcat"), packages=_same_everywhere("bat")),
    ToolDefinition(id="git", label="git", bins=("git",), packages=_same_everywhere("git")),
    ToolDefinition(
        id="git-delta",
        label="git-delta",
        bins=("delta",),
        packages=_same_everywhere("git-delta"),
    ),
    ToolDefinition(
        id="gh",
        label="GitHub CLI",
        bins=("gh",),
        packages={
            "brew": ("gh",),
            "apt": ("gh",),
            "dnf": ("gh",),
            "pacman": ("github-cli",),
            "zypper": ("gh",),
        },
    ),
)

_TOOLS_BY_ID: dict[str, ToolDefinition] = {t.id: t for t in TOOL_DEFS}

# Debian/Ubuntu rename some binaries; a ~/.local/bin symlink restores the
# usual name.  (distro binary, expected name)
TOOL_ALIASES: dict[str, tuple[str, str]] = {
    "fd": ("fdfind", "fd"),
    "bat": ("batcat", "bat"),
}


def list_tools() -> list[ToolDefinition]:
    """All known tools in registry order."""
    return list(TOOL_DEFS)


def is_known_tool(tool_id: str) -> bool:
    return tool_id in _TOOLS_BY_ID


def get_tool(tool_id: str) -> ToolDefinition | None:
    return _TOOLS_BY_ID.get(tool_id)


def all_tool_ids() -> list[str]:
    return [t.id for t in TOOL_DEFS]
