"""
L3 Detection — Tool presence.

PATH lookups only; nothing is executed.
"""

from __future__ import annotations

import concurrent.futures
import logging
import shutil

from codexup.core.models.tool import ToolDefinition, ToolStatus
from codexup.core.services.installer.data.tools import TOOL_DEFS

logger = logging.getLogger(__name__)

_MAX_WORKERS = 8


def is_command_available(name: str) -> bool:
    return shutil.which(name) is not None


def find_tool_bin(tool: ToolDefinition) -> str | None:
    """First of ``tool.bins`` found on PATH, in declaration order."""
    for name in tool.bins:
        if is_command_available(name):
            return name
    return None


def is_tool_installed(tool: ToolDefinition) -> bool:
    return find_tool_bin(tool) is not None


def get_all_statuses(tools: tuple[ToolDefinition, ...] | list[ToolDefinition] | None = None) -> list[ToolStatus]:
    """Presence of every tool, in the order given (registry order by default).

    Lookups run in a thread pool; ``Executor.map`` keeps result order.
    """
    tools = list(TOOL_DEFS if tools is None else tools)
    if not tools:
        return []

    with concurrent.futures.ThreadPoolExecutor(
        max_workers=min(_MAX_WORKERS, len(tools)),
    ) as pool:
        installed = list(pool.map(is_tool_installed, tools))

    statuses = [ToolStatus(id=t.id, installed=ok) for t, ok in zip(tools, installed)]
    logger.debug(
        "tool status: %s",
        ", ".join(f"{s.id}={'yes' if s.installed else 'no'}" for s in statuses),
    )
    return statuses
