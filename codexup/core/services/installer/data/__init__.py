"""
L0 Data — static catalogs and constants.  No I/O.
"""

from codexup.core.services.installer.data.tools import (  # noqa: F401
    TOOL_ALIASES,
    TOOL_DEFS,
    all_tool_ids,
    get_tool,
    is_known_tool,
    list_tools,
)
