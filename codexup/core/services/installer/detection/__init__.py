"""
L3 Detection — read-only probes: PATH lookups, versions, package managers.
"""

from codexup.core.services.installer.detection.codex_status import (  # noqa: F401
    get_codex_status,
    get_installed_codex_version,
)
from codexup.core.services.installer.detection.package_manager import (  # noqa: F401
    detect_system_package_manager,
    privileged_command,
    probe_global_runtime_pm,
    resolve_global_runtime_pm,
)
from codexup.core.services.installer.detection.registry import (  # noqa: F401
    get_latest_npm_version,
    get_latest_pypi_version,
)
from codexup.core.services.installer.detection.tool_status import (  # noqa: F401
    get_all_statuses,
    is_command_available,
    is_tool_installed,
)
