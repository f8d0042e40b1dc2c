"""
Installer service — package re-exports.

Each symbol lives in its single-responsibility module inside the
appropriate onion layer (data → domain → detection → execution →
orchestration)::

    from codexup.core.services.installer import run_install
"""

# ── L0: Data ──
from codexup.core.services.installer.data.tools import (  # noqa: F401
    TOOL_DEFS,
    all_tool_ids,
    get_tool,
    is_known_tool,
    list_tools,
)

# ── L1: Domain ──
from codexup.core.services.installer.domain.backup_naming import backup_path_for  # noqa: F401
from codexup.core.services.installer.domain.config_patch import (  # noqa: F401
    patch_notify_config,
    set_root_profile,
)
from codexup.core.services.installer.domain.versions import is_newer  # noqa: F401

# ── L3: Detection ──
from codexup.core.services.installer.detection.codex_status import get_codex_status  # noqa: F401
from codexup.core.services.installer.detection.package_manager import (  # noqa: F401
    detect_system_package_manager,
    probe_global_runtime_pm,
    resolve_global_runtime_pm,
)
from codexup.core.services.installer.detection.tool_status import (  # noqa: F401
    get_all_statuses,
    is_tool_installed,
)

# ── L4: Execution ──
from codexup.core.services.installer.execution.subprocess_runner import run_command  # noqa: F401

# ── L5: Orchestration ──
from codexup.core.services.installer.orchestration.orchestrator import run_install  # noqa: F401

# ── Errors ──
from codexup.core.services.installer.errors import (  # noqa: F401
    CommandError,
    InstallerError,
    NodeInstallError,
    NonZeroExitError,
    NotFoundError,
    SkillNotFoundError,
    SpawnError,
    UnknownToolError,
)
