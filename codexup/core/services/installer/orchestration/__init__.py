"""
L5 Orchestration — installer steps and the pipeline that runs them.
"""

from codexup.core.services.installer.orchestration.agents import (  # noqa: F401
    write_global_agents,
    write_repo_agents,
)
from codexup.core.services.installer.orchestration.codex_cli import (  # noqa: F401
    install_codex_cli,
)
from codexup.core.services.installer.orchestration.config_steps import (  # noqa: F401
    ensure_config,
    ensure_notify_hook,
)
from codexup.core.services.installer.orchestration.node import ensure_node  # noqa: F401
from codexup.core.services.installer.orchestration.orchestrator import (  # noqa: F401
    INSTALL_STEPS,
    run_install,
)
from codexup.core.services.installer.orchestration.self_update import (  # noqa: F401
    check_self_update,
    run_self_update,
)
from codexup.core.services.installer.orchestration.skills import (  # noqa: F401
    install_skills,
    list_bundled_skills,
    list_installed_skills,
    remove_skill,
)
from codexup.core.services.installer.orchestration.tools import (  # noqa: F401
    ensure_tools,
    parse_tool_selection,
)
