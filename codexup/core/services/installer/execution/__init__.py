"""
L4 Execution — subprocess, filesystem and config writes.
Everything here honours dry-run.
"""

from codexup.core.services.installer.execution.backup import (  # noqa: F401
    backup_existing,
)
from codexup.core.services.installer.execution.config_writer import (  # noqa: F401
    write_active_profile,
    write_notify_config,
)
from codexup.core.services.installer.execution.files import (  # noqa: F401
    ensure_symlink,
    read_text,
    remove_path,
    replace_tree,
    write_text,
)
from codexup.core.services.installer.execution.subprocess_runner import (  # noqa: F401
    format_command,
    run_capture,
    run_command,
)
