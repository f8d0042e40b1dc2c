"""
L1 Domain — pure functions: config patching, versions, backup names.
No I/O, no subprocess.
"""

from codexup.core.services.installer.domain.backup_naming import (  # noqa: F401
    backup_path_for,
)
from codexup.core.services.installer.domain.config_patch import (  # noqa: F401
    notify_config_satisfied,
    patch_notify_config,
    set_root_profile,
)
from codexup.core.services.installer.domain.frontmatter import (  # noqa: F401
    parse_skill_frontmatter,
)
from codexup.core.services.installer.domain.versions import (  # noqa: F401
    extract_version,
    is_newer,
    parse_semver,
)
