"""
Domain models — Pydantic types for the installer.

All models are re-exported here for convenient access:

    from codexup.core.models import InstallerOptions, ToolDefinition, StepResult
"""

from codexup.core.models.options import (
    PROFILES,
    InstallerContext,
    InstallerOptions,
    InstallerPaths,
)
from codexup.core.models.skill import BundledSkill, InstalledSkill
from codexup.core.models.step import InstallReport, StepResult
from codexup.core.models.tool import (
    CodexStatus,
    GlobalPmResolution,
    ToolDefinition,
    ToolStatus,
)

__all__ = [
    # options.py
    "InstallerContext",
    "InstallerOptions",
    "InstallerPaths",
    "PROFILES",
    # skill.py
    "BundledSkill",
    "InstalledSkill",
    # step.py
    "InstallReport",
    "StepResult",
    # tool.py
    "CodexStatus",
    "GlobalPmResolution",
    "ToolDefinition",
    "ToolStatus",
]
