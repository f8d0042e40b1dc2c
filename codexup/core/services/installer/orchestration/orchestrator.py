"""
L5 Orchestration — The install pipeline.

Runs the steps in order.  Each step is idempotent and decides for
itself whether to skip; a failing step is recorded and the pipeline
moves on.  Earlier steps are never rolled back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from codexup.core.models.options import InstallerContext
from codexup.core.models.step import InstallReport, StepResult
from codexup.core.services.installer.errors import InstallerError
from codexup.core.services.installer.orchestration.agents import write_global_agents
from codexup.core.services.installer.orchestration.codex_cli import install_codex_cli
from codexup.core.services.installer.orchestration.config_steps import (
    ensure_config,
    ensure_notify_hook,
)
from codexup.core.services.installer.orchestration.node import ensure_node
from codexup.core.services.installer.orchestration.skills import install_skills
from codexup.core.services.installer.orchestration.tools import ensure_tools

logger = logging.getLogger(__name__)

Step = Callable[[InstallerContext], StepResult]

INSTALL_STEPS: tuple[tuple[str, Step], ...] = (
    ("node", ensure_node),
    ("tools", ensure_tools),
    ("codex-cli", install_codex_cli),
    ("config", ensure_config),
    ("notify", ensure_notify_hook),
    ("skills", install_skills),
    ("agents", write_global_agents),
)


def run_step(ctx: InstallerContext, name: str, step: Step) -> StepResult:
    """Run one step, converting expected failures into a failed result."""
    logger.debug("step %s: start", name)
    try:
        result = step(ctx)
    except (InstallerError, OSError) as e:
        logger.debug("step %s failed", name, exc_info=True)
        ctx.logger.err(f"{name}: {e}")
        result = StepResult.failure(name, str(e))
    logger.debug("step %s: %s", name, result.status)
    return result


def run_install(
    ctx: InstallerContext,
    steps: tuple[tuple[str, Step], ...] = INSTALL_STEPS,
) -> InstallReport:
    """Run every install step and collect the outcomes."""
    report = InstallReport(dry_run=ctx.dry_run)
    for name, step in steps:
        report.results.append(run_step(ctx, name, step))

    if report.failed:
        names = ", ".join(r.step for r in report.failed)
        logger.info("install finished with failures: %s", names)
    return report
