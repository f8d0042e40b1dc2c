"""
L5 Orchestration — Bundled Codex skills.

Skills ship under ``templates/skills/<id>/SKILL.md`` and install into
``~/.codex/skills/<id>``.  An existing skill directory is backed up
before it is replaced or removed.
"""

from __future__ import annotations

import logging
from pathlib import Path

from codexup.core.models.options import InstallerContext
from codexup.core.models.skill import BundledSkill, InstalledSkill
from codexup.core.models.step import StepResult
from codexup.core.services.installer.data.constants import SKILLS_TEMPLATES_DIR
from codexup.core.services.installer.domain.backup_naming import BACKUP_MARKER
from codexup.core.services.installer.domain.frontmatter import parse_skill_frontmatter
from codexup.core.services.installer.errors import SkillNotFoundError
from codexup.core.services.installer.execution.backup import backup_existing
from codexup.core.services.installer.execution.files import read_text, remove_path, replace_tree
from codexup.core.services.installer.prompts import multi_select

logger = logging.getLogger(__name__)

STEP = "skills"


def list_bundled_skills(templates_dir: Path) -> list[BundledSkill]:
    """Skills shipped with the package, sorted by id.

    Directories without a SKILL.md, or whose frontmatter lacks ``name``
    or ``description``, are ignored.
    """
    root = templates_dir / SKILLS_TEMPLATES_DIR
    if not root.is_dir():
        return []

    skills: list[BundledSkill] = []
    for entry in root.iterdir():
        skill_md = entry / "SKILL.md"
        if not entry.is_dir() or not skill_md.is_file():
            continue
        meta = parse_skill_frontmatter(read_text(skill_md))
        if not meta or "name" not in meta or "description" not in meta:
            logger.debug("ignoring skill without name/description: %s", entry)
            continue
        skills.append(BundledSkill(
            id=entry.name,
            name=meta["name"],
            description=meta["description"],
            src_dir=entry,
        ))
    return sorted(skills, key=lambda s: s.id)


def list_installed_skills(skills_dir: Path) -> list[InstalledSkill]:
    """Skill directories under ``skills_dir``; backups are not skills."""
    if not skills_dir.is_dir():
        return []
    return sorted(
        (
            InstalledSkill(id=p.name, path=p)
            for p in skills_dir.iterdir()
            if p.is_dir() and BACKUP_MARKER not in p.name
        ),
        key=lambda s: s.id,
    )


def _select_skills(ctx: InstallerContext, bundled: list[BundledSkill]) -> list[BundledSkill]:
    if ctx.options.skills == "all":
        return bundled

    wanted = [s.strip() for s in ctx.options.skills_selected if s.strip()]
    if not wanted and ctx.interactive:
        wanted = multi_select(
            "Skills to install",
            [(s.id, s.description) for s in bundled],
            default_all=False,
        ) or []

    # Either the directory id or the declared name selects a skill.
    known = {s.id for s in bundled} | {s.name for s in bundled}
    unknown = [w for w in wanted if w not in known]
    if unknown:
        raise SkillNotFoundError(unknown, [s.id for s in bundled])
    return [s for s in bundled if s.id in wanted or s.name in wanted]


def install_skills(ctx: InstallerContext) -> StepResult:
    """Copy the selected bundled skills into ``~/.codex/skills``.

    Raises:
        SkillNotFoundError: A selected id matches no bundled skill.
    """
    log = ctx.logger
    if ctx.options.skills == "skip":
        log.info("Skipping bundled skills installation")
        return StepResult.skipped(STEP, "skills=skip")

    bundled = list_bundled_skills(ctx.paths.templates_dir)
    if not bundled:
        log.info("No bundled skills found; skipping")
        return StepResult.skipped(STEP, "no bundled skills")

    selected = _select_skills(ctx, bundled)
    if not selected:
        log.info("No skills selected; skipping")
        return StepResult.skipped(STEP, "no skills selected")

    dest_root = ctx.paths.skills_dir
    log.info(f"Installing {len(selected)} skill(s) into: {dest_root}")
    backups: list[str] = []
    for skill in selected:
        dest = dest_root / skill.id
        backup = backup_existing(dest, dry_run=ctx.dry_run, log=log)
        if backup:
            backups.append(str(backup))
            log.info(f"Backed up existing skill {skill.id} to: {backup}")
        replace_tree(skill.src_dir, dest, dry_run=ctx.dry_run, log=log)
        log.ok(f"Installed skill: {skill.id}")

    ids = [s.id for s in selected]
    if ctx.dry_run:
        return StepResult.planned(STEP, f"install {', '.join(ids)}", backups=backups, metadata={"skills": ids})

    missing = [i for i in ids if not (dest_root / i / "SKILL.md").is_file()]
    if missing:
        return StepResult.failure(STEP, f"not installed: {', '.join(missing)}", backups=backups)
    return StepResult.verified(STEP, f"installed {', '.join(ids)}", backups=backups, metadata={"skills": ids})


def remove_skill(ctx: InstallerContext, skill_id: str) -> str | None:
    """Back up and remove an installed skill.

    Returns:
        The backup path.

    Raises:
        SkillNotFoundError: No installed skill has that id.
    """
    installed = list_installed_skills(ctx.paths.skills_dir)
    if skill_id not in {s.id for s in installed}:
        raise SkillNotFoundError([skill_id], [s.id for s in installed])

    target = ctx.paths.skills_dir / skill_id
    backup = backup_existing(target, dry_run=ctx.dry_run, log=ctx.logger)
    remove_path(target, dry_run=ctx.dry_run, log=ctx.logger)
    if not ctx.dry_run:
        ctx.logger.ok(f"Removed {skill_id} (backup: {backup})")
    return str(backup) if backup else None
