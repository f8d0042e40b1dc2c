"""
Skill models — bundled and installed Codex skills.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel


class BundledSkill(BaseModel):
    """A skill shipped in the package's templates.

    ``id`` is the directory name; ``name`` comes from the SKILL.md
    frontmatter and usually matches it.
    """

    id: str
    name: str
    description: str
    src_dir: Path


class InstalledSkill(BaseModel):
    id: str
    path: Path
