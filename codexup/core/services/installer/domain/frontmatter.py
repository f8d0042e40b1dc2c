"""
L1 Domain — SKILL.md frontmatter parsing (pure).

A bundled skill declares itself with a YAML frontmatter block::

    ---
    name: commit-helper
    description: Drafts conventional commit messages
    ---
"""

from __future__ import annotations

import logging
from typing import Any

import yaml

logger = logging.getLogger(__name__)

_FENCE = "---"


def split_frontmatter(markdown: str) -> str | None:
    """Return the raw frontmatter block, or None if there is none."""
    lines = markdown.splitlines()
    if len(lines) < 3 or lines[0].strip() != _FENCE:
        return None
    for i in range(1, len(lines)):
        if lines[i].strip() == _FENCE:
            return "\n".join(lines[1:i])
    return None


def parse_skill_frontmatter(markdown: str) -> dict[str, str] | None:
    """Parse ``name`` and ``description`` from a SKILL.md document.

    Returns:
        ``{"name": ..., "description": ...}`` (values may be missing), or
        None when the document has no parseable frontmatter mapping.
    """
    block = split_frontmatter(markdown)
    if block is None:
        return None
    try:
        data: Any = yaml.safe_load(block)
    except yaml.YAMLError as exc:
        logger.debug("Unparseable SKILL.md frontmatter: %s", exc)
        return None
    if not isinstance(data, dict):
        return None

    meta: dict[str, str] = {}
    for key in ("name", "description"):
        value = data.get(key)
        if value is not None and str(value).strip():
            meta[key] = str(value).strip()
    return meta
