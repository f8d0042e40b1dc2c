"""
Tests for pure installer helpers — versions, backup names, frontmatter.
"""

from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path

import pytest

from codexup.core.services.installer.domain.backup_naming import backup_path_for
from codexup.core.services.installer.domain.frontmatter import parse_skill_frontmatter
from codexup.core.services.installer.domain.versions import (
    extract_version,
    is_newer,
    parse_semver,
)


class TestIsNewer:
    """Version comparison table."""

    @pytest.mark.parametrize("latest,current,expected", [
        ("1.2.4", "1.2.3", True),
        ("1.2.3", "1.2.3", False),
        ("1.2.3", "1.2.4", False),
        ("2.0.0", "1.99.99", True),
        ("1.10.0", "1.9.0", True),
        ("v1.2.3", "1.2.3", False),
        ("1.2.3-beta.1", "1.2.3", False),
        ("latest", "1.2.3", True),
        ("nightly", "nightly", False),
    ])
    def test_table(self, latest, current, expected):
        assert is_newer(latest, current) is expected


class TestVersionParsing:
    """Version extraction from command output."""

    def test_parse_semver(self):
        assert parse_semver("codex 0.63.1") == (0, 63, 1)
        assert parse_semver("1.2") is None

    @pytest.mark.parametrize("output,expected", [
        ("codex-cli 0.63.0", "0.63.0"),
        ("codex-cli 1.0.0-beta.1\n", "1.0.0-beta.1"),
        ("no version here", None),
        ("", None),
    ])
    def test_extract_version(self, output, expected):
        assert extract_version(output) == expected


class TestBackupNaming:
    """PATH.backup.YYYY-MM-DDTHH-MM-SS in UTC."""

    def test_format(self):
        now = datetime(2026, 1, 21, 0, 0, 0, tzinfo=UTC)
        assert backup_path_for("/x/config.toml", now) == Path("/x/config.toml.backup.2026-01-21T00-00-00")

    def test_converts_to_utc(self):
        now = datetime(2026, 1, 21, 2, 30, 5, tzinfo=timezone(timedelta(hours=2)))
        assert backup_path_for(Path("/x/AGENTS.md"), now).name == "AGENTS.md.backup.2026-01-21T00-30-05"

    def test_same_second_collides(self):
        now = datetime(2026, 1, 21, tzinfo=UTC)
        assert backup_path_for("/a", now) == backup_path_for("/a", now)


class TestSkillFrontmatter:
    """SKILL.md frontmatter parsing."""

    def test_name_and_description(self):
        md = "---\nname: commit-message\ndescription: Drafts commits  # note\n---\n# Body\n"
        meta = parse_skill_frontmatter(md)
        assert meta == {"name": "commit-message", "description": "Drafts commits"}

    def test_quoted_values(self):
        md = "---\nname: \"x\"\ndescription: 'Does: things'\n---\n"
        assert parse_skill_frontmatter(md) == {"name": "x", "description": "Does: things"}

    def test_missing_description(self):
        assert parse_skill_frontmatter("---\nname: x\n---\nbody\n") == {"name": "x"}

    @pytest.mark.parametrize("md", [
        "# no frontmatter\n",
        "---\nname: x\n",
        "---\n- a\n- b\n---\n",
        "---\nname: [unclosed\n---\n",
    ])
    def test_invalid(self, md):
        assert parse_skill_frontmatter(md) is None
