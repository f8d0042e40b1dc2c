"""
Tests for install steps — config, notify hook, skills, AGENTS.md.

Steps run against a throwaway home directory with the bundled templates.
"""

import dataclasses
import tomllib
from pathlib import Path

import pytest

from codexup.core.models.options import InstallerPaths
from codexup.core.services.installer.domain.config_patch import notify_config_satisfied
from codexup.core.services.installer.errors import MissingTemplateError, SkillNotFoundError
from codexup.core.services.installer.orchestration import agents, config_steps, skills
from codexup.core.services.installer.orchestration.agents import (
    APPEND_SEPARATOR,
    list_agents_templates,
    write_global_agents,
    write_repo_agents,
)
from codexup.core.services.installer.orchestration.config_steps import (
    ensure_config,
    ensure_notify_hook,
)
from codexup.core.services.installer.orchestration.skills import (
    install_skills,
    list_bundled_skills,
    list_installed_skills,
    remove_skill,
)


def _backups(directory):
    return sorted(p for p in directory.iterdir() if ".backup." in p.name)


def _files(root):
    return sorted(p for p in root.rglob("*"))


# ── Config ──────────────────────────────────────────────────────


class TestEnsureConfig:
    def test_fresh_install_writes_template(self, make_ctx, paths):
        result = ensure_config(make_ctx())
        assert result.status == "verified"
        assert result.metadata == {"template_written": True, "profile": "balanced"}
        data = tomllib.loads(paths.config_path.read_text())
        assert data["profile"] == "balanced"
        assert {"balanced", "safe", "minimal", "yolo"} <= set(data["profiles"])

    def test_fresh_install_with_profile(self, make_ctx, paths):
        ensure_config(make_ctx(profile="yolo"))
        assert tomllib.loads(paths.config_path.read_text())["profile"] == "yolo"

    def test_existing_config_kept(self, make_ctx, paths):
        paths.codex_dir.mkdir()
        paths.config_path.write_text('model = "mine"\n')
        result = ensure_config(make_ctx())
        assert result.status == "skipped"
        assert paths.config_path.read_text() == 'model = "mine"\n'
        assert _backups(paths.codex_dir) == []

    def test_overwrite_backs_up_first(self, make_ctx, paths):
        paths.codex_dir.mkdir()
        paths.config_path.write_text('model = "mine"\n')
        result = ensure_config(make_ctx(overwrite_config="yes", profile="safe"))
        assert result.status == "verified"
        (backup,) = _backups(paths.codex_dir)
        assert backup.read_text() == 'model = "mine"\n'
        assert result.backups == [str(backup)]
        assert tomllib.loads(paths.config_path.read_text())["profile"] == "safe"

    def test_existing_config_explicit_profile(self, make_ctx, paths):
        paths.codex_dir.mkdir()
        paths.config_path.write_text('profile = "balanced"\nmodel = "mine"\n')
        result = ensure_config(make_ctx(profile="minimal"))
        assert result.status == "verified"
        assert paths.config_path.read_text() == 'profile = "minimal"\nmodel = "mine"\n'
        assert len(_backups(paths.codex_dir)) == 1

    def test_profile_already_set_makes_no_backup(self, make_ctx, paths):
        paths.codex_dir.mkdir()
        paths.config_path.write_text('profile = "safe"\n')
        result = ensure_config(make_ctx(profile="safe"))
        assert result.message == "profile already set"
        assert _backups(paths.codex_dir) == []

    def test_interactive_overwrite_prompt(self, make_ctx, paths, monkeypatch):
        paths.codex_dir.mkdir()
        paths.config_path.write_text('model = "mine"\n')
        monkeypatch.setattr(config_steps, "confirm", lambda *a, **kw: True)
        monkeypatch.setattr(config_steps, "select", lambda *a, **kw: "safe")
        result = ensure_config(make_ctx(interactive=True))
        assert result.metadata["profile"] == "safe"
        assert len(_backups(paths.codex_dir)) == 1

    def test_dry_run_writes_nothing(self, make_ctx, home, recorder):
        result = ensure_config(make_ctx(dry_run=True))
        assert result.status == "planned"
        assert _files(home) == []
        assert any(m.startswith("[dry-run] write") for m in recorder.messages("log"))


# ── Notify hook ─────────────────────────────────────────────────


class TestEnsureNotifyHook:
    def test_installs_hook_and_registers(self, make_ctx, paths):
        result = ensure_notify_hook(make_ctx())
        assert result.status == "verified"
        assert paths.notify_path.stat().st_mode & 0o111
        text = paths.config_path.read_text()
        assert notify_config_satisfied(text, str(paths.notify_path))
        assert f'notify = ["{paths.notify_path}"]' in text

    def test_second_run_changes_nothing(self, make_ctx, paths):
        ensure_notify_hook(make_ctx())
        before = paths.config_path.read_text()
        result = ensure_notify_hook(make_ctx())
        assert result.status == "verified"
        assert result.metadata == {"hook_changed": False, "config_changed": False}
        assert paths.config_path.read_text() == before
        assert _backups(paths.codex_dir) == []

    def test_after_template_config(self, make_ctx, paths):
        ensure_config(make_ctx())
        ensure_notify_hook(make_ctx())
        data = tomllib.loads(paths.config_path.read_text())
        assert data["notify"] == [str(paths.notify_path)]
        assert data["tui"]["notifications"] is True
        assert len(_backups(paths.codex_dir)) == 1

    def test_notify_no_skips(self, make_ctx, home):
        result = ensure_notify_hook(make_ctx(notify="no"))
        assert result.status == "skipped"
        assert _files(home) == []

    def test_existing_hook_kept_without_consent(self, make_ctx, paths):
        paths.codex_dir.mkdir()
        paths.notify_path.write_text("#!/bin/sh\n# mine\n")
        ensure_notify_hook(make_ctx())
        assert paths.notify_path.read_text() == "#!/bin/sh\n# mine\n"

    def test_existing_hook_overwritten_with_backup(self, make_ctx, paths):
        paths.codex_dir.mkdir()
        paths.notify_path.write_text("#!/bin/sh\n# mine\n")
        result = ensure_notify_hook(make_ctx(notify="yes"))
        assert result.metadata["hook_changed"] is True
        assert "codex-1up" in paths.notify_path.read_text()
        hook_backups = [p for p in _backups(paths.codex_dir) if p.name.startswith("notify.sh")]
        assert len(hook_backups) == 1
        assert hook_backups[0].read_text() == "#!/bin/sh\n# mine\n"

    def test_dry_run(self, make_ctx, home):
        result = ensure_notify_hook(make_ctx(dry_run=True))
        assert result.status == "planned"
        assert _files(home) == []

    def test_missing_template(self, make_ctx, tmp_path, home):
        bare = InstallerPaths(home_dir=home, root_dir=tmp_path / "empty")
        ctx = dataclasses.replace(make_ctx(), paths=bare)
        result = ensure_notify_hook(ctx)
        assert result.status == "skipped"
        assert result.message == "template missing"


# ── Skills ──────────────────────────────────────────────────────


class TestSkills:
    def test_bundled_skills_listed(self, paths):
        bundled = list_bundled_skills(paths.templates_dir)
        assert [s.id for s in bundled] == ["code-search", "commit-message"]
        assert all(s.description for s in bundled)

    def test_skill_without_frontmatter_ignored(self, tmp_path):
        (tmp_path / "skills" / "broken").mkdir(parents=True)
        (tmp_path / "skills" / "broken" / "SKILL.md").write_text("# no frontmatter\n")
        (tmp_path / "skills" / "ok").mkdir()
        (tmp_path / "skills" / "ok" / "SKILL.md").write_text("---\nname: ok\ndescription: fine\n---\n")
        assert [s.id for s in list_bundled_skills(tmp_path)] == ["ok"]

    def test_skip(self, make_ctx, home):
        assert install_skills(make_ctx()).status == "skipped"
        assert _files(home) == []

    def test_install_all(self, make_ctx, paths):
        result = install_skills(make_ctx(skills="all"))
        assert result.status == "verified"
        assert result.metadata["skills"] == ["code-search", "commit-message"]
        assert [s.id for s in list_installed_skills(paths.skills_dir)] == ["code-search", "commit-message"]

    def test_install_selected(self, make_ctx, paths):
        install_skills(make_ctx(skills="select", skills_selected=("commit-message",)))
        assert [s.id for s in list_installed_skills(paths.skills_dir)] == ["commit-message"]

    def test_unknown_skill(self, make_ctx):
        with pytest.raises(SkillNotFoundError) as exc:
            install_skills(make_ctx(skills="select", skills_selected=("nope",)))
        assert exc.value.unknown == ["nope"]
        assert "code-search" in str(exc.value)

    def test_reinstall_backs_up_existing(self, make_ctx, paths):
        dest = paths.skills_dir / "commit-message"
        dest.mkdir(parents=True)
        (dest / "notes.md").write_text("local edits")
        result = install_skills(make_ctx(skills="select", skills_selected=("commit-message",)))
        (backup,) = _backups(paths.skills_dir)
        assert (backup / "notes.md").read_text() == "local edits"
        assert not (dest / "notes.md").exists()
        assert result.backups == [str(backup)]

    def test_interactive_selection(self, make_ctx, paths, monkeypatch):
        monkeypatch.setattr(skills, "multi_select", lambda *a, **kw: ["code-search"])
        install_skills(make_ctx(interactive=True, skills="select"))
        assert [s.id for s in list_installed_skills(paths.skills_dir)] == ["code-search"]

    def test_dry_run(self, make_ctx, home):
        result = install_skills(make_ctx(skills="all", dry_run=True))
        assert result.status == "planned"
        assert _files(home) == []

    def test_remove(self, make_ctx, paths):
        install_skills(make_ctx(skills="all"))
        backup = remove_skill(make_ctx(), "code-search")
        assert not (paths.skills_dir / "code-search").exists()
        assert backup is not None
        assert (Path(backup) / "SKILL.md").is_file()
        assert [s.id for s in list_installed_skills(paths.skills_dir)] == ["commit-message"]

    def test_remove_unknown(self, make_ctx):
        with pytest.raises(SkillNotFoundError):
            remove_skill(make_ctx(), "code-search")


# ── AGENTS.md ───────────────────────────────────────────────────


class TestGlobalAgents:
    def _template(self, paths):
        return (paths.templates_dir / "agent-templates" / "AGENTS-default.md").read_text()

    def test_undecided_non_interactive_skips(self, make_ctx, home):
        assert write_global_agents(make_ctx()).status == "skipped"
        assert _files(home) == []

    def test_create_default(self, make_ctx, paths):
        result = write_global_agents(make_ctx(global_agents="create-default"))
        assert result.status == "verified"
        assert paths.agents_path.read_text() == self._template(paths)

    def test_create_default_keeps_existing(self, make_ctx, paths):
        paths.codex_dir.mkdir()
        paths.agents_path.write_text("mine\n")
        result = write_global_agents(make_ctx(global_agents="create-default"))
        assert result.message == "already exists"
        assert paths.agents_path.read_text() == "mine\n"

    def test_overwrite(self, make_ctx, paths):
        paths.codex_dir.mkdir()
        paths.agents_path.write_text("mine\n")
        write_global_agents(make_ctx(global_agents="overwrite-default"))
        assert paths.agents_path.read_text() == self._template(paths)
        (backup,) = _backups(paths.codex_dir)
        assert backup.read_text() == "mine\n"

    def test_append(self, make_ctx, paths):
        paths.codex_dir.mkdir()
        paths.agents_path.write_text("mine\n")
        write_global_agents(make_ctx(global_agents="append-default"))
        assert paths.agents_path.read_text() == "mine\n" + APPEND_SEPARATOR + self._template(paths)
        assert len(_backups(paths.codex_dir)) == 1

    def test_interactive_confirm(self, make_ctx, paths, monkeypatch):
        monkeypatch.setattr(agents, "confirm", lambda *a, **kw: True)
        write_global_agents(make_ctx(interactive=True))
        assert paths.agents_path.is_file()


class TestRepoAgents:
    def test_directory_target(self, tmp_path, paths):
        dest = write_repo_agents(tmp_path, paths.templates_dir)
        assert dest == tmp_path / "AGENTS.md"
        assert dest.read_text().strip()

    def test_existing_file_backed_up(self, tmp_path, paths):
        (tmp_path / "AGENTS.md").write_text("old")
        write_repo_agents(tmp_path / "AGENTS.md", paths.templates_dir)
        (backup,) = _backups(tmp_path)
        assert backup.read_text() == "old"

    def test_unknown_template(self, tmp_path, paths):
        with pytest.raises(MissingTemplateError):
            write_repo_agents(tmp_path, paths.templates_dir, template="nope")

    def test_templates_listed(self, paths):
        assert list_agents_templates(paths.templates_dir) == ["default"]
