"""
Tests for the CLI commands.

Every command runs against a throwaway home directory; PATH lookups are
controlled with the ``on_path`` fixture so nothing is installed.
"""

import json
import shutil

import pytest
from click.testing import CliRunner

from codexup import __version__
from codexup.core.services.installer.data.tools import TOOL_DEFS
from codexup.core.services.installer.detection import registry
from codexup.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def codex_config(paths):
    """Install the bundled config template as ~/.codex/config.toml."""
    paths.codex_dir.mkdir(parents=True, exist_ok=True)
    shutil.copy(paths.templates_dir / "codex-config.toml", paths.config_path)
    return paths.config_path


class TestCliBasics:
    """Root group behaviour."""

    def test_invalid_settings_file(self, runner, home, tmp_path, on_path):
        bad = tmp_path / "settings.yml"
        bad.write_text("profile: turbo\n")
        result = runner.invoke(cli, ["--settings", str(bad), "install", "--dry-run"])
        assert result.exit_code != 0
        assert "Invalid installer settings" in result.output


class TestToolsCommands:
    def test_list(self, runner, on_path):
        on_path.add("rg")
        result = runner.invoke(cli, ["tools", "list"])
        assert result.exit_code == 0
        assert "rg ✓" in result.output
        assert "fd ✖" in result.output

    def test_list_json(self, runner, on_path):
        on_path.add("jq")
        result = runner.invoke(cli, ["tools", "list", "--json"])
        data = json.loads(result.stdout)
        assert [t["id"] for t in data["tools"]] == [t.id for t in TOOL_DEFS]
        jq = next(t for t in data["tools"] if t["id"] == "jq")
        assert jq["installed"] is True

    def test_doctor_all_present(self, runner, on_path):
        on_path.update(t.bins[0] for t in TOOL_DEFS)
        result = runner.invoke(cli, ["tools", "doctor"])
        assert result.exit_code == 0
        assert "All tools are installed." in result.output

    def test_doctor_missing(self, runner, on_path):
        result = runner.invoke(cli, ["tools", "doctor"])
        assert "Missing tools: rg, fd" in result.output
        assert "Known tools:" in result.output

    def test_install_unknown_tool(self, runner, on_path, home):
        result = runner.invoke(cli, ["tools", "install", "rg,nope"])
        assert result.exit_code == 1
        assert "Unknown tool id(s): nope" in result.output

    def test_install_dry_run_json(self, runner, on_path, home):
        on_path.add("brew")
        result = runner.invoke(cli, ["tools", "install", "rg", "--dry-run", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["status"] == "planned"
        assert data["metadata"]["packages"] == ["ripgrep"]
        assert "[dry-run] brew install ripgrep" in [entry["message"] for entry in data["log"]]


class TestSkillsCommands:
    def test_list(self, runner, home):
        result = runner.invoke(cli, ["skills", "list"])
        assert result.exit_code == 0
        assert "code-search" in result.output
        assert "commit-message" in result.output

    def test_install_and_remove(self, runner, paths):
        result = runner.invoke(cli, ["skills", "install", "commit-message"])
        assert result.exit_code == 0, result.output
        assert (paths.skills_dir / "commit-message" / "SKILL.md").is_file()

        result = runner.invoke(cli, ["skills", "remove", "commit-message"])
        assert result.exit_code == 0, result.output
        assert not (paths.skills_dir / "commit-message").exists()

    def test_install_unknown(self, runner, home):
        result = runner.invoke(cli, ["skills", "install", "nope"])
        assert result.exit_code == 1
        assert "Unknown skill id(s): nope" in result.output

    def test_remove_unknown(self, runner, home):
        result = runner.invoke(cli, ["skills", "remove", "nope"])
        assert result.exit_code == 1


class TestConfigCommands:
    def test_profiles_without_config(self, runner, home):
        result = runner.invoke(cli, ["config", "profiles"])
        assert result.exit_code == 1
        assert "Config not found" in result.output

    def test_profiles(self, runner, codex_config):
        result = runner.invoke(cli, ["config", "profiles"])
        assert result.exit_code == 0
        assert "balanced (active)" in result.output
        assert "yolo" in result.output

    def test_profiles_json(self, runner, codex_config):
        data = json.loads(runner.invoke(cli, ["config", "profiles", "--json"]).stdout)
        assert data["profile"] == "balanced"
        assert data["profiles"] == ["balanced", "safe", "minimal", "yolo"]

    def test_set_profile(self, runner, codex_config):
        result = runner.invoke(cli, ["config", "set-profile", "safe"])
        assert result.exit_code == 0
        assert 'profile = "safe"' in codex_config.read_text()
        assert len(list(codex_config.parent.glob("config.toml.backup.*"))) == 1

    def test_set_profile_without_config(self, runner, home):
        result = runner.invoke(cli, ["config", "set-profile", "safe"])
        assert result.exit_code == 1

    def test_set_profile_rejects_unknown(self, runner, codex_config):
        result = runner.invoke(cli, ["config", "set-profile", "turbo"])
        assert result.exit_code == 2

    def test_notify(self, runner, paths):
        result = runner.invoke(cli, ["config", "notify"])
        assert result.exit_code == 0, result.output
        assert paths.notify_path.is_file()
        assert str(paths.notify_path) in paths.config_path.read_text()


class TestAgentsCommand:
    def test_writes_template(self, runner, home, tmp_path):
        repo = tmp_path / "repo"
        repo.mkdir()
        result = runner.invoke(cli, ["agents", "--path", str(repo)])
        assert result.exit_code == 0
        assert (repo / "AGENTS.md").is_file()

    def test_dry_run(self, runner, home, tmp_path):
        result = runner.invoke(cli, ["agents", "--path", str(tmp_path), "--dry-run"])
        assert result.exit_code == 0
        assert not (tmp_path / "AGENTS.md").exists()
        assert "[dry-run] write" in result.output

    def test_unknown_template(self, runner, home, tmp_path):
        result = runner.invoke(cli, ["agents", "--path", str(tmp_path), "--template", "nope"])
        assert result.exit_code == 1
        assert "available: default" in result.output


class TestInstallCommand:
    def test_dry_run_json_changes_nothing(self, runner, home, on_path):
        result = runner.invoke(cli, ["install", "--dry-run", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["dry_run"] is True
        statuses = {s["step"]: s["status"] for s in data["steps"]}
        assert statuses["node"] == "planned"
        assert statuses["config"] == "planned"
        assert statuses["skills"] == "skipped"
        assert list(home.iterdir()) == []

    def test_unknown_tool(self, runner, home, on_path):
        result = runner.invoke(cli, ["install", "--tools", "rg,nope", "--dry-run"])
        assert result.exit_code == 1
        assert "Unknown tool id(s): nope" in result.output

    def test_human_output(self, runner, home, on_path):
        result = runner.invoke(cli, ["install", "--dry-run", "--tools", "skip", "--skills", "all"])
        assert result.exit_code == 0, result.output
        assert "Steps:" in result.output
        assert "codex-1up: Installation summary" in result.output


class TestStatusCommands:
    def test_status_json(self, runner, home, on_path):
        on_path.add("rg")
        result = runner.invoke(cli, ["status", "--offline", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["codex"]["found"] is False
        assert data["notify_registered"] is False
        assert {"id": "rg", "installed": True} in data["tools"]

    def test_status_human(self, runner, home, on_path, codex_config):
        result = runner.invoke(cli, ["status", "--offline"])
        assert result.exit_code == 0
        assert "not installed" in result.output
        assert "profile:  balanced" in result.output

    def test_doctor_reports_problems(self, runner, home, on_path):
        result = runner.invoke(cli, ["doctor", "--json"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert [c["name"] for c in data["checks"]] == ["node", "codex", "tools", "global-pm", "config", "notify"]
        assert data["ok"] is False

    def test_update_up_to_date(self, runner, home, monkeypatch):
        monkeypatch.setattr(registry, "fetch_json", lambda url, **kw: {"info": {"version": __version__}})
        result = runner.invoke(cli, ["update", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["outcome"] == "up-to-date"
