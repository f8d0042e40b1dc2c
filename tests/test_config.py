"""
Tests for the installer settings loader and option merging.
"""

import textwrap

import pytest
from pydantic import ValidationError

from codexup.core.config.loader import (
    SETTINGS_ENV,
    ConfigError,
    build_options,
    default_settings_path,
    find_settings_file,
    load_settings,
)
from codexup.core.models.options import InstallerContext, InstallerOptions


def _write_settings(home, content):
    path = default_settings_path(home)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content))
    return path


class TestFindSettings:
    def test_none_when_absent(self, home):
        assert find_settings_file(home) is None
        assert load_settings(home_dir=home) == {}

    def test_default_location(self, home):
        path = _write_settings(home, "profile: safe\n")
        assert find_settings_file(home) == path

    def test_env_var_wins(self, home, tmp_path, monkeypatch):
        _write_settings(home, "profile: safe\n")
        custom = tmp_path / "custom.yml"
        custom.write_text("profile: yolo\n")
        monkeypatch.setenv(SETTINGS_ENV, str(custom))
        assert load_settings(home_dir=home) == {"profile": "yolo"}

    def test_env_var_missing_file_is_error(self, home, tmp_path, monkeypatch):
        monkeypatch.setenv(SETTINGS_ENV, str(tmp_path / "typo.yml"))
        with pytest.raises(ConfigError, match="not found"):
            load_settings(home_dir=home)


class TestLoadSettings:
    def test_values_normalised(self, home):
        _write_settings(home, """\
            profile: balanced
            install_tools: select
            tools_selected: [rg, fd]
            notify: yes
            overwrite_config: no
            skills: all
        """)
        assert load_settings(home_dir=home) == {
            "profile": "balanced",
            "install_tools": "select",
            "tools_selected": ("rg", "fd"),
            "notify": "yes",
            "overwrite_config": "no",
            "skills": "all",
        }

    def test_empty_file(self, home):
        _write_settings(home, "")
        assert load_settings(home_dir=home) == {}

    def test_runtime_keys_ignored(self, home):
        _write_settings(home, "dry_run: true\nassume_yes: true\nprofile: safe\n")
        assert load_settings(home_dir=home) == {"profile": "safe"}

    @pytest.mark.parametrize("content,match", [
        ("profile: [unclosed\n", "Invalid YAML"),
        ("- a\n- b\n", "Expected a YAML mapping"),
        ("profile: turbo\n", "Invalid installer settings"),
        ("unknown_key: 1\n", "Invalid installer settings"),
    ])
    def test_invalid(self, home, content, match):
        _write_settings(home, content)
        with pytest.raises(ConfigError, match=match):
            load_settings(home_dir=home)

    def test_explicit_missing_path(self, tmp_path):
        with pytest.raises(ConfigError):
            load_settings(tmp_path / "missing.yml")


class TestBuildOptions:
    def test_defaults(self):
        opts = build_options()
        assert opts == InstallerOptions()
        assert opts.install_tools == "all"
        assert opts.skills == "skip"
        assert opts.install_node == "nvm"

    def test_flags_win_over_settings(self):
        opts = build_options({"profile": "safe", "notify": "no"}, profile="yolo", notify=None)
        assert opts.profile == "yolo"
        assert opts.notify == "no"

    def test_invalid_flag_value(self):
        with pytest.raises(ValidationError):
            build_options(profile="turbo")

    def test_options_are_frozen(self):
        opts = build_options()
        with pytest.raises(ValidationError):
            opts.profile = "safe"


class TestInteractivity:
    def test_override_wins(self):
        ctx = InstallerContext(options=InstallerOptions(assume_yes=True), interactive_override=True)
        assert ctx.interactive is True

    @pytest.mark.parametrize("flag", ["dry_run", "assume_yes", "skip_confirmation"])
    def test_flags_disable_prompts(self, flag, monkeypatch):
        monkeypatch.setattr("sys.stdout.isatty", lambda: True)
        ctx = InstallerContext(options=InstallerOptions(**{flag: True}))
        assert ctx.interactive is False
