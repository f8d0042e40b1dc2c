"""
Smoke tests — verify the package is healthy.

These tests ensure the basic scaffolding works:
- Package imports successfully
- CLI entrypoint responds
- Bundled templates ship with the package
"""

from click.testing import CliRunner

from codexup import __version__
from codexup.core.models.options import InstallerPaths
from codexup.main import cli


class TestBootstrap:
    """Verify the project bootstrap is healthy."""

    def test_version_is_set(self):
        """Version string should be defined and non-empty."""
        assert __version__
        assert isinstance(__version__, str)

    def test_cli_help(self):
        """CLI --help should exit cleanly and list every command."""
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "install and configure the Codex CLI" in result.output
        for name in ("install", "update", "status", "doctor", "agents", "config", "skills", "tools"):
            assert name in result.output

    def test_cli_version(self):
        """CLI --version should print the version."""
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert f"codex-1up, version {__version__}" in result.output

    def test_installer_layers_import(self):
        """Installer layers should be importable on their own."""
        import codexup.core.services.installer.data
        import codexup.core.services.installer.detection
        import codexup.core.services.installer.domain
        import codexup.core.services.installer.execution
        import codexup.core.services.installer.orchestration
        assert codexup.core.services.installer.orchestration is not None

    def test_templates_bundled(self):
        """Config, hook and AGENTS templates should ship with the package."""
        templates = InstallerPaths().templates_dir
        assert (templates / "codex-config.toml").is_file()
        assert (templates / "notification.sh").is_file()
        assert (templates / "agent-templates" / "AGENTS-default.md").is_file()
