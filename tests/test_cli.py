"""Tests for the fsguard command-line interface."""

import pytest
import yaml
from click.testing import CliRunner

from filesystem_guard import __version__
from filesystem_guard.cli import cli


@pytest.fixture
def runner():
    """Create a click test runner."""
    return CliRunner()


@pytest.fixture
def config_file(tmp_path):
    """Write a configuration file using the workspace placeholder."""
    path = tmp_path / "fsguard.yaml"
    path.write_text(
        yaml.dump(
            {
                "security": {
                    "workspace_root": "${workspaceFolder}",
                    "blocked_paths": [".git"],
                    "blocked_patterns": ["*secret*"],
                }
            }
        )
    )
    return path


class TestCli:
    """Tests for CLI commands."""

    def test_version(self, runner):
        """Test --version."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_platform(self, runner):
        """Test the platform command."""
        result = runner.invoke(cli, ["platform"])
        assert result.exit_code == 0
        assert "Path separator" in result.output

    def test_defaults(self, runner):
        """Test listing baseline blocked paths."""
        result = runner.invoke(cli, ["defaults"])
        assert result.exit_code == 0
        assert ".git" in result.output
        assert "node_modules" in result.output

    def test_classify(self, runner):
        """Test classifying a message."""
        result = runner.invoke(cli, ["classify", "ECONNREFUSED: connection refused"])
        assert result.exit_code == 0
        assert "NETWORK" in result.output
        assert "connection refused" in result.output
        assert "Check that the MCP server is running" in result.output

    def test_classify_with_name(self, runner):
        """Test classifying by error name."""
        result = runner.invoke(cli, ["classify", "boom", "--name", "NetworkError"])
        assert "NETWORK" in result.output

    def test_check_baseline_denied(self, runner):
        """Test a path blocked by the platform baseline."""
        result = runner.invoke(cli, ["check", "--baseline", ".git/config"])
        assert result.exit_code == 1
        assert "denied" in result.output

    def test_check_baseline_allowed(self, runner):
        """Test a path allowed by the platform baseline."""
        result = runner.invoke(cli, ["check", "--baseline", "src/main.py"])
        assert result.exit_code == 0
        assert "allowed" in result.output

    def test_check_with_config(self, runner, config_file, tmp_path):
        """Test checking paths against a configuration file."""
        workspace = str(tmp_path)
        allowed = runner.invoke(
            cli, ["check", "-c", str(config_file), "-w", workspace, "src/app.py"]
        )
        assert allowed.exit_code == 0

        denied = runner.invoke(
            cli, ["check", "-c", str(config_file), "-w", workspace, "notes/secret.txt"]
        )
        assert denied.exit_code == 1
        assert "Filesystem Security" in denied.output

    def test_validate_config_valid(self, runner, config_file):
        """Test validating a good configuration file."""
        result = runner.invoke(cli, ["validate-config", str(config_file)])
        assert result.exit_code == 0
        assert "Configuration is valid" in result.output

    def test_validate_config_invalid(self, runner, tmp_path):
        """Test validating a configuration with errors."""
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({"server": {"timeout_ms": 10}}))
        result = runner.invoke(cli, ["validate-config", str(path)])
        assert result.exit_code == 1
        assert "Server timeout must be at least 1000ms" in result.output

    def test_validate_config_schema_error(self, runner, tmp_path):
        """Test a configuration that does not match the schema."""
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({"server": {"timeout_ms": "soon"}}))
        result = runner.invoke(cli, ["validate-config", str(path)])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_check_bracketed_path(self, runner):
        """Test that a path containing markup-like brackets is printed literally."""
        result = runner.invoke(cli, ["check", "--baseline", "/etc/a[/b]"])
        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "/etc/a[/b]" in result.output

    def test_check_malformed_yaml(self, runner, tmp_path):
        """Test that unparseable YAML is reported as a configuration error."""
        path = tmp_path / "broken.yaml"
        path.write_text("security: [unclosed\n")
        result = runner.invoke(cli, ["check", "-c", str(path), "src/app.py"])
        assert result.exit_code == 2
        assert "Invalid configuration" in result.output

    def test_validate_config_malformed_yaml(self, runner, tmp_path):
        """Test validate-config with unparseable YAML."""
        path = tmp_path / "broken.yaml"
        path.write_text("security: [unclosed\n")
        result = runner.invoke(cli, ["validate-config", str(path)])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
