#!/usr/bin/env python3
"""
Integration tests for CLI Main Entry Point

Tests end-to-end CLI command execution with real command invocation.
"""

import pytest
from click.testing import CliRunner

from finsync.cli.main import main


@pytest.mark.integration
class TestCLIMainIntegration:
    """Test main CLI entry point with real command execution."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_help_command_lists_all_subcommands(self):
        result = self.runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "finsync" in result.output
        for command in ["sync", "accounts", "config", "version"]:
            assert command in result.output

    def test_version_command_shows_version_info(self):
        result = self.runner.invoke(main, ["version"])

        assert result.exit_code == 0
        assert "finsync v0.1.0" in result.output
        assert "Author:" in result.output

    def test_config_command_redacts_credentials(self):
        result = self.runner.invoke(main, ["config"])

        assert result.exit_code == 0
        assert "Current Configuration:" in result.output
        assert "Environment: test" in result.output
        assert "Reports Directory:" in result.output
        assert "password: ***REDACTED***" in result.output
        assert "api_token: ***REDACTED***" in result.output
        assert "test-password" not in result.output
        assert "test-token" not in result.output
        assert "account_ids: ['1001']" in result.output

    def test_invalid_configuration_is_reported(self, monkeypatch):
        monkeypatch.setenv("SYNC_STEP_MONTHS", "24")

        result = self.runner.invoke(main, ["config"])

        assert result.exit_code == 1
        assert "Configuration validation failed" in result.output

    def test_verbose_shows_environment(self):
        result = self.runner.invoke(main, ["--verbose", "version"])

        assert result.exit_code == 0
        assert "Environment: test" in result.output
        assert "Data directory:" in result.output

    def test_debug_flag(self):
        result = self.runner.invoke(main, ["--debug", "version"])

        assert result.exit_code == 0
        assert "Debug logging enabled" in result.output

    def test_invalid_command_shows_error(self):
        result = self.runner.invoke(main, ["nonexistent-command"])

        assert result.exit_code != 0
        assert "No such command" in result.output

    def test_sync_help(self):
        result = self.runner.invoke(main, ["sync", "--help"])

        assert result.exit_code == 0
        for option in ["--username", "--password", "--token", "--accounts", "--dry-run", "--continue-on-error"]:
            assert option in result.output
