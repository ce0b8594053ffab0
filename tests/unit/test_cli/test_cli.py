"""
Unit tests for the CLI module.

This module contains tests for the command-line interface,
including argument parsing, command execution, and output formatting.
"""

import json

import pytest
from click.testing import CliRunner

from spechelpers.cli import cli


@pytest.fixture
def dataset_file(tmp_path):
    """Write a keyed dataset to a JSON file and return its path."""
    path = tmp_path / "sizes.json"
    path.write_text(json.dumps({"small": 320, "medium": [768, 1024]}))
    return path


class TestCLI:
    """Tests for the CLI framework."""

    def test_cli_shows_help(self):
        """Test that the CLI displays help information."""
        runner = CliRunner()
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'Helpers for authoring data-driven browser tests' in result.output
        assert 'preview' in result.output
        assert 'version' in result.output

    def test_version_command(self):
        """Test that the version command displays version information."""
        runner = CliRunner()
        result = runner.invoke(cli, ['version'])
        assert result.exit_code == 0
        assert 'Spec-helpers version:' in result.output
        assert 'Python version:' in result.output
        assert 'Pytest version:' in result.output
        assert 'Click version:' in result.output

    def test_preview_command_help(self):
        """Test that the preview command shows help information."""
        runner = CliRunner()
        result = runner.invoke(cli, ['preview', '--help'])
        assert result.exit_code == 0
        assert 'Preview the data groups a dataset expands into' in result.output
        assert '--format' in result.output

    def test_preview_requires_file(self):
        """Test that the preview command requires a dataset file."""
        runner = CliRunner()
        result = runner.invoke(cli, ['preview'])
        assert result.exit_code != 0
        assert 'Missing argument' in result.output

    def test_preview_table(self, dataset_file):
        """Test the table output lists every group with its arguments."""
        runner = CliRunner()
        result = runner.invoke(cli, ['--quiet', 'preview', str(dataset_file)])
        assert result.exit_code == 0
        assert 'with small' in result.output
        assert 'with medium' in result.output
        assert '768, 1024' in result.output

    def test_preview_json(self, dataset_file):
        """Test the JSON output."""
        runner = CliRunner()
        result = runner.invoke(cli, ['--quiet', 'preview', str(dataset_file), '--format', 'json'])
        assert result.exit_code == 0
        assert json.loads(result.output) == [
            {"label": "with small", "name": "small", "args": [320]},
            {"label": "with medium", "name": "medium", "args": [768, 1024]},
        ]

    def test_preview_json_is_parseable_with_logging_enabled(self, dataset_file):
        """Test that log lines stay off stdout so the JSON output can be parsed."""
        runner = CliRunner()
        result = runner.invoke(cli, ['preview', str(dataset_file), '--format', 'json'])
        assert result.exit_code == 0
        assert [group["label"] for group in json.loads(result.stdout)] == ["with small", "with medium"]
        assert 'Reading dataset from' in result.stderr

    def test_preview_list_dataset_collapses_duplicates(self, tmp_path):
        """Test that a list dataset is labelled by item, last duplicate winning."""
        path = tmp_path / "browsers.json"
        path.write_text(json.dumps(["chrome", "firefox", "chrome"]))

        runner = CliRunner()
        result = runner.invoke(cli, ['--quiet', 'preview', str(path), '--format', 'json'])
        assert result.exit_code == 0
        assert [group["label"] for group in json.loads(result.output)] == ["with chrome", "with firefox"]

    def test_preview_empty_list_is_invalid(self, tmp_path):
        """Test that an empty list dataset is reported as invalid."""
        path = tmp_path / "empty.json"
        path.write_text("[]")

        runner = CliRunner()
        result = runner.invoke(cli, ['--quiet', 'preview', str(path)])
        assert result.exit_code == 1
        assert 'Error: Invalid dataset: First argument must be an object or non-empty array.' in result.output

    def test_preview_scalar_is_invalid(self, tmp_path):
        path = tmp_path / "scalar.json"
        path.write_text("42")

        runner = CliRunner()
        result = runner.invoke(cli, ['--quiet', 'preview', str(path)])
        assert result.exit_code == 1
        assert 'Invalid dataset' in result.output

    def test_preview_missing_file(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(cli, ['--quiet', 'preview', str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert 'File access problem' in result.output

    def test_preview_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{broken")

        runner = CliRunner()
        result = runner.invoke(cli, ['--quiet', 'preview', str(path)])
        assert result.exit_code == 1
        assert 'Invalid JSON' in result.output

    def test_debug_flag_is_recognized(self):
        """Test that the debug flag is properly recognized."""
        runner = CliRunner()
        result = runner.invoke(cli, ['--debug', 'version'])
        assert result.exit_code == 0
