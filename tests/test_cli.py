"""Tests for the root CLI group and global flags."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from posctl import __version__
from posctl.cli import cli


class TestRootGroup:
    def test_help_lists_groups(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("product", "menu-group", "menu", "table", "table-group", "order"):
            assert name in result.output

    def test_no_subcommand_prints_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "Usage" in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_does_not_create_database(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        cli_runner.invoke(cli, ["table", "--help"])
        assert not (tmp_path / ".posctl").exists()


class TestGlobalFlags:
    def test_data_dir(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["--data-dir", str(tmp_path), "table", "create"])
        assert result.exit_code == 0
        assert (tmp_path / ".posctl" / "posctl.db").is_file()

    def test_config_enables_strict_transitions(
        self, cli_runner: CliRunner, tmp_path: Path
    ) -> None:
        config = tmp_path / "posctl.toml"
        config.write_text("[orders]\nstrict_transitions = true\n")
        base = ["--json", "-c", str(config), "--data-dir", str(tmp_path)]
        for args in (
            ["product", "create", "Chicken", "--price", "1"],
            ["menu-group", "create", "Sets"],
            ["menu", "create", "Chicken", "--price", "1", "--group", "1", "--item", "1"],
            ["table", "create", "--occupied"],
            ["order", "create", "--table", "1", "--item", "1"],
            ["order", "status", "1", "MEAL"],
        ):
            assert cli_runner.invoke(cli, [*base, *args]).exit_code == 0

        result = cli_runner.invoke(cli, [*base, "order", "status", "1", "COOKING"])
        assert result.exit_code == 1
        assert "Invalid status transition" in json.loads(result.output)["error"]["message"]

    @pytest.mark.usefixtures("_isolated_store")
    def test_verbose_attaches_telemetry(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "table", "create"])
        assert result.exit_code == 0
        assert "meta:" in result.output
        assert "TableService.create_table" in result.output
