"""Tests for the table and table-group commands."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from posctl.cli import cli


def _ok(runner: CliRunner, *args: str) -> dict:
    result = runner.invoke(cli, ["--json", *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)["data"]


def _error_code(runner: CliRunner, *args: str) -> str:
    result = runner.invoke(cli, ["--json", *args])
    assert result.exit_code == 1, result.output
    return json.loads(result.output)["error"]["code"]


@pytest.mark.usefixtures("_isolated_store")
class TestTableCommands:
    def test_create_defaults(self, cli_runner: CliRunner) -> None:
        data = _ok(cli_runner, "table", "create")
        assert data == {"id": 1, "number_of_guests": 0, "empty": True, "table_group_id": None}

    def test_create_occupied(self, cli_runner: CliRunner) -> None:
        data = _ok(cli_runner, "table", "create", "--occupied", "--guests", "4")
        assert data["empty"] is False
        assert data["number_of_guests"] == 4

    def test_change_empty(self, cli_runner: CliRunner) -> None:
        _ok(cli_runner, "table", "create")
        assert _ok(cli_runner, "table", "empty", "1", "false")["empty"] is False
        assert _ok(cli_runner, "table", "show", "1")["empty"] is False

    def test_change_guests_on_empty_table(self, cli_runner: CliRunner) -> None:
        _ok(cli_runner, "table", "create")
        assert _error_code(cli_runner, "table", "guests", "1", "3") == "CONFLICT"

    def test_change_guests(self, cli_runner: CliRunner) -> None:
        _ok(cli_runner, "table", "create", "--occupied")
        assert _ok(cli_runner, "table", "guests", "1", "3")["number_of_guests"] == 3

    def test_show_missing(self, cli_runner: CliRunner) -> None:
        assert _error_code(cli_runner, "table", "show", "9") == "NOT_FOUND"

    def test_list_quiet(self, cli_runner: CliRunner) -> None:
        _ok(cli_runner, "table", "create")
        _ok(cli_runner, "table", "create")
        result = cli_runner.invoke(cli, ["-q", "table", "list"])
        assert result.exit_code == 0
        assert result.output.split() == ["1", "2"]


@pytest.mark.usefixtures("_isolated_store")
class TestTableGroupCommands:
    @pytest.fixture(autouse=True)
    def _tables(self, cli_runner: CliRunner, _isolated_store: None) -> None:
        for _ in range(3):
            _ok(cli_runner, "table", "create")

    def test_group_and_ungroup(self, cli_runner: CliRunner) -> None:
        group = _ok(cli_runner, "table-group", "create", "1", "2")
        assert group["table_ids"] == [1, 2]
        assert _ok(cli_runner, "table", "show", "1")["table_group_id"] == group["id"]

        released = _ok(cli_runner, "table-group", "ungroup", str(group["id"]))
        assert released["table_group_id"] == group["id"]
        assert [t["table_group_id"] for t in released["tables"]] == [None, None]

    def test_group_single_table(self, cli_runner: CliRunner) -> None:
        assert _error_code(cli_runner, "table-group", "create", "1") == "VALIDATION_FAILED"

    def test_group_unknown_table(self, cli_runner: CliRunner) -> None:
        assert _error_code(cli_runner, "table-group", "create", "1", "42") == "NOT_FOUND"

    def test_regroup(self, cli_runner: CliRunner) -> None:
        _ok(cli_runner, "table-group", "create", "1", "2")
        assert _error_code(cli_runner, "table-group", "create", "2", "3") == "CONFLICT"

    def test_grouped_table_cannot_toggle_empty(self, cli_runner: CliRunner) -> None:
        _ok(cli_runner, "table-group", "create", "1", "2")
        assert _error_code(cli_runner, "table", "empty", "1", "true") == "CONFLICT"

    def test_list_and_show(self, cli_runner: CliRunner) -> None:
        group = _ok(cli_runner, "table-group", "create", "1", "3")
        assert _ok(cli_runner, "table-group", "list")["items"] == [group]
        assert _ok(cli_runner, "table-group", "show", str(group["id"])) == group

    def test_error_goes_to_stderr_in_human_mode(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["table-group", "ungroup", "99"])
        assert result.exit_code == 1
        assert "[NOT_FOUND]" in result.output
