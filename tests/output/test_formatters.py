"""Tests for output formatting: JSON, quiet, and Rich modes."""

from __future__ import annotations

import json

from posctl.output.console import POS_THEME, create_console, get_output, style_for_status
from posctl.output.formatters import OutputSettings, format_result
from posctl.services.result import ServiceError, ServiceResult

_TABLES = ServiceResult.success(
    "list_tables",
    {
        "items": [
            {"id": 1, "number_of_guests": 0, "empty": True, "table_group_id": None},
            {"id": 2, "number_of_guests": 4, "empty": False, "table_group_id": 1},
        ]
    },
)

_ORDER = ServiceResult.success(
    "create_order",
    {"id": 7, "order_table_id": 2, "status": "COOKING", "line_items": [{"menu_id": 1}]},
)

_FAILURE = ServiceResult(
    ok=False,
    op="change_empty",
    error=ServiceError(
        code="CONFLICT",
        message="Table 2 has unresolved orders",
        detail={"order_ids": [7]},
    ),
)


class TestJsonMode:
    def test_keeps_null_fields(self) -> None:
        out = format_result(_TABLES, settings=OutputSettings(json_output=True))
        parsed = json.loads(out)
        assert parsed["ok"] is True
        assert parsed["data"]["items"][0]["table_group_id"] is None

    def test_json_wins_over_quiet(self) -> None:
        out = format_result(_ORDER, settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(out)["data"]["id"] == 7


class TestQuietMode:
    def test_list_prints_ids(self) -> None:
        assert format_result(_TABLES, settings=OutputSettings(quiet=True)) == "1\n2"

    def test_record_prints_id(self) -> None:
        assert format_result(_ORDER, settings=OutputSettings(quiet=True)) == "7"

    def test_no_id(self) -> None:
        result = ServiceResult.success("ungroup_tables", {"tables": []})
        assert format_result(result, settings=OutputSettings(quiet=True)) == "OK: ungroup_tables"

    def test_error(self) -> None:
        out = format_result(_FAILURE, settings=OutputSettings(quiet=True))
        assert out.startswith("ERROR: change_empty")
        assert "unresolved" in out


class TestRichMode:
    def test_record_fields(self) -> None:
        out = format_result(_ORDER)
        assert out.splitlines()[0].startswith("OK")
        assert "status: COOKING" in out
        assert '[{"menu_id":1}]' in out

    def test_list_table(self) -> None:
        out = format_result(_TABLES)
        assert "number_of_guests" in out
        assert "-" in out  # null group rendered as a dash

    def test_empty_list(self) -> None:
        out = format_result(ServiceResult.success("list_orders", {"items": []}))
        assert "(none)" in out

    def test_error_line(self) -> None:
        out = format_result(_FAILURE)
        assert "ERROR" in out
        assert "[CONFLICT] Table 2 has unresolved orders" in out
        assert "order_ids" not in out

    def test_error_detail_when_verbose(self) -> None:
        out = format_result(_FAILURE, settings=OutputSettings(verbose=True))
        assert "order_ids: [7]" in out

    def test_meta_when_verbose(self) -> None:
        result = _ORDER.model_copy(update={"meta": {"telemetry": {"name": "x"}}})
        assert "meta:" in format_result(result, settings=OutputSettings(verbose=True))
        assert "meta:" not in format_result(result)


class TestConsole:
    def test_status_styles(self) -> None:
        assert style_for_status("COOKING") == "pos.status.cooking"
        assert style_for_status("UNKNOWN") == ""

    def test_theme_styles(self) -> None:
        assert {name for name in POS_THEME.styles if name.startswith("pos.")} == {
            "pos.ok",
            "pos.error",
            "pos.op",
            "pos.key",
            "pos.id",
            "pos.status.cooking",
            "pos.status.meal",
            "pos.status.completion",
        }

    def test_console_renders_to_buffer(self) -> None:
        console = create_console(no_color=True)
        console.print("hello")
        assert get_output(console) == "hello\n"
