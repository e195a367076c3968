"""Rich renderers for ServiceResult.

List results (``data["items"]``) render as a table whose columns follow
the keys of the first item; everything else renders as key-value pairs.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from posctl.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from posctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        _status_line(console, result)
        items = result.data.get("items")
        if isinstance(items, list):
            _render_items(console, items)
        else:
            _render_fields(console, result.data)
    else:
        _render_error(console, result, verbose=verbose)

    if verbose and result.meta:
        console.print(Text(f"  meta: {json.dumps(result.meta)}", style="pos.key"))

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        ids = [str(item["id"]) for item in items if isinstance(item, dict) and "id" in item]
        return "\n".join(ids)
    if "id" in result.data:
        return str(result.data["id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _cell(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    if value is None:
        return "-"
    return str(value)


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="pos.ok"), Text(f"  {result.op}", style="pos.op"))


def _render_fields(console: Console, data: dict[str, Any]) -> None:
    for key, value in data.items():
        line = Text(f"  {key}: ", style="pos.key")
        style = style_for_status(value) if key == "status" and isinstance(value, str) else ""
        line.append(_cell(value), style=style)
        console.print(line)


def _render_items(console: Console, items: list[Any]) -> None:
    if not items:
        console.print(Text("  (none)", style="pos.key"))
        return

    columns = list(items[0].keys()) if isinstance(items[0], dict) else ["value"]
    table = Table(show_header=True, header_style="pos.key", box=None, pad_edge=False)
    for column in columns:
        table.add_column(column)
    for item in items:
        row = item if isinstance(item, dict) else {"value": item}
        cells: list[Text] = []
        for column in columns:
            value = row.get(column)
            style = "pos.id" if column == "id" else ""
            if column == "status" and isinstance(value, str):
                style = style_for_status(value)
            cells.append(Text(_cell(value), style=style))
        table.add_row(*cells)
    console.print(table)


def _render_error(console: Console, result: ServiceResult, *, verbose: bool) -> None:
    error = result.error
    code = error.code if error else "ERROR"
    message = error.message if error else "Unknown error"
    console.print(
        Text("ERROR", style="pos.error"),
        Text(f"  {result.op}", style="pos.op"),
        Text(f"  [{code}] {message}"),
    )
    if verbose and error and error.detail:
        for key, value in error.detail.items():
            console.print(Text(f"  {key}: {_cell(value)}", style="pos.key"))
