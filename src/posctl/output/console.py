"""Rich Console factory and theme for posctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

POS_THEME = Theme(
    {
        "pos.ok": "bold green",
        "pos.error": "bold red",
        "pos.op": "bold cyan",
        "pos.key": "dim",
        "pos.id": "bold blue",
        "pos.status.cooking": "yellow",
        "pos.status.meal": "cyan",
        "pos.status.completion": "green",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "COOKING": "pos.status.cooking",
    "MEAL": "pos.status.meal",
    "COMPLETION": "pos.status.completion",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=POS_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Return the Rich style name for an order status."""
    return _STATUS_STYLES.get(status, "")
