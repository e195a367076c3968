"""Custom Click base classes and shared parameter parsers.

PosCommand and PosGroup accept an ``examples`` parameter. When
``--examples`` is passed, the command prints usage examples and exits.
This keeps ``--help`` concise while making examples available on demand.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

import click


def _add_examples_option(cmd: click.Command | click.Group, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class PosCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class PosGroup(click.Group):
    """Click Group subclass that supports an ``--examples`` flag.

    Sets ``command_class = PosCommand`` so all subcommands automatically
    accept the ``examples`` parameter without explicit ``cls=`` each time.
    """

    command_class = PosCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


# ---------------------------------------------------------------------------
# Parameter callbacks
# ---------------------------------------------------------------------------


def parse_amount(_ctx: click.Context, _param: click.Parameter, value: str | None) -> Decimal | None:
    """Parse a price option into a Decimal. Sign checks belong to the domain."""
    if value is None:
        return None
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise click.BadParameter(f"{value!r} is not a valid amount") from None
    if not amount.is_finite():
        raise click.BadParameter(f"{value!r} is not a valid amount")
    return amount


def parse_line_items(
    _ctx: click.Context, _param: click.Parameter, values: tuple[str, ...]
) -> list[tuple[int, int]]:
    """Parse repeated ``ID:QTY`` options into ``(id, quantity)`` pairs."""
    pairs: list[tuple[int, int]] = []
    for raw in values:
        ref, sep, qty = raw.partition(":")
        try:
            pairs.append((int(ref), int(qty) if sep else 1))
        except ValueError:
            raise click.BadParameter(f"{raw!r} is not ID or ID:QTY") from None
    return pairs
