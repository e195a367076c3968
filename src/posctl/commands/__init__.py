"""Subcommand modules for posctl.

Provides register_commands() which uses deferred imports to keep
``posctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups on the root CLI group."""
    from posctl.commands.catalog import menu, menu_group, product
    from posctl.commands.orders import order
    from posctl.commands.tables import table, table_group

    cli.add_command(product)
    cli.add_command(menu_group)
    cli.add_command(menu)
    cli.add_command(table)
    cli.add_command(table_group)
    cli.add_command(order)
