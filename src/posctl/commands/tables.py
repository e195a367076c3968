"""Command groups: table and table-group."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from posctl.commands._base import PosGroup
from posctl.services._helpers import dump, dump_all
from posctl.services.tables import TableGroupService, TableService

if TYPE_CHECKING:
    from posctl.commands._context import AppContext


# ── table ────────────────────────────────────────────────────────────


@click.group(
    cls=PosGroup,
    examples="""\
  posctl table create --guests 4 --occupied
  posctl table list
  posctl table empty 1 true
  posctl table guests 1 3""",
)
def table() -> None:
    """Create tables and change their occupancy."""


@table.command("create")
@click.option("--guests", "number_of_guests", default=0, type=int, help="Number of guests.")
@click.option("--empty/--occupied", default=True, help="Initial occupancy (default: empty).")
@click.pass_obj
def table_create(app: AppContext, number_of_guests: int, empty: bool) -> None:
    """Create a table."""
    app.run(
        "create_table",
        lambda: dump(TableService(app.store).create_table(number_of_guests, empty)),
    )


@table.command("list")
@click.pass_obj
def table_list(app: AppContext) -> None:
    """List all tables."""
    app.run("list_tables", lambda: {"items": dump_all(TableService(app.store).list_tables())})


@table.command("show")
@click.argument("table_id", type=int)
@click.pass_obj
def table_show(app: AppContext, table_id: int) -> None:
    """Show one table."""
    app.run("get_table", lambda: dump(TableService(app.store).get_table(table_id)))


@table.command(
    "empty",
    examples="""\
  posctl table empty 1 true
  posctl table empty 1 false""",
)
@click.argument("table_id", type=int)
@click.argument("empty", type=click.BOOL)
@click.pass_obj
def table_empty(app: AppContext, table_id: int, empty: bool) -> None:
    """Mark a table empty (true) or occupied (false)."""
    app.run("change_empty", lambda: dump(TableService(app.store).change_empty(table_id, empty)))


@table.command("guests")
@click.argument("table_id", type=int)
@click.argument("number_of_guests", type=int)
@click.pass_obj
def table_guests(app: AppContext, table_id: int, number_of_guests: int) -> None:
    """Change the number of guests at an occupied table."""
    app.run(
        "change_number_of_guests",
        lambda: dump(TableService(app.store).change_number_of_guests(table_id, number_of_guests)),
    )


# ── table-group ──────────────────────────────────────────────────────


@click.group(
    "table-group",
    cls=PosGroup,
    examples="""\
  posctl table-group create 1 2 3
  posctl table-group list
  posctl table-group ungroup 1""",
)
def table_group() -> None:
    """Combine empty tables into a group and split them again."""


@table_group.command("create")
@click.argument("table_ids", nargs=-1, type=int)
@click.pass_obj
def table_group_create(app: AppContext, table_ids: tuple[int, ...]) -> None:
    """Group two or more empty, ungrouped tables."""
    app.run("group_tables", lambda: dump(TableGroupService(app.store).group(table_ids)))


@table_group.command("ungroup")
@click.argument("table_group_id", type=int)
@click.pass_obj
def table_group_ungroup(app: AppContext, table_group_id: int) -> None:
    """Dissolve a group whose tables have no unresolved orders."""

    def _ungroup() -> dict[str, object]:
        released = TableGroupService(app.store).ungroup(table_group_id)
        return {"table_group_id": table_group_id, "tables": dump_all(released)}

    app.run("ungroup_tables", _ungroup)


@table_group.command("list")
@click.pass_obj
def table_group_list(app: AppContext) -> None:
    """List table groups and their current members."""
    app.run(
        "list_table_groups",
        lambda: {"items": dump_all(TableGroupService(app.store).list_table_groups())},
    )


@table_group.command("show")
@click.argument("table_group_id", type=int)
@click.pass_obj
def table_group_show(app: AppContext, table_group_id: int) -> None:
    """Show one table group."""
    app.run(
        "get_table_group",
        lambda: dump(TableGroupService(app.store).get_table_group(table_group_id)),
    )
