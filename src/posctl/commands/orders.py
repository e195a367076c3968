"""Command group: order placement and status changes."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from posctl.commands._base import PosGroup, parse_line_items
from posctl.domain.models import OrderLineRequest
from posctl.services._helpers import dump, dump_all
from posctl.services.orders import OrderService

if TYPE_CHECKING:
    from posctl.commands._context import AppContext

_ORDER_EXAMPLES = """\
  posctl order create --table 1 --item 1:2 --item 3
  posctl order list
  posctl order show 1
  posctl order status 1 MEAL
  posctl order status 1 COMPLETION"""


@click.group(cls=PosGroup, examples=_ORDER_EXAMPLES)
def order() -> None:
    """Place orders and move them through COOKING, MEAL, COMPLETION."""


@order.command("create")
@click.option("--table", "order_table_id", required=True, type=int, help="Table ID.")
@click.option(
    "--item",
    "items",
    multiple=True,
    callback=parse_line_items,
    help="Menu as MENU_ID[:QTY] (repeatable).",
)
@click.pass_obj
def order_create(app: AppContext, order_table_id: int, items: list[tuple[int, int]]) -> None:
    """Place an order at an occupied table. Starts in COOKING."""
    lines = [OrderLineRequest(menu_id=mid, quantity=qty) for mid, qty in items]
    app.run(
        "create_order",
        lambda: dump(OrderService(app.store).create_order(order_table_id, lines)),
    )


@order.command("list")
@click.pass_obj
def order_list(app: AppContext) -> None:
    """List all orders with their line items."""
    app.run("list_orders", lambda: {"items": dump_all(OrderService(app.store).list_orders())})


@order.command("show")
@click.argument("order_id", type=int)
@click.pass_obj
def order_show(app: AppContext, order_id: int) -> None:
    """Show one order."""
    app.run("get_order", lambda: dump(OrderService(app.store).get_order(order_id)))


@order.command("status")
@click.argument("order_id", type=int)
@click.argument("status")
@click.pass_obj
def order_status(app: AppContext, order_id: int, status: str) -> None:
    """Change an order's status (COOKING, MEAL, or COMPLETION)."""
    app.run(
        "change_order_status",
        lambda: dump(OrderService(app.store).change_order_status(order_id, status)),
    )
