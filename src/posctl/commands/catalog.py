"""Command groups: product, menu-group, and menu."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

import click

from posctl.commands._base import PosGroup, parse_amount, parse_line_items
from posctl.domain.models import MenuLineRequest
from posctl.services._helpers import dump, dump_all
from posctl.services.catalog import MenuGroupService, MenuService, ProductService

if TYPE_CHECKING:
    from posctl.commands._context import AppContext


# ── product ──────────────────────────────────────────────────────────


@click.group(
    cls=PosGroup,
    examples="""\
  posctl product create "Fried Chicken" --price 16000
  posctl product list""",
)
def product() -> None:
    """Register and list catalog products."""


@product.command("create")
@click.argument("name")
@click.option("--price", required=True, callback=parse_amount, help="Unit price.")
@click.pass_obj
def product_create(app: AppContext, name: str, price: Decimal) -> None:
    """Register a product. Products cannot be changed afterwards."""
    app.run("create_product", lambda: dump(ProductService(app.store).create_product(name, price)))


@product.command("list")
@click.pass_obj
def product_list(app: AppContext) -> None:
    """List all products."""
    app.run(
        "list_products",
        lambda: {"items": dump_all(ProductService(app.store).list_products())},
    )


# ── menu-group ───────────────────────────────────────────────────────


@click.group(
    "menu-group",
    cls=PosGroup,
    examples="""\
  posctl menu-group create "Lunch Sets"
  posctl menu-group list""",
)
def menu_group() -> None:
    """Create and list menu groups."""


@menu_group.command("create")
@click.argument("name")
@click.pass_obj
def menu_group_create(app: AppContext, name: str) -> None:
    """Create a menu group."""
    app.run("create_menu_group", lambda: dump(MenuGroupService(app.store).create_menu_group(name)))


@menu_group.command("list")
@click.pass_obj
def menu_group_list(app: AppContext) -> None:
    """List all menu groups."""
    app.run(
        "list_menu_groups",
        lambda: {"items": dump_all(MenuGroupService(app.store).list_menu_groups())},
    )


# ── menu ─────────────────────────────────────────────────────────────


@click.group(
    cls=PosGroup,
    examples="""\
  posctl menu create "Chicken Combo" --price 30000 --group 1 --item 1:2
  posctl menu create "Half and Half" --price 17000 --group 1 --item 1 --item 2
  posctl menu list""",
)
def menu() -> None:
    """Create and list menus."""


@menu.command(
    "create",
    examples="""\
  posctl menu create "Chicken Combo" --price 30000 --group 1 --item 1:2""",
)
@click.argument("name")
@click.option("--price", required=True, callback=parse_amount, help="Menu price.")
@click.option("--group", "menu_group_id", required=True, type=int, help="Menu group ID.")
@click.option(
    "--item",
    "items",
    multiple=True,
    callback=parse_line_items,
    help="Product as PRODUCT_ID[:QTY] (repeatable).",
)
@click.pass_obj
def menu_create(
    app: AppContext,
    name: str,
    price: Decimal,
    menu_group_id: int,
    items: list[tuple[int, int]],
) -> None:
    """Create a menu priced at or below the sum of its products."""
    lines = [MenuLineRequest(product_id=pid, quantity=qty) for pid, qty in items]
    app.run(
        "create_menu",
        lambda: dump(MenuService(app.store).create_menu(name, price, menu_group_id, lines)),
    )


@menu.command("list")
@click.pass_obj
def menu_list(app: AppContext) -> None:
    """List all menus with their line items."""
    app.run("list_menus", lambda: {"items": dump_all(MenuService(app.store).list_menus())})
