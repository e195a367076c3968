"""Repositories for products, menu groups, and menus."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from sqlalchemy import insert, select

from posctl.domain.models import Menu, MenuGroup, MenuLineItem, Product
from posctl.infrastructure.database.schema import menu_groups, menu_line_items, menus, products

if TYPE_CHECKING:
    from sqlalchemy import Connection


class ProductRepository:
    """Create and look up catalog products. Products are never updated."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def create(self, name: str, price: Decimal) -> Product:
        result = self._conn.execute(insert(products).values(name=name, price=str(price)))
        return Product(id=int(result.inserted_primary_key[0]), name=name, price=price)

    def find_by_id(self, product_id: int) -> Product | None:
        row = self._conn.execute(select(products).where(products.c.id == product_id)).first()
        return _product(row) if row is not None else None

    def find_all(self) -> list[Product]:
        rows = self._conn.execute(select(products).order_by(products.c.id)).fetchall()
        return [_product(row) for row in rows]


class MenuGroupRepository:
    """Create and look up menu groups."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def create(self, name: str) -> MenuGroup:
        result = self._conn.execute(insert(menu_groups).values(name=name))
        return MenuGroup(id=int(result.inserted_primary_key[0]), name=name)

    def find_by_id(self, menu_group_id: int) -> MenuGroup | None:
        row = self._conn.execute(
            select(menu_groups).where(menu_groups.c.id == menu_group_id)
        ).first()
        return MenuGroup(id=row.id, name=row.name) if row is not None else None

    def exists(self, menu_group_id: int) -> bool:
        return self.find_by_id(menu_group_id) is not None

    def find_all(self) -> list[MenuGroup]:
        rows = self._conn.execute(select(menu_groups).order_by(menu_groups.c.id)).fetchall()
        return [MenuGroup(id=row.id, name=row.name) for row in rows]


class MenuRepository:
    """Persist menus together with their snapshotted line items."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def create(
        self,
        name: str,
        price: Decimal,
        menu_group_id: int,
        line_items: Sequence[MenuLineItem],
    ) -> Menu:
        result = self._conn.execute(
            insert(menus).values(name=name, price=str(price), menu_group_id=menu_group_id)
        )
        menu_id = int(result.inserted_primary_key[0])
        for item in line_items:
            self._conn.execute(
                insert(menu_line_items).values(
                    menu_id=menu_id,
                    product_id=item.product_id,
                    quantity=item.quantity,
                    unit_price=str(item.unit_price),
                )
            )
        return Menu(
            id=menu_id,
            name=name,
            price=price,
            menu_group_id=menu_group_id,
            line_items=tuple(line_items),
        )

    def find_by_id(self, menu_id: int) -> Menu | None:
        row = self._conn.execute(select(menus).where(menus.c.id == menu_id)).first()
        if row is None:
            return None
        return _menu(row, self._line_items([menu_id]).get(menu_id, []))

    def find_all(self) -> list[Menu]:
        rows = self._conn.execute(select(menus).order_by(menus.c.id)).fetchall()
        items = self._line_items([row.id for row in rows])
        return [_menu(row, items.get(row.id, [])) for row in rows]

    def existing_ids(self, menu_ids: Iterable[int]) -> set[int]:
        """Return the subset of *menu_ids* that exist."""
        ids = set(menu_ids)
        if not ids:
            return set()
        rows = self._conn.execute(select(menus.c.id).where(menus.c.id.in_(ids))).fetchall()
        return {int(row.id) for row in rows}

    def _line_items(self, menu_ids: list[int]) -> dict[int, list[MenuLineItem]]:
        if not menu_ids:
            return {}
        rows = self._conn.execute(
            select(menu_line_items)
            .where(menu_line_items.c.menu_id.in_(menu_ids))
            .order_by(menu_line_items.c.seq)
        ).fetchall()
        grouped: dict[int, list[MenuLineItem]] = defaultdict(list)
        for row in rows:
            grouped[row.menu_id].append(
                MenuLineItem(
                    product_id=row.product_id,
                    quantity=row.quantity,
                    unit_price=Decimal(row.unit_price),
                )
            )
        return grouped


def _product(row: Any) -> Product:
    return Product(id=row.id, name=row.name, price=Decimal(row.price))


def _menu(row: Any, line_items: list[MenuLineItem]) -> Menu:
    return Menu(
        id=row.id,
        name=row.name,
        price=Decimal(row.price),
        menu_group_id=row.menu_group_id,
        line_items=tuple(line_items),
    )
