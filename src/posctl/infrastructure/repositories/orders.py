"""Repository for orders and their line items."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any

from sqlalchemy import insert, select, update

from posctl.domain.lifecycle import OrderStatus
from posctl.domain.models import Order, OrderLineItem
from posctl.infrastructure.database.schema import order_line_items, orders

if TYPE_CHECKING:
    from sqlalchemy import Connection


class OrderRepository:
    """Persist orders; the status column is the only field ever updated."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def create(
        self,
        order_table_id: int,
        status: OrderStatus,
        ordered_at: str,
        line_items: Sequence[OrderLineItem],
    ) -> Order:
        result = self._conn.execute(
            insert(orders).values(
                order_table_id=order_table_id,
                status=str(status),
                ordered_at=ordered_at,
            )
        )
        order_id = int(result.inserted_primary_key[0])
        for item in line_items:
            self._conn.execute(
                insert(order_line_items).values(
                    order_id=order_id,
                    menu_id=item.menu_id,
                    quantity=item.quantity,
                )
            )
        return Order(
            id=order_id,
            order_table_id=order_table_id,
            status=status,
            ordered_at=ordered_at,
            line_items=tuple(line_items),
        )

    def find_by_id(self, order_id: int) -> Order | None:
        row = self._conn.execute(select(orders).where(orders.c.id == order_id)).first()
        if row is None:
            return None
        return _order(row, self._line_items([order_id]).get(order_id, []))

    def find_all(self) -> list[Order]:
        return self._fetch(select(orders).order_by(orders.c.id))

    def find_by_table_ids(self, table_ids: Iterable[int]) -> list[Order]:
        ids = set(table_ids)
        if not ids:
            return []
        return self._fetch(
            select(orders).where(orders.c.order_table_id.in_(ids)).order_by(orders.c.id)
        )

    def update_status(self, order_id: int, status: OrderStatus) -> None:
        self._conn.execute(update(orders).where(orders.c.id == order_id).values(status=str(status)))

    def _fetch(self, stmt: Any) -> list[Order]:
        rows = self._conn.execute(stmt).fetchall()
        items = self._line_items([row.id for row in rows])
        return [_order(row, items.get(row.id, [])) for row in rows]

    def _line_items(self, order_ids: list[int]) -> dict[int, list[OrderLineItem]]:
        if not order_ids:
            return {}
        rows = self._conn.execute(
            select(order_line_items)
            .where(order_line_items.c.order_id.in_(order_ids))
            .order_by(order_line_items.c.seq)
        ).fetchall()
        grouped: dict[int, list[OrderLineItem]] = defaultdict(list)
        for row in rows:
            grouped[row.order_id].append(OrderLineItem(menu_id=row.menu_id, quantity=row.quantity))
        return grouped


def _order(row: Any, line_items: list[OrderLineItem]) -> Order:
    return Order(
        id=row.id,
        order_table_id=row.order_table_id,
        status=OrderStatus(row.status),
        ordered_at=row.ordered_at,
        line_items=tuple(line_items),
    )
