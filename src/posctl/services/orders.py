"""OrderService — order placement and the status lifecycle.

Placement pipeline: TABLE (exists, occupied) → LINES (non-empty, known
menus) → PERSIST in COOKING → EVENT.

Status changes overwrite the status column only. Completing an order does
not release its table; that stays an explicit table operation.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from posctl.domain.errors import NotFoundError
from posctl.domain.lifecycle import INITIAL_ORDER_STATUS, ensure_transition, parse_order_status
from posctl.domain.models import Order, OrderLineItem, OrderLineRequest
from posctl.domain.ordering import validate_order_lines
from posctl.domain.tables import ensure_can_take_order
from posctl.services._helpers import now_iso
from posctl.services.base import BaseService
from posctl.services.telemetry import traced

log = structlog.get_logger(__name__)


class OrderService(BaseService):
    """Places orders and advances their status."""

    @traced
    def create_order(self, order_table_id: int, line_items: Sequence[OrderLineRequest]) -> Order:
        """Place an order at an occupied table.

        Raises:
            NotFoundError: the table does not exist.
            ConflictError: the table is empty.
            EmptyOrderError: no line items.
            DanglingReferenceError: a line item names an unknown menu.
        """
        with self._store.transaction() as txn:
            table = txn.tables.find_by_id(order_table_id)
            if table is None:
                raise NotFoundError(f"No table with ID: {order_table_id}", table_id=order_table_id)
            ensure_can_take_order(table)

            known = txn.menus.existing_ids(r.menu_id for r in line_items)
            validate_order_lines(line_items, known)

            order = txn.orders.create(
                order_table_id,
                INITIAL_ORDER_STATUS,
                now_iso(),
                [OrderLineItem(menu_id=r.menu_id, quantity=r.quantity) for r in line_items],
            )

        log.debug("order.created", order_id=order.id, table_id=order_table_id)
        self._dispatch_event(
            "post_create_order",
            {
                "order_id": order.id,
                "order_table_id": order.order_table_id,
                "status": str(order.status),
            },
        )
        return order

    @traced
    def list_orders(self) -> list[Order]:
        with self._store.read() as txn:
            return txn.orders.find_all()

    @traced
    def get_order(self, order_id: int) -> Order:
        with self._store.read() as txn:
            order = txn.orders.find_by_id(order_id)
        if order is None:
            raise NotFoundError(f"No order with ID: {order_id}", order_id=order_id)
        return order

    @traced
    def change_order_status(self, order_id: int, status: str) -> Order:
        """Overwrite an order's status.

        The label is parsed before the order is read, so an unknown label is
        a ValidationError even for an unknown order.

        Raises:
            ValidationError: *status* is not a known label.
            NotFoundError: the order does not exist.
            ConflictError: the order is already COMPLETION (or, with strict
                transitions, the move is not forward).
        """
        target = parse_order_status(status)

        with self._store.transaction() as txn:
            order = txn.orders.find_by_id(order_id)
            if order is None:
                raise NotFoundError(f"No order with ID: {order_id}", order_id=order_id)
            ensure_transition(order.status, target, strict=self._strict_transitions)
            txn.orders.update_status(order_id, target)

        previous = order.status
        updated = order.model_copy(update={"status": target})
        log.debug(
            "order.status_changed",
            order_id=order_id,
            previous=str(previous),
            status=str(target),
        )
        self._dispatch_event(
            "post_change_order_status",
            {"order_id": order_id, "previous_status": str(previous), "status": str(target)},
        )
        return updated
