"""Table occupancy and grouping rules.

Occupancy:
- A grouped table cannot toggle its empty flag on its own.
- A table with an active (COOKING or MEAL) order cannot be emptied.
- Guest count is non-negative and only changes on an occupied table.
- Orders are only taken at occupied tables.

Grouping:
- A group is formed from two or more distinct tables, each of which is
  empty and ungrouped. Members become occupied as one unit.
- A group with any member holding an active order cannot be split.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from posctl.domain.errors import ConflictError, NotFoundError, ValidationError
from posctl.domain.models import Order, OrderTable

MIN_GROUP_SIZE = 2


def _active_orders(orders: Iterable[Order]) -> list[Order]:
    return [order for order in orders if order.active]


# --- Occupancy ---


def ensure_guest_count(number_of_guests: int) -> int:
    """Return *number_of_guests* if it is non-negative."""
    if number_of_guests < 0:
        raise ValidationError(
            f"Number of guests must be non-negative, got {number_of_guests}",
            number_of_guests=number_of_guests,
        )
    return number_of_guests


def ensure_can_change_empty(table: OrderTable, orders: Iterable[Order]) -> None:
    """Raise unless *table* may toggle its empty flag."""
    if table.grouped:
        raise ConflictError(
            f"Table {table.id} belongs to group {table.table_group_id}; ungroup it first",
            table_id=table.id,
            table_group_id=table.table_group_id,
        )
    active = _active_orders(orders)
    if active:
        raise ConflictError(
            f"Table {table.id} has unresolved orders",
            table_id=table.id,
            order_ids=[order.id for order in active],
        )


def ensure_can_change_guests(table: OrderTable) -> None:
    """Raise if *table* is empty; guests are only counted at an occupied table."""
    if table.empty:
        raise ConflictError(f"Table {table.id} is empty", table_id=table.id)


def ensure_can_take_order(table: OrderTable) -> None:
    """Raise if *table* is empty."""
    if table.empty:
        raise ConflictError(f"Cannot order at empty table {table.id}", table_id=table.id)


# --- Grouping ---


def normalize_group_ids(table_ids: Iterable[int]) -> list[int]:
    """De-duplicate *table_ids* (keeping order) and enforce the minimum size."""
    distinct = list(dict.fromkeys(table_ids))
    if len(distinct) < MIN_GROUP_SIZE:
        raise ValidationError(
            f"A table group needs at least {MIN_GROUP_SIZE} distinct tables, got {len(distinct)}",
            table_ids=distinct,
        )
    return distinct


def ensure_all_found(table_ids: Sequence[int], found: int) -> None:
    """Raise :class:`NotFoundError` unless every requested table exists."""
    if found != len(table_ids):
        raise NotFoundError(
            f"Only {found} of {len(table_ids)} tables exist",
            table_ids=list(table_ids),
        )


def ensure_can_group(tables: Sequence[OrderTable]) -> None:
    """Raise unless every table is empty and ungrouped."""
    for table in tables:
        if table.grouped:
            raise ConflictError(
                f"Table {table.id} already belongs to group {table.table_group_id}",
                table_id=table.id,
            )
        if not table.empty:
            raise ConflictError(f"Table {table.id} is occupied", table_id=table.id)


def ensure_can_ungroup(tables: Sequence[OrderTable], orders: Iterable[Order]) -> None:
    """Raise if the group has no members or any member has an active order."""
    if not tables:
        raise NotFoundError("Table group has no member tables")
    active = _active_orders(orders)
    if active:
        raise ConflictError(
            "Cannot ungroup tables with unresolved orders",
            order_ids=[order.id for order in active],
            table_ids=sorted({order.order_table_id for order in active}),
        )
