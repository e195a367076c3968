"""Repositories for order tables and table groups.

Group membership lives on the table side (``order_tables.table_group_id``);
a group's member list is always derived from it, never stored twice.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, insert, select, update

from posctl.domain.models import OrderTable, TableGroup
from posctl.infrastructure.database.schema import order_tables, table_groups

if TYPE_CHECKING:
    from sqlalchemy import Connection


class OrderTableRepository:
    """Create, look up, and update order tables in place."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def create(self, number_of_guests: int, empty: bool) -> OrderTable:
        result = self._conn.execute(
            insert(order_tables).values(number_of_guests=number_of_guests, empty=int(empty))
        )
        return OrderTable(
            id=int(result.inserted_primary_key[0]),
            number_of_guests=number_of_guests,
            empty=empty,
        )

    def find_by_id(self, table_id: int) -> OrderTable | None:
        row = self._conn.execute(select(order_tables).where(order_tables.c.id == table_id)).first()
        return _table(row) if row is not None else None

    def find_all(self) -> list[OrderTable]:
        rows = self._conn.execute(select(order_tables).order_by(order_tables.c.id)).fetchall()
        return [_table(row) for row in rows]

    def find_by_ids(self, table_ids: Iterable[int]) -> list[OrderTable]:
        ids = set(table_ids)
        if not ids:
            return []
        rows = self._conn.execute(
            select(order_tables).where(order_tables.c.id.in_(ids)).order_by(order_tables.c.id)
        ).fetchall()
        return [_table(row) for row in rows]

    def find_by_group(self, table_group_id: int) -> list[OrderTable]:
        rows = self._conn.execute(
            select(order_tables)
            .where(order_tables.c.table_group_id == table_group_id)
            .order_by(order_tables.c.id)
        ).fetchall()
        return [_table(row) for row in rows]

    def count_matching(self, table_ids: Iterable[int]) -> int:
        """Count how many of *table_ids* (de-duplicated) exist."""
        ids = set(table_ids)
        if not ids:
            return 0
        stmt = select(func.count(order_tables.c.id)).where(order_tables.c.id.in_(ids))
        return int(self._conn.execute(stmt).scalar_one() or 0)

    def update(self, table: OrderTable) -> OrderTable:
        """Overwrite the stored state of *table*."""
        self._conn.execute(
            update(order_tables)
            .where(order_tables.c.id == table.id)
            .values(
                number_of_guests=table.number_of_guests,
                empty=int(table.empty),
                table_group_id=table.table_group_id,
            )
        )
        return table


class TableGroupRepository:
    """Create and resolve table groups."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def create(self, created_at: str) -> TableGroup:
        """Insert an empty group; members are attached table-side."""
        result = self._conn.execute(insert(table_groups).values(created_at=created_at))
        return TableGroup(id=int(result.inserted_primary_key[0]), created_at=created_at)

    def find_by_id(self, table_group_id: int) -> TableGroup | None:
        row = self._conn.execute(
            select(table_groups).where(table_groups.c.id == table_group_id)
        ).first()
        if row is None:
            return None
        return _group(row, self._member_ids([table_group_id]).get(table_group_id, []))

    def find_all(self) -> list[TableGroup]:
        rows = self._conn.execute(select(table_groups).order_by(table_groups.c.id)).fetchall()
        members = self._member_ids([row.id for row in rows])
        return [_group(row, members.get(row.id, [])) for row in rows]

    def _member_ids(self, group_ids: list[int]) -> dict[int, list[int]]:
        if not group_ids:
            return {}
        rows = self._conn.execute(
            select(order_tables.c.id, order_tables.c.table_group_id)
            .where(order_tables.c.table_group_id.in_(group_ids))
            .order_by(order_tables.c.id)
        ).fetchall()
        grouped: dict[int, list[int]] = defaultdict(list)
        for row in rows:
            grouped[row.table_group_id].append(row.id)
        return grouped


def _table(row: Any) -> OrderTable:
    return OrderTable(
        id=row.id,
        number_of_guests=row.number_of_guests,
        empty=bool(row.empty),
        table_group_id=row.table_group_id,
    )


def _group(row: Any, table_ids: list[int]) -> TableGroup:
    return TableGroup(id=row.id, created_at=row.created_at, table_ids=tuple(table_ids))
