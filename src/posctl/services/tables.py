"""Table services — occupancy of single tables and table grouping.

Every mutation reads the current state, runs the domain guard, and writes
back inside one transaction. A guard failure rolls the whole operation
back, so grouping never leaves some members attached and others not.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from posctl.domain.errors import NotFoundError
from posctl.domain.models import OrderTable, TableGroup
from posctl.domain.tables import (
    ensure_all_found,
    ensure_can_change_empty,
    ensure_can_change_guests,
    ensure_can_group,
    ensure_can_ungroup,
    ensure_guest_count,
    normalize_group_ids,
)
from posctl.services._helpers import now_iso
from posctl.services.base import BaseService
from posctl.services.telemetry import traced

log = structlog.get_logger(__name__)


class TableService(BaseService):
    """Creates tables and guards their occupancy state."""

    @traced
    def create_table(self, number_of_guests: int = 0, empty: bool = True) -> OrderTable:
        ensure_guest_count(number_of_guests)
        with self._store.transaction() as txn:
            return txn.tables.create(number_of_guests, empty)

    @traced
    def list_tables(self) -> list[OrderTable]:
        with self._store.read() as txn:
            return txn.tables.find_all()

    @traced
    def get_table(self, table_id: int) -> OrderTable:
        with self._store.read() as txn:
            table = txn.tables.find_by_id(table_id)
        if table is None:
            raise NotFoundError(f"No table with ID: {table_id}", table_id=table_id)
        return table

    @traced
    def change_empty(self, table_id: int, empty: bool) -> OrderTable:
        """Set the empty flag of an ungrouped table with no active orders."""
        with self._store.transaction() as txn:
            table = txn.tables.find_by_id(table_id)
            if table is None:
                raise NotFoundError(f"No table with ID: {table_id}", table_id=table_id)
            ensure_can_change_empty(table, txn.orders.find_by_table_ids([table_id]))
            updated = txn.tables.update(table.model_copy(update={"empty": empty}))

        self._table_changed(updated, ["empty"])
        return updated

    @traced
    def change_number_of_guests(self, table_id: int, number_of_guests: int) -> OrderTable:
        """Set the guest count of an occupied table."""
        ensure_guest_count(number_of_guests)
        with self._store.transaction() as txn:
            table = txn.tables.find_by_id(table_id)
            if table is None:
                raise NotFoundError(f"No table with ID: {table_id}", table_id=table_id)
            ensure_can_change_guests(table)
            updated = txn.tables.update(
                table.model_copy(update={"number_of_guests": number_of_guests})
            )

        self._table_changed(updated, ["number_of_guests"])
        return updated

    def _table_changed(self, table: OrderTable, fields_changed: list[str]) -> None:
        log.debug("table.changed", table_id=table.id, fields=fields_changed)
        self._dispatch_event(
            "post_change_table",
            {
                "table_id": table.id,
                "fields_changed": fields_changed,
                "empty": table.empty,
                "number_of_guests": table.number_of_guests,
            },
        )


class TableGroupService(BaseService):
    """Combines empty tables into one occupancy unit and splits them again."""

    @traced
    def group(self, table_ids: Iterable[int]) -> TableGroup:
        """Group two or more empty, ungrouped tables.

        Members are attached to the new group and marked occupied.

        Raises:
            ValidationError: fewer than two distinct tables.
            NotFoundError: any table does not exist.
            ConflictError: any table is occupied or already grouped.
        """
        ids = normalize_group_ids(table_ids)

        with self._store.transaction() as txn:
            ensure_all_found(ids, txn.tables.count_matching(ids))
            tables = txn.tables.find_by_ids(ids)
            ensure_can_group(tables)

            group = txn.table_groups.create(now_iso())
            for table in tables:
                txn.tables.update(
                    table.model_copy(update={"table_group_id": group.id, "empty": False})
                )
            group = group.model_copy(update={"table_ids": tuple(t.id for t in tables)})

        log.debug("tables.grouped", table_group_id=group.id, table_ids=list(group.table_ids))
        self._dispatch_event(
            "post_group_tables",
            {"table_group_id": group.id, "table_ids": list(group.table_ids)},
        )
        return group

    @traced
    def ungroup(self, table_group_id: int) -> list[OrderTable]:
        """Detach every member table from the group.

        Empty flags and guest counts are left as they are.

        Raises:
            NotFoundError: the group does not exist or has no members.
            ConflictError: a member table has an active order.
        """
        with self._store.transaction() as txn:
            if txn.table_groups.find_by_id(table_group_id) is None:
                raise NotFoundError(
                    f"No table group with ID: {table_group_id}", table_group_id=table_group_id
                )
            members = txn.tables.find_by_group(table_group_id)
            ensure_can_ungroup(members, txn.orders.find_by_table_ids(t.id for t in members))

            released = [
                txn.tables.update(table.model_copy(update={"table_group_id": None}))
                for table in members
            ]

        table_ids = [t.id for t in released]
        log.debug("tables.ungrouped", table_group_id=table_group_id, table_ids=table_ids)
        self._dispatch_event(
            "post_ungroup_tables",
            {"table_group_id": table_group_id, "table_ids": table_ids},
        )
        return released

    @traced
    def list_table_groups(self) -> list[TableGroup]:
        with self._store.read() as txn:
            return txn.table_groups.find_all()

    @traced
    def get_table_group(self, table_group_id: int) -> TableGroup:
        with self._store.read() as txn:
            group = txn.table_groups.find_by_id(table_group_id)
        if group is None:
            raise NotFoundError(
                f"No table group with ID: {table_group_id}", table_group_id=table_group_id
            )
        return group
