"""Pluggy hook specifications for posctl lifecycle events.

Events fire after the owning transaction commits, so a plugin only ever
observes state that was actually persisted.
"""

from __future__ import annotations

import pluggy

hookspec = pluggy.HookspecMarker("posctl")


class PosctlHookSpec:
    """Hook specifications for the posctl plugin system."""

    @hookspec
    def post_create_menu(self, menu_id: int, name: str, price: str, menu_group_id: int) -> None:
        """Called after a menu is created."""

    @hookspec
    def post_create_order(self, order_id: int, order_table_id: int, status: str) -> None:
        """Called after an order is placed."""

    @hookspec
    def post_change_order_status(
        self,
        order_id: int,
        previous_status: str,
        status: str,
    ) -> None:
        """Called after an order's status changes."""

    @hookspec
    def post_change_table(
        self,
        table_id: int,
        fields_changed: list[str],
        empty: bool,
        number_of_guests: int,
    ) -> None:
        """Called after a table's occupancy or guest count changes."""

    @hookspec
    def post_group_tables(self, table_group_id: int, table_ids: list[int]) -> None:
        """Called after tables are combined into a group."""

    @hookspec
    def post_ungroup_tables(self, table_group_id: int, table_ids: list[int]) -> None:
        """Called after a group is dissolved."""
