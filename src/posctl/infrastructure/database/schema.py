"""SQLAlchemy Core table definitions for the posctl database.

Prices are stored as decimal strings (TEXT) and converted to ``Decimal`` by
the repositories; SQLite has no native decimal type.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
)

metadata = MetaData()

products = Table(
    "products",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("price", Text, nullable=False),
)

menu_groups = Table(
    "menu_groups",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
)

menus = Table(
    "menus",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("price", Text, nullable=False),
    Column("menu_group_id", Integer, ForeignKey("menu_groups.id"), nullable=False),
)

menu_line_items = Table(
    "menu_line_items",
    metadata,
    Column("seq", Integer, primary_key=True, autoincrement=True),
    Column("menu_id", Integer, ForeignKey("menus.id"), nullable=False),
    Column("product_id", Integer, ForeignKey("products.id"), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("unit_price", Text, nullable=False),  # snapshot at menu creation
)

table_groups = Table(
    "table_groups",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("created_at", Text, nullable=False),
)

order_tables = Table(
    "order_tables",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("table_group_id", Integer, ForeignKey("table_groups.id")),
    Column("number_of_guests", Integer, nullable=False, default=0, server_default="0"),
    Column("empty", Integer, nullable=False, default=1, server_default="1"),
)

orders = Table(
    "orders",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("order_table_id", Integer, ForeignKey("order_tables.id"), nullable=False),
    Column("status", Text, nullable=False),
    Column("ordered_at", Text, nullable=False),
)

order_line_items = Table(
    "order_line_items",
    metadata,
    Column("seq", Integer, primary_key=True, autoincrement=True),
    Column("order_id", Integer, ForeignKey("orders.id"), nullable=False),
    Column("menu_id", Integer, ForeignKey("menus.id"), nullable=False),
    Column("quantity", Integer, nullable=False),
)

# ---------------------------------------------------------------------------
# Indexes for frequently filtered columns
# ---------------------------------------------------------------------------

Index("ix_menu_line_items_menu", menu_line_items.c.menu_id)
Index("ix_order_tables_group", order_tables.c.table_group_id)
Index("ix_orders_table", orders.c.order_table_id)
Index("ix_orders_status", orders.c.status)
Index("ix_order_line_items_order", order_line_items.c.order_id)
