"""SQLite database engine and schema via SQLAlchemy Core."""

from posctl.infrastructure.database.engine import create_db_engine, init_database
from posctl.infrastructure.database.schema import (
    menu_groups,
    menu_line_items,
    menus,
    metadata,
    order_line_items,
    order_tables,
    orders,
    products,
    table_groups,
)

__all__ = [
    "create_db_engine",
    "init_database",
    "menu_groups",
    "menu_line_items",
    "menus",
    "metadata",
    "order_line_items",
    "order_tables",
    "orders",
    "products",
    "table_groups",
]
