"""Connection-scoped repositories, one per entity collection."""

from posctl.infrastructure.repositories.catalog import (
    MenuGroupRepository,
    MenuRepository,
    ProductRepository,
)
from posctl.infrastructure.repositories.orders import OrderRepository
from posctl.infrastructure.repositories.tables import OrderTableRepository, TableGroupRepository

__all__ = [
    "MenuGroupRepository",
    "MenuRepository",
    "OrderRepository",
    "OrderTableRepository",
    "ProductRepository",
    "TableGroupRepository",
]
