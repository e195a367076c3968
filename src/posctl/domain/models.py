"""Domain records for the point-of-sale core.

All records are frozen pydantic models. Mutations produce new records via
``model_copy(update=...)``; the store persists them explicitly.

Menu line items carry a ``unit_price`` copied from the catalog when the menu
is created. It is an owned value, never a live reference to the product row.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from posctl.domain.lifecycle import OrderStatus, is_active

# --- Catalog ---


class Product(BaseModel):
    """A priced item in the catalog. Immutable once created."""

    model_config = {"frozen": True}

    id: int
    name: str
    price: Decimal


class MenuGroup(BaseModel):
    """Pure categorization for menus."""

    model_config = {"frozen": True}

    id: int
    name: str


class MenuLineRequest(BaseModel):
    """Requested (product, quantity) pair for a new menu."""

    model_config = {"frozen": True}

    product_id: int
    quantity: int


class MenuLineItem(BaseModel):
    """A product, its quantity, and the unit price captured at menu creation."""

    model_config = {"frozen": True}

    product_id: int
    quantity: int
    unit_price: Decimal

    @property
    def amount(self) -> Decimal:
        return self.unit_price * self.quantity


class Menu(BaseModel):
    """A priced bundle of products belonging to one menu group."""

    model_config = {"frozen": True}

    id: int
    name: str
    price: Decimal
    menu_group_id: int
    line_items: tuple[MenuLineItem, ...] = Field(default_factory=tuple)


# --- Seating ---


class OrderTable(BaseModel):
    """A physical table. ``table_group_id`` is a non-owning back-reference."""

    model_config = {"frozen": True}

    id: int
    number_of_guests: int = 0
    empty: bool = True
    table_group_id: int | None = None

    @property
    def grouped(self) -> bool:
        return self.table_group_id is not None


class TableGroup(BaseModel):
    """Two or more tables seated together as one occupancy unit."""

    model_config = {"frozen": True}

    id: int
    created_at: str
    table_ids: tuple[int, ...] = Field(default_factory=tuple)


# --- Orders ---


class OrderLineRequest(BaseModel):
    """Requested (menu, quantity) pair for a new order."""

    model_config = {"frozen": True}

    menu_id: int
    quantity: int


class OrderLineItem(BaseModel):
    """A menu and its ordered quantity. Owned by its order."""

    model_config = {"frozen": True}

    menu_id: int
    quantity: int


class Order(BaseModel):
    """An order placed at a table."""

    model_config = {"frozen": True}

    id: int
    order_table_id: int
    status: OrderStatus
    ordered_at: str
    line_items: tuple[OrderLineItem, ...] = Field(default_factory=tuple)

    @property
    def active(self) -> bool:
        return is_active(self.status)
