"""Catalog services — products, menu groups, and menus.

Menu creation pipeline: RESOLVE (snapshot product prices) → VALIDATE
(price bound) → PERSIST → EVENT.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

import structlog

from posctl.domain.errors import DanglingReferenceError, ValidationError
from posctl.domain.models import Menu, MenuGroup, MenuLineRequest, Product
from posctl.domain.pricing import ensure_price, snapshot_line_items, validate_menu_price
from posctl.services.base import BaseService
from posctl.services.telemetry import trace_span, traced

log = structlog.get_logger(__name__)


def _ensure_name(name: str, *, what: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        raise ValidationError(f"{what} name must not be blank")
    return cleaned


class ProductService(BaseService):
    """Catalog products. Products are immutable once created."""

    @traced
    def create_product(self, name: str, price: Decimal) -> Product:
        name = _ensure_name(name, what="Product")
        ensure_price(price, what="Product price")
        with self._store.transaction() as txn:
            product = txn.products.create(name, price)
        log.debug("product.created", product_id=product.id, price=str(price))
        return product

    @traced
    def list_products(self) -> list[Product]:
        with self._store.read() as txn:
            return txn.products.find_all()


class MenuGroupService(BaseService):
    """Menu groups: pure categorization."""

    @traced
    def create_menu_group(self, name: str) -> MenuGroup:
        name = _ensure_name(name, what="Menu group")
        with self._store.transaction() as txn:
            return txn.menu_groups.create(name)

    @traced
    def list_menu_groups(self) -> list[MenuGroup]:
        with self._store.read() as txn:
            return txn.menu_groups.find_all()


class MenuService(BaseService):
    """Menus priced against a snapshot of their products' catalog prices."""

    @traced
    def create_menu(
        self,
        name: str,
        price: Decimal,
        menu_group_id: int,
        line_items: Sequence[MenuLineRequest],
    ) -> Menu:
        """Create a menu whose price does not exceed the sum of its products.

        Raises:
            ValidationError: blank name, negative price or quantity, or a
                price above the line total.
            DanglingReferenceError: unknown menu group or product.
        """
        name = _ensure_name(name, what="Menu")
        ensure_price(price, what="Menu price")

        with self._store.transaction() as txn:
            if not txn.menu_groups.exists(menu_group_id):
                raise DanglingReferenceError(
                    f"Unknown menu group: {menu_group_id}", menu_group_id=menu_group_id
                )

            with trace_span("snapshot_prices"):
                snapshot = snapshot_line_items(line_items, txn.products.find_by_id)
            total = validate_menu_price(price, snapshot)

            menu = txn.menus.create(name, price, menu_group_id, snapshot)

        log.debug("menu.created", menu_id=menu.id, price=str(price), total=str(total))
        self._dispatch_event(
            "post_create_menu",
            {
                "menu_id": menu.id,
                "name": menu.name,
                "price": str(menu.price),
                "menu_group_id": menu.menu_group_id,
            },
        )
        return menu

    @traced
    def list_menus(self) -> list[Menu]:
        with self._store.read() as txn:
            return txn.menus.find_all()
