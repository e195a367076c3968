"""Tests for ProductService, MenuGroupService, and MenuService."""

from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy import update

from posctl.domain.errors import DanglingReferenceError, ValidationError
from posctl.domain.models import MenuLineRequest
from posctl.infrastructure.database.schema import products
from posctl.infrastructure.store import Store
from posctl.services.catalog import MenuGroupService, MenuService, ProductService
from tests.conftest import create_product


class TestProductService:
    def test_create_product(self, store: Store) -> None:
        product = ProductService(store).create_product("  Fried Chicken ", Decimal("16000"))
        assert product.name == "Fried Chicken"
        assert product.price == Decimal("16000")
        assert ProductService(store).list_products() == [product]

    def test_blank_name(self, store: Store) -> None:
        with pytest.raises(ValidationError):
            ProductService(store).create_product("   ", Decimal("1"))

    def test_negative_price(self, store: Store) -> None:
        with pytest.raises(ValidationError):
            ProductService(store).create_product("Chicken", Decimal("-1"))
        assert ProductService(store).list_products() == []


class TestMenuGroupService:
    def test_create_and_list(self, store: Store) -> None:
        svc = MenuGroupService(store)
        group = svc.create_menu_group("Lunch Sets")
        assert svc.list_menu_groups() == [group]


class TestMenuService:
    @pytest.fixture
    def group_id(self, store: Store) -> int:
        return MenuGroupService(store).create_menu_group("Sets").id

    def test_price_equal_to_sum_accepted(self, store: Store, group_id: int) -> None:
        chicken = create_product(store, "Chicken", "10000")
        lines = [MenuLineRequest(product_id=chicken.id, quantity=1)]
        menu = MenuService(store).create_menu("Combo", Decimal("10000"), group_id, lines)
        assert menu.price == Decimal("10000")
        assert menu.line_items[0].unit_price == Decimal("10000")

    def test_price_above_sum_rejected(self, store: Store, group_id: int) -> None:
        chicken = create_product(store, "Chicken", "10000")
        with pytest.raises(ValidationError, match="exceeds"):
            MenuService(store).create_menu(
                "Combo",
                Decimal("10001"),
                group_id,
                [MenuLineRequest(product_id=chicken.id, quantity=1)],
            )
        assert MenuService(store).list_menus() == []

    def test_quantity_counts_toward_sum(self, store: Store, group_id: int) -> None:
        chicken = create_product(store, "Chicken", "16000")
        menu = MenuService(store).create_menu(
            "Two Chickens",
            Decimal("32000"),
            group_id,
            [MenuLineRequest(product_id=chicken.id, quantity=2)],
        )
        assert menu.line_items[0].amount == Decimal("32000")

    def test_unknown_product(self, store: Store, group_id: int) -> None:
        with pytest.raises(DanglingReferenceError):
            MenuService(store).create_menu(
                "Ghost", Decimal("0"), group_id, [MenuLineRequest(product_id=42, quantity=1)]
            )

    def test_unknown_menu_group(self, store: Store) -> None:
        chicken = create_product(store)
        with pytest.raises(DanglingReferenceError, match="menu group"):
            MenuService(store).create_menu(
                "Combo", Decimal("1"), 99, [MenuLineRequest(product_id=chicken.id, quantity=1)]
            )

    def test_negative_price(self, store: Store, group_id: int) -> None:
        with pytest.raises(ValidationError):
            MenuService(store).create_menu("Combo", Decimal("-1"), group_id, [])

    def test_list_menus_reads_snapshot(self, store: Store, group_id: int) -> None:
        chicken = create_product(store, "Chicken", "16000")
        seasoned = create_product(store, "Seasoned", "17000")
        created = MenuService(store).create_menu(
            "Half and Half",
            Decimal("30000"),
            group_id,
            [
                MenuLineRequest(product_id=chicken.id, quantity=1),
                MenuLineRequest(product_id=seasoned.id, quantity=1),
            ],
        )
        assert MenuService(store).list_menus() == [created]

    def test_line_price_unaffected_by_product_repricing(self, store: Store, group_id: int) -> None:
        chicken = create_product(store, "Chicken", "16000")
        MenuService(store).create_menu(
            "Chicken",
            Decimal("16000"),
            group_id,
            [MenuLineRequest(product_id=chicken.id, quantity=1)],
        )
        with store.engine.begin() as conn:
            conn.execute(update(products).where(products.c.id == chicken.id).values(price="99999"))

        assert ProductService(store).list_products()[0].price == Decimal("99999")
        (menu,) = MenuService(store).list_menus()
        assert menu.line_items[0].unit_price == Decimal("16000")
        assert menu.line_items[0].amount == Decimal("16000")
