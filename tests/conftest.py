"""Shared pytest fixtures and test helpers for posctl tests."""

from __future__ import annotations

from collections.abc import Generator, Sequence
from decimal import Decimal
from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from posctl.config.settings import PosSettings
from posctl.domain.models import (
    Menu,
    MenuLineRequest,
    Order,
    OrderLineRequest,
    OrderTable,
    Product,
)
from posctl.infrastructure.database.engine import init_database
from posctl.infrastructure.store import Store


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's POSCTL_* environment out of the tests."""
    for name in ("POSCTL_CONFIG", "POSCTL_DATA_DIR"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Engine:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Temporary directory that will hold ``.posctl/``."""
    return tmp_path


@pytest.fixture
def store(data_dir: Path) -> Store:
    """Store on a fresh database, plugins not initialized."""
    settings = PosSettings.from_cli(data_dir=data_dir)
    s = Store(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def strict_store(data_dir: Path) -> Store:
    """Store with ``[orders] strict_transitions = true``."""
    (data_dir / "posctl.toml").write_text("[orders]\nstrict_transitions = true\n")
    settings = PosSettings.from_cli(data_dir=data_dir)
    s = Store(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def _isolated_store(data_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_store")`` on command test
    classes.
    """
    monkeypatch.chdir(data_dir)


# ---------------------------------------------------------------------------
# Shared test helpers (used across service test modules)
# ---------------------------------------------------------------------------


def create_product(store: Store, name: str = "Fried Chicken", price: str = "16000") -> Product:
    """Create a product via ProductService."""
    from posctl.services.catalog import ProductService

    return ProductService(store).create_product(name, Decimal(price))


def create_menu(
    store: Store,
    products: Sequence[tuple[Product, int]],
    price: str,
    name: str = "Combo",
) -> Menu:
    """Create a menu group and a menu over *products* via MenuService."""
    from posctl.services.catalog import MenuGroupService, MenuService

    group = MenuGroupService(store).create_menu_group("Sets")
    lines = [MenuLineRequest(product_id=p.id, quantity=qty) for p, qty in products]
    return MenuService(store).create_menu(name, Decimal(price), group.id, lines)


def create_table(store: Store, *, empty: bool = True, number_of_guests: int = 0) -> OrderTable:
    """Create a table via TableService."""
    from posctl.services.tables import TableService

    return TableService(store).create_table(number_of_guests, empty)


def place_order(store: Store, table: OrderTable, menu: Menu, quantity: int = 1) -> Order:
    """Place a one-line order via OrderService."""
    from posctl.services.orders import OrderService

    return OrderService(store).create_order(
        table.id, [OrderLineRequest(menu_id=menu.id, quantity=quantity)]
    )


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """``--verbose`` CLI runs enable telemetry on the test thread's context."""
    from posctl.services.telemetry import _verbose_enabled, pop_last_span

    yield
    _verbose_enabled.set(False)
    pop_last_span()


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after CLI runs reconfigure it."""
    import logging

    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pos = logging.getLogger("posctl")
    pos_level = pos.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pos.setLevel(pos_level)
