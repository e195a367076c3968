"""Store — repository access with transaction coordination.

The Store is the single dependency injected into every service. It owns
the database engine and the plugin manager. :meth:`Store.transaction`
yields a :class:`StoreTransaction` whose repositories all share one
connection, so an operation's reads and writes commit or roll back
together:

- **Commit**: the caller's block completes normally.
- **Rollback**: any exception escapes the block, including domain rule
  violations raised after a read.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING

from posctl.infrastructure.database.engine import init_database
from posctl.infrastructure.repositories import (
    MenuGroupRepository,
    MenuRepository,
    OrderRepository,
    OrderTableRepository,
    ProductRepository,
    TableGroupRepository,
)

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from posctl.config.settings import PosSettings
    from posctl.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# StoreTransaction: yielded to callers within transaction()
# ---------------------------------------------------------------------------


@dataclass
class StoreTransaction:
    """Active transaction context exposing one repository per collection."""

    conn: Connection

    @cached_property
    def products(self) -> ProductRepository:
        return ProductRepository(self.conn)

    @cached_property
    def menu_groups(self) -> MenuGroupRepository:
        return MenuGroupRepository(self.conn)

    @cached_property
    def menus(self) -> MenuRepository:
        return MenuRepository(self.conn)

    @cached_property
    def orders(self) -> OrderRepository:
        return OrderRepository(self.conn)

    @cached_property
    def tables(self) -> OrderTableRepository:
        return OrderTableRepository(self.conn)

    @cached_property
    def table_groups(self) -> TableGroupRepository:
        return TableGroupRepository(self.conn)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class Store:
    """Database and plugin access for the service layer.

    Constructed once at CLI startup from :class:`PosSettings` and held by
    the command context. Services receive the Store via their
    :class:`BaseService` constructor.
    """

    def __init__(self, settings: PosSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(
            settings.data_dir,
            filename=settings.database.filename,
        )
        self._plugins: PluginManager | None = None

    @property
    def data_dir(self) -> Path:
        """The directory holding ``.posctl/``."""
        return self._settings.data_dir

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct access when needed)."""
        return self._engine

    @property
    def settings(self) -> PosSettings:
        """The resolved settings for this store."""
        return self._settings

    @property
    def plugins(self) -> PluginManager | None:
        """The plugin manager (None if not initialized)."""
        return self._plugins

    def init_plugins(self) -> None:
        """Create the plugin manager and load entry-point plugins.

        No-op when ``[plugins] enabled = false``.
        """
        if not self._settings.plugins.enabled:
            return

        from posctl.plugins.manager import PluginManager

        pm = PluginManager()
        loaded = pm.discover_and_load()
        logger.debug("Plugins loaded: %s", loaded)
        self._plugins = pm

    @contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        """One storage transaction for a whole operation.

        Commits when the block exits normally, rolls back when any
        exception escapes it.

        Usage::

            with store.transaction() as txn:
                table = txn.tables.find_by_id(table_id)
                txn.tables.update(table.model_copy(update={"empty": True}))
        """
        with self._engine.begin() as conn:
            yield StoreTransaction(conn=conn)

    @contextmanager
    def read(self) -> Iterator[StoreTransaction]:
        """Read-only access; nothing is committed."""
        with self._engine.connect() as conn:
            yield StoreTransaction(conn=conn)

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self._engine.dispose()
