"""BaseService — abstract foundation for all posctl services.

Every service receives a :class:`Store` at construction time. The Store
provides transactional access to the repositories. Services own their
transaction boundaries via ``self._store.transaction()`` and raise
domain errors from inside the block so nothing is committed on failure.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from posctl.infrastructure.store import Store

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class TableService(BaseService):
            def change_empty(self, table_id: int, empty: bool) -> OrderTable:
                with self._store.transaction() as txn:
                    ...
    """

    def __init__(self, store: Store) -> None:
        self._store = store

    @property
    def _strict_transitions(self) -> bool:
        return self._store.settings.orders.strict_transitions

    def _dispatch_event(self, hook_name: str, payload: dict[str, Any]) -> None:
        """Dispatch a lifecycle event. No-op if plugins are not initialized.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        plugins = self._store.plugins
        if plugins is None:
            return
        try:
            plugins.dispatch(hook_name, payload)
        except Exception:
            logger.warning("Event dispatch failed for %s", hook_name, exc_info=True)
