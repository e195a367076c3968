"""Database engine setup for SQLite with WAL mode.

SQLite is the persistence layer: WAL mode for concurrent reads and ACID
transactions for the all-or-nothing writes every operation relies on.
The DB is stored at {data_dir}/.posctl/{filename}.

SQLAlchemy Core (not ORM) is used because posctl is a short-lived
CLI process — no benefit from session management or identity maps.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from posctl.infrastructure.database.schema import metadata

DATA_DIRNAME = ".posctl"
DEFAULT_DB_FILENAME = "posctl.db"


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode and foreign keys enabled.

    SQL echo is controlled through the ``sqlalchemy.engine`` logger (see
    :func:`posctl.config.logging.configure_logging`), not ``echo=True``.
    """
    engine = create_engine(f"sqlite:///{db_path}")

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_database(
    data_dir: Path,
    *,
    filename: str = DEFAULT_DB_FILENAME,
) -> Engine:
    """Initialize the posctl database at ``{data_dir}/.posctl/{filename}``.

    Creates the ``.posctl/`` directory and all tables from
    :data:`schema.metadata`. Idempotent — safe to call on an existing
    database.

    Returns the engine ready for use.
    """
    posctl_dir = data_dir / DATA_DIRNAME
    posctl_dir.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(posctl_dir / filename)
    metadata.create_all(engine)
    return engine
