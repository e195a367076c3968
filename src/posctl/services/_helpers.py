"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pydantic import BaseModel


def now_iso() -> str:
    """Current UTC time as standard ISO 8601 (order and group timestamps)."""
    return datetime.now(UTC).isoformat()


def dump(record: BaseModel) -> dict[str, Any]:
    """JSON-safe dict of a domain record (Decimals become strings)."""
    return record.model_dump(mode="json")


def dump_all(records: list[Any]) -> list[dict[str, Any]]:
    return [dump(r) for r in records]
