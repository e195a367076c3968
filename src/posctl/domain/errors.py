"""Domain error taxonomy.

Every rule violation raised by the domain layer derives from :class:`PosError`.
Errors are raised before any write, so a failed operation never leaves a
partial change behind. The calling layer translates them via ``code``.
"""

from __future__ import annotations

from typing import Any


class PosError(Exception):
    """Base class for all domain rule violations."""

    code: str = "POS_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(PosError):
    """Malformed input: negative values, empty collections, unknown labels."""

    code = "VALIDATION_FAILED"


class EmptyOrderError(ValidationError):
    """An order was submitted with no line items."""

    code = "EMPTY_ORDER"


class DanglingReferenceError(PosError):
    """A referenced product, menu, or menu group does not exist."""

    code = "UNKNOWN_REFERENCE"


class NotFoundError(PosError):
    """The target of an operation does not exist."""

    code = "NOT_FOUND"


class ConflictError(PosError):
    """A state rule forbids the operation (grouped table, active order, ...)."""

    code = "CONFLICT"
