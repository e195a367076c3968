"""Order line rules."""

from __future__ import annotations

from collections.abc import Collection, Sequence

from posctl.domain.errors import DanglingReferenceError, EmptyOrderError, ValidationError
from posctl.domain.models import OrderLineRequest


def validate_order_lines(
    requests: Sequence[OrderLineRequest],
    known_menu_ids: Collection[int],
) -> None:
    """Reject the whole order if it is empty or any menu reference is unknown.

    *known_menu_ids* is the subset of the requested menu ids that exist.
    Quantities are not bounded above (no inventory tracking).
    """
    if not requests:
        raise EmptyOrderError("An order needs at least one line item")

    for request in requests:
        if request.quantity < 0:
            raise ValidationError(
                f"Quantity must be non-negative, got {request.quantity}",
                menu_id=request.menu_id,
            )

    missing = sorted({r.menu_id for r in requests} - set(known_menu_ids))
    if missing:
        raise DanglingReferenceError(f"Unknown menu(s): {missing}", menu_ids=missing)
