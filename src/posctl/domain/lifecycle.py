"""Order status lifecycle.

COOKING (initial) -> MEAL -> COMPLETION (terminal).

Status labels are parsed into the closed :class:`OrderStatus` variant at the
boundary; anything else is rejected before any rule is evaluated.
"""

from __future__ import annotations

from enum import StrEnum

from posctl.domain.errors import ConflictError, ValidationError


class OrderStatus(StrEnum):
    """Status of an order."""

    COOKING = "COOKING"
    MEAL = "MEAL"
    COMPLETION = "COMPLETION"


INITIAL_ORDER_STATUS = OrderStatus.COOKING

# Orders in these states block emptying, ungrouping, and similar table changes.
ACTIVE_ORDER_STATUSES: frozenset[OrderStatus] = frozenset({OrderStatus.COOKING, OrderStatus.MEAL})

# --- Transition maps ---

ORDER_TRANSITIONS: dict[str, list[str]] = {
    "COOKING": ["MEAL", "COMPLETION"],
    "MEAL": ["COMPLETION"],
    "COMPLETION": [],
}


def is_valid_transition(
    current: str,
    target: str,
    transitions: dict[str, list[str]],
) -> bool:
    """Check if transitioning from *current* to *target* is allowed."""
    allowed = transitions.get(current, [])
    return target in allowed


def parse_order_status(label: str) -> OrderStatus:
    """Parse a raw status label, rejecting anything outside the variant."""
    try:
        return OrderStatus(label.strip().upper())
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(
            f"Unknown order status: {label!r}. Allowed: {allowed}",
            status=label,
        ) from None


def is_active(status: OrderStatus) -> bool:
    """Whether an order in *status* still blocks table changes."""
    return status in ACTIVE_ORDER_STATUSES


def ensure_transition(
    current: OrderStatus,
    target: OrderStatus,
    *,
    strict: bool = False,
) -> None:
    """Raise unless *current* may move to *target*.

    COMPLETION is terminal regardless of *strict*. In strict mode the
    transition must also appear in :data:`ORDER_TRANSITIONS`, which forbids
    moving backward or re-entering the current state.
    """
    if current is OrderStatus.COMPLETION:
        raise ConflictError("Order already completed", status=str(current))
    if strict and not is_valid_transition(current, target, ORDER_TRANSITIONS):
        allowed = ORDER_TRANSITIONS.get(current, [])
        raise ConflictError(
            f"Invalid status transition: {current} -> {target}. Allowed: {allowed}",
            status=str(current),
            target=str(target),
        )
