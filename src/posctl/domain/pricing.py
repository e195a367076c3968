"""Menu pricing rules.

A menu may be priced at or below the sum of its products (a discount bundle),
never above it. The sum is computed from catalog prices read at creation time,
which then become the menu's permanent price snapshot.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal

from posctl.domain.errors import DanglingReferenceError, ValidationError
from posctl.domain.models import MenuLineItem, MenuLineRequest, Product


@dataclass(frozen=True)
class PriceCheck:
    """Outcome of checking a proposed menu price against its line items."""

    accepted: bool
    total: Decimal
    reason: str | None = None


def ensure_price(price: Decimal, *, what: str = "price") -> Decimal:
    """Return *price* if it is a finite, non-negative amount."""
    if not price.is_finite() or price < 0:
        raise ValidationError(
            f"{what} must be a non-negative amount, got {price}", price=str(price)
        )
    return price


def snapshot_line_items(
    requests: Iterable[MenuLineRequest],
    find_product: Callable[[int], Product | None],
) -> list[MenuLineItem]:
    """Resolve each request against the catalog, copying the current price."""
    items: list[MenuLineItem] = []
    for request in requests:
        if request.quantity < 0:
            raise ValidationError(
                f"Quantity must be non-negative, got {request.quantity}",
                product_id=request.product_id,
            )
        product = find_product(request.product_id)
        if product is None:
            raise DanglingReferenceError(
                f"Unknown product: {request.product_id}", product_id=request.product_id
            )
        items.append(
            MenuLineItem(
                product_id=product.id,
                quantity=request.quantity,
                unit_price=product.price,
            )
        )
    return items


def line_total(line_items: Sequence[MenuLineItem]) -> Decimal:
    """Sum of ``unit_price * quantity`` over *line_items*."""
    return sum((item.amount for item in line_items), Decimal(0))


def check_menu_price(price: Decimal, line_items: Sequence[MenuLineItem]) -> PriceCheck:
    """Decide whether *price* is acceptable for *line_items*. No side effects."""
    total = line_total(line_items)
    if price > total:
        return PriceCheck(
            accepted=False,
            total=total,
            reason=f"Menu price {price} exceeds the sum of its products {total}",
        )
    return PriceCheck(accepted=True, total=total)


def validate_menu_price(price: Decimal, line_items: Sequence[MenuLineItem]) -> Decimal:
    """Raise :class:`ValidationError` unless *price* is acceptable.

    Returns the line total on success.
    """
    ensure_price(price, what="Menu price")
    check = check_menu_price(price, line_items)
    if not check.accepted:
        raise ValidationError(check.reason or "Menu price rejected", total=str(check.total))
    return check.total
