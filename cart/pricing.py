"""Cart recalculation engine.

Pure functions deriving cart totals from priced lines. Nothing here touches
the database: callers build ``PricedLine`` values from whatever they loaded
and persist the resulting ``CartTotals`` themselves.

All amounts are integers in the smallest currency unit. Discounts are
applied per line and each discounted line is rounded half away from zero
before summing, so the cart total is the sum of the line totals shown to
the buyer.
"""

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from common.exceptions import ConsistencyViolation

logger = logging.getLogger("tienda.cart")

HUNDRED = Decimal(100)


@dataclass(frozen=True)
class PricedLine:
    """A cart line joined with the live price and discount of its product."""

    product_id: int
    price: int
    quantity: int
    discount: int = 0


@dataclass(frozen=True)
class CartTotals:
    sub_total: int = 0
    total: int = 0
    unique_item_count: int = 0
    total_saved: int = 0


def clamp_discount(discount, *, product_id=None) -> int:
    """Clamp a discount percentage into ``[0, 100]``, logging out-of-range values."""

    clamped = min(max(int(discount), 0), 100)
    if clamped != discount:
        logger.warning(
            "cart.discount_clamped",
            extra={
                "event": "cart.discount_clamped",
                "product_id": product_id,
                "discount": discount,
                "clamped_to": clamped,
            },
        )
    return clamped


def discounted_amount(amount: int, discount: int) -> int:
    """Apply a percentage discount to ``amount``, rounding half away from zero."""

    value = Decimal(amount) * (HUNDRED - Decimal(discount)) / HUNDRED
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def line_amounts(price: int, quantity: int, discount: int) -> tuple[int, int]:
    """Return ``(sub_total, total)`` for a single line."""

    sub_total = int(price) * int(quantity)
    return sub_total, discounted_amount(sub_total, clamp_discount(discount))


def _validate(line: PricedLine) -> PricedLine:
    if line.price < 0:
        logger.error(
            "cart.invalid_price",
            extra={"event": "cart.invalid_price", "product_id": line.product_id, "price": line.price},
        )
        raise ConsistencyViolation(f"Product {line.product_id} has an invalid price.")
    if line.quantity <= 0:
        logger.error(
            "cart.invalid_quantity",
            extra={"event": "cart.invalid_quantity", "product_id": line.product_id, "quantity": line.quantity},
        )
        raise ConsistencyViolation(f"Product {line.product_id} has an invalid quantity.")
    discount = clamp_discount(line.discount, product_id=line.product_id)
    if discount != line.discount:
        return PricedLine(line.product_id, line.price, line.quantity, discount)
    return line


def _check_totals(totals: CartTotals) -> None:
    problems = []
    if totals.sub_total < 0:
        problems.append("negative subtotal")
    if totals.total < 0:
        problems.append("negative total")
    if totals.total > totals.sub_total:
        problems.append("total exceeds subtotal")
    if totals.total_saved < 0:
        problems.append("negative saved amount")
    if problems:
        logger.error(
            "cart.inconsistent_totals",
            extra={
                "event": "cart.inconsistent_totals",
                "problems": problems,
                "sub_total": totals.sub_total,
                "total": totals.total,
                "total_saved": totals.total_saved,
            },
        )
        raise ConsistencyViolation("Cart totals are inconsistent: " + ", ".join(problems) + ".")


def recalculate(lines: Iterable[PricedLine]) -> CartTotals:
    """Derive subtotal, total, unique item count and saved amount from ``lines``.

    Raises ``ConsistencyViolation`` for negative prices, non-positive
    quantities, or totals that break ``0 <= total <= sub_total``.
    """

    lines = [_validate(line) for line in lines]
    if not lines:
        return CartTotals()

    sub_total = 0
    total = 0
    for line in lines:
        line_sub_total = line.price * line.quantity
        sub_total += line_sub_total
        total += discounted_amount(line_sub_total, line.discount)

    totals = CartTotals(
        sub_total=sub_total,
        total=total,
        unique_item_count=len(lines),
        total_saved=sub_total - total,
    )
    _check_totals(totals)
    return totals
