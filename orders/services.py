"""Order services: the transactional cart-to-order workflow.

``create_order_from_cart`` is the only multi-entity write in the project.
It snapshots the cart into an order, decrements stock and empties the cart
inside one transaction; any failure rolls all of it back and the original
exception is re-raised for the caller to classify.

Stock is not re-validated here. Callers are expected to run the cart
checkout reconciliation first; a stock change between the two calls is a
known race that the stock check constraint turns into a rollback.
"""

import logging
import random
from datetime import datetime, timezone
from typing import Callable

from cart.models import CartItem
from cart.pricing import clamp_discount, recalculate
from cart.selectors import get_cart_for_user, priced_lines
from cart.services import TOTAL_FIELDS
from catalog.services import decrement_stock
from common.conf import ShopConfig, get_shop_config
from common.exceptions import InvalidState, NotFound
from django.db import transaction

from .models import Order, OrderItem
from .selectors import order_code_exists

logger = logging.getLogger("tienda.orders")

CODE_PREFIX = "ORD"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_order_code(
    *,
    exists: Callable[[str], bool] = order_code_exists,
    now: Callable[[], datetime] = _utcnow,
    randint: Callable[[int, int], int] = random.randint,
) -> str:
    """Build ``ORD-<YYMMDDHHMMSS>-<NNN>`` from the UTC clock and a 100-999 suffix.

    Codes are regenerated until ``exists`` reports one unused; collisions
    within the same second are expected.
    """

    attempts = 0
    while True:
        attempts += 1
        code = f"{CODE_PREFIX}-{now():%y%m%d%H%M%S}-{randint(100, 999)}"
        if not exists(code):
            if attempts > 1:
                logger.info(
                    "order.code_collision",
                    extra={"event": "order.code_collision", "attempts": attempts, "code": code},
                )
            return code


def _snapshot_item(order: Order, item: CartItem, config: ShopConfig) -> OrderItem:
    product = item.product
    return OrderItem(
        order=order,
        title_at_moment=product.title,
        description_at_moment=product.description,
        image_url_at_moment=product.main_image_url or config.default_image_url,
        price_at_moment=product.price,
        discount_at_moment=clamp_discount(product.discount, product_id=product.id),
        quantity=item.quantity,
    )


def create_order_from_cart(*, user_id: int, config: ShopConfig | None = None) -> str:
    """Turn the user's cart into an order and return the order code.

    Raises ``NotFound`` when the user has no cart and ``InvalidState`` when
    it is empty. Nothing is persisted unless every step succeeds.
    """

    config = config or get_shop_config()
    try:
        with transaction.atomic():
            cart = get_cart_for_user(user_id=user_id, for_update=True)
            if cart is None:
                raise NotFound("Cart not found.")
            lines = list(
                CartItem.objects.filter(cart=cart).select_related("product").prefetch_related("product__images")
            )
            if not lines:
                raise InvalidState("The cart is empty.")

            code = generate_order_code()
            totals = recalculate(priced_lines(lines))
            order = Order.objects.create(
                code=code,
                user_id=user_id,
                sub_total=totals.sub_total,
                total=totals.total,
            )
            OrderItem.objects.bulk_create([_snapshot_item(order, item, config) for item in lines])

            for item in lines:
                decrement_stock(product_id=item.product_id, quantity=item.quantity)

            CartItem.objects.filter(cart=cart).delete()
            for field in TOTAL_FIELDS:
                setattr(cart, field, 0)
            cart.save(update_fields=[*TOTAL_FIELDS, "updated_at"])
    except (NotFound, InvalidState) as exc:
        logger.info(
            "order.create_rejected",
            extra={"event": "order.create_rejected", "user_id": user_id, "reason": exc.message},
        )
        raise
    except Exception:
        logger.exception(
            "order.create_failed",
            extra={"event": "order.create_failed", "user_id": user_id},
        )
        raise

    logger.info(
        "order.created",
        extra={
            "event": "order.created",
            "order_id": order.id,
            "code": code,
            "user_id": user_id,
            "sub_total": order.sub_total,
            "total": order.total,
            "items": len(lines),
        },
    )
    return code
