"""Catalog services: stock mutations."""

import logging

from common.exceptions import NotFound
from django.db.models import F

from .models import Product

logger = logging.getLogger("tienda.catalog")


def decrement_stock(*, product_id: int, quantity: int) -> None:
    """Subtract ``quantity`` from a product's stock in a single UPDATE.

    Going below zero violates ``product_stock_non_negative`` and raises an
    ``IntegrityError``; callers run this inside their own transaction.
    """

    updated = Product.objects.filter(id=product_id).update(stock=F("stock") - quantity)
    if not updated:
        raise NotFound("Product does not exist.")
    logger.info(
        "catalog.stock_decremented",
        extra={"event": "catalog.stock_decremented", "product_id": product_id, "quantity": quantity},
    )
