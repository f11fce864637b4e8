"""Selectors for read-only cart queries.

Carts are returned with their lines, products and product images fetched
eagerly, so services and serializers never trigger per-line queries.
"""

from django.db.models import Prefetch, QuerySet

from .models import Cart, CartItem
from .pricing import PricedLine


def _carts(*, for_update: bool = False) -> QuerySet[Cart]:
    qs = Cart.objects.prefetch_related(
        Prefetch(
            "items",
            queryset=CartItem.objects.select_related("product").prefetch_related("product__images"),
        )
    )
    if for_update:
        qs = qs.select_for_update()
    return qs


def get_cart(*, cart_id: int) -> Cart:
    """Return a cart by id with lines, products and images loaded."""

    return _carts().get(id=cart_id)


def get_cart_for_user(*, user_id: int, for_update: bool = False) -> Cart | None:
    """Return the cart owned by ``user_id``, or None."""

    return _carts(for_update=for_update).filter(user_id=user_id).first()


def get_anonymous_cart(*, buyer_id: str, for_update: bool = False) -> Cart | None:
    """Return the unclaimed cart for ``buyer_id``, or None."""

    return _carts(for_update=for_update).filter(buyer_id=buyer_id, user__isnull=True).first()


def get_lines(*, cart: Cart) -> list[CartItem]:
    """Return the cart's current lines with products, bypassing any prefetch cache."""

    return list(CartItem.objects.filter(cart=cart).select_related("product").order_by("id"))


def priced_lines(items) -> list[PricedLine]:
    """Join cart items with the live price and discount of their products."""

    return [
        PricedLine(
            product_id=item.product_id,
            price=item.product.price,
            quantity=item.quantity,
            discount=item.product.discount,
        )
        for item in items
    ]
