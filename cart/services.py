"""Cart services: mutations validated against live stock.

Every mutation runs in its own transaction with the cart row locked,
re-reads stock from the database right before validating, and finishes by
recalculating and saving the cart totals. Failed validations raise before
anything is written.
"""

import logging

from catalog.selectors import get_product, get_real_stock
from common.exceptions import InvalidInput, InvalidState, NotFound
from django.db import transaction

from .models import Cart, CartItem
from .pricing import recalculate
from .selectors import get_anonymous_cart, get_cart, get_cart_for_user, get_lines, priced_lines

logger = logging.getLogger("tienda.cart")

TOTAL_FIELDS = ["sub_total", "total", "unique_item_count", "total_saved"]


def _snapshot(cart: Cart) -> dict:
    return {field: getattr(cart, field) for field in TOTAL_FIELDS}


def _log(event: str, cart: Cart, before: dict | None = None, **fields) -> None:
    extra = {
        "event": event,
        "cart_id": cart.id,
        "buyer_id": cart.buyer_id,
        "user_id": cart.user_id,
        **fields,
    }
    if before is not None:
        extra["before"] = before
        extra["after"] = _snapshot(cart)
    logger.info(event, extra=extra)


def find_cart(*, buyer_id: str, user_id: int | None = None) -> Cart | None:
    """Locate and lock the cart for a buyer/user pair.

    With a user id the user's own cart wins and is re-keyed to the caller's
    buyer id when it differs. Otherwise the buyer's anonymous cart is used,
    and claimed by the user when a user id is given. Must run inside a
    transaction.
    """

    if user_id is not None:
        cart = get_cart_for_user(user_id=user_id, for_update=True)
        if cart is not None:
            if cart.buyer_id != buyer_id:
                cart.buyer_id = buyer_id
                cart.save(update_fields=["buyer_id", "updated_at"])
            return cart

    cart = get_anonymous_cart(buyer_id=buyer_id, for_update=True)
    if cart is not None and user_id is not None:
        cart.user_id = user_id
        cart.save(update_fields=["user", "updated_at"])
        _log("cart.claimed", cart)
    return cart


def _require_cart(*, buyer_id: str, user_id: int | None) -> Cart:
    cart = find_cart(buyer_id=buyer_id, user_id=user_id)
    if cart is None:
        logger.info(
            "cart.not_found",
            extra={"event": "cart.not_found", "buyer_id": buyer_id, "user_id": user_id},
        )
        raise NotFound("Cart does not exist for this buyer.")
    return cart


def _require_line(cart: Cart, product_id: int) -> CartItem:
    try:
        return CartItem.objects.select_for_update().select_related("product").get(cart=cart, product_id=product_id)
    except CartItem.DoesNotExist:
        raise NotFound("The item is not in the cart.")


def save_totals(cart: Cart) -> Cart:
    """Recalculate the cart from its current lines and persist the totals."""

    totals = recalculate(priced_lines(get_lines(cart=cart)))
    cart.sub_total = totals.sub_total
    cart.total = totals.total
    cart.unique_item_count = totals.unique_item_count
    cart.total_saved = totals.total_saved
    cart.save(update_fields=[*TOTAL_FIELDS, "updated_at"])
    return cart


def _check_stock(*, product_id: int, quantity: int) -> int:
    stock = get_real_stock(product_id=product_id)
    if stock < quantity:
        logger.info(
            "cart.insufficient_stock",
            extra={
                "event": "cart.insufficient_stock",
                "product_id": product_id,
                "stock": stock,
                "requested": quantity,
            },
        )
        raise InvalidInput(f"Not enough stock for this product. Available stock: {stock}")
    return stock


@transaction.atomic
def create_or_get_cart(*, buyer_id: str, user_id: int | None = None) -> Cart | None:
    """Return the buyer's cart, creating an empty one for authenticated users.

    Anonymous buyers without a cart get None; their cart is created by the
    first ``add_item``.
    """

    cart = find_cart(buyer_id=buyer_id, user_id=user_id)
    if cart is None:
        if user_id is None:
            return None
        cart = Cart.objects.create(buyer_id=buyer_id, user_id=user_id)
        _log("cart.created", cart)
    return get_cart(cart_id=cart.id)


@transaction.atomic
def add_item(*, buyer_id: str, product_id: int, quantity: int, user_id: int | None = None) -> Cart:
    """Add ``quantity`` units of a product, merging with an existing line.

    Raises ``NotFound`` for unknown products and ``InvalidInput`` when the
    resulting line quantity exceeds live stock.
    """

    if quantity <= 0:
        raise InvalidInput("Quantity must be positive.")
    cart = find_cart(buyer_id=buyer_id, user_id=user_id)
    get_product(product_id=product_id)
    stock = _check_stock(product_id=product_id, quantity=quantity)

    item = None
    if cart is not None:
        item = CartItem.objects.select_for_update().filter(cart=cart, product_id=product_id).first()
    if item is not None and stock < item.quantity + quantity:
        new_quantity = item.quantity + quantity
        logger.info(
            "cart.insufficient_stock",
            extra={
                "event": "cart.insufficient_stock",
                "cart_id": cart.id,
                "product_id": product_id,
                "stock": stock,
                "in_cart": item.quantity,
                "requested": quantity,
            },
        )
        raise InvalidInput(f"The total quantity ({new_quantity}) would exceed the available stock ({stock}).")

    if cart is None:
        cart = Cart.objects.create(buyer_id=buyer_id, user_id=user_id)
        _log("cart.created", cart)
    before = _snapshot(cart)

    if item is not None:
        item.quantity += quantity
        item.save(update_fields=["quantity", "updated_at"])
        event = "cart.item_updated"
    else:
        item = CartItem.objects.create(cart=cart, product_id=product_id, quantity=quantity)
        event = "cart.item_added"

    save_totals(cart)
    _log(event, cart, before, product_id=product_id, quantity=item.quantity)
    return get_cart(cart_id=cart.id)


def _delete_line(cart: Cart, item: CartItem) -> Cart:
    before = _snapshot(cart)
    product_id = item.product_id
    item.delete()
    save_totals(cart)
    _log("cart.item_removed", cart, before, product_id=product_id)
    return get_cart(cart_id=cart.id)


@transaction.atomic
def remove_item(*, buyer_id: str, product_id: int, user_id: int | None = None) -> Cart:
    """Remove a product's line from the cart."""

    cart = _require_cart(buyer_id=buyer_id, user_id=user_id)
    item = _require_line(cart, product_id)
    return _delete_line(cart, item)


@transaction.atomic
def update_item_quantity(*, buyer_id: str, product_id: int, quantity: int, user_id: int | None = None) -> Cart:
    """Overwrite a line's quantity; a quantity of 0 removes the line."""

    if quantity < 0:
        raise InvalidInput("Quantity cannot be negative.")
    cart = _require_cart(buyer_id=buyer_id, user_id=user_id)
    get_product(product_id=product_id)
    item = _require_line(cart, product_id)
    if quantity == 0:
        return _delete_line(cart, item)

    _check_stock(product_id=product_id, quantity=quantity)
    before = _snapshot(cart)
    item.quantity = quantity
    item.save(update_fields=["quantity", "updated_at"])
    save_totals(cart)
    _log("cart.item_updated", cart, before, product_id=product_id, quantity=quantity)
    return get_cart(cart_id=cart.id)


@transaction.atomic
def clear_cart(*, buyer_id: str, user_id: int | None = None) -> Cart:
    """Remove every line from the cart; totals drop to zero."""

    cart = _require_cart(buyer_id=buyer_id, user_id=user_id)
    before = _snapshot(cart)
    CartItem.objects.filter(cart=cart).delete()
    save_totals(cart)
    _log("cart.cleared", cart, before)
    return get_cart(cart_id=cart.id)


@transaction.atomic
def checkout_cart(*, buyer_id: str, user_id: int | None = None) -> Cart:
    """Reconcile the cart against live stock ahead of order creation.

    Lines whose product is out of stock are dropped and lines above the
    available stock are clamped down to it, without raising. Totals are
    only rewritten when something changed. No order is created here.
    """

    cart = _require_cart(buyer_id=buyer_id, user_id=user_id)
    lines = get_lines(cart=cart)
    if not lines:
        raise InvalidState("The cart is empty.")

    before = _snapshot(cart)
    removed = []
    adjusted = []
    for item in lines:
        stock = get_real_stock(product_id=item.product_id)
        if stock <= 0:
            removed.append(item.product_id)
            item.delete()
        elif item.quantity > stock:
            adjusted.append({"product_id": item.product_id, "from": item.quantity, "to": stock})
            item.quantity = stock
            item.save(update_fields=["quantity", "updated_at"])

    if removed or adjusted:
        save_totals(cart)
    _log("cart.checked_out", cart, before, removed=removed, adjusted=adjusted)
    return get_cart(cart_id=cart.id)


@transaction.atomic
def associate_with_user(*, buyer_id: str, user_id: int) -> None:
    """Hand the buyer's anonymous cart over to a newly authenticated user.

    Without an existing user cart the anonymous cart is simply claimed.
    Otherwise its lines are merged into the user's cart, adding quantities
    for products present in both, and the anonymous cart is deleted. A
    buyer without an anonymous cart is a no-op.
    """

    anonymous = get_anonymous_cart(buyer_id=buyer_id, for_update=True)
    if anonymous is None:
        logger.info(
            "cart.associate_skipped",
            extra={"event": "cart.associate_skipped", "buyer_id": buyer_id, "user_id": user_id},
        )
        return

    target = get_cart_for_user(user_id=user_id, for_update=True)
    if target is None:
        anonymous.user_id = user_id
        anonymous.save(update_fields=["user", "updated_at"])
        _log("cart.claimed", anonymous)
        return

    before = _snapshot(target)
    existing = {item.product_id: item for item in get_lines(cart=target)}
    for item in get_lines(cart=anonymous):
        match = existing.get(item.product_id)
        if match is not None:
            match.quantity += item.quantity
            match.save(update_fields=["quantity", "updated_at"])
        else:
            item.cart = target
            item.save(update_fields=["cart", "updated_at"])

    save_totals(target)
    anonymous_id = anonymous.id
    anonymous.delete()
    _log("cart.merged", target, before, src_cart_id=anonymous_id)
