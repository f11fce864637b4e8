"""Selectors for order queries."""

from common.exceptions import NotFound
from django.db.models import Q, QuerySet

from .models import Order


def order_code_exists(code: str) -> bool:
    return Order.objects.filter(code=code).exists()


def get_order_by_code(*, code: str, user_id: int) -> Order:
    """Return the user's order with its items, raising ``NotFound`` otherwise.

    Orders belonging to another user are reported as missing.
    """

    try:
        return Order.objects.prefetch_related("items").get(code=code, user_id=user_id)
    except Order.DoesNotExist:
        raise NotFound("Order not found.")


def list_orders_for_user(*, user_id: int) -> QuerySet[Order]:
    """Return the user's orders, newest first, with items prefetched."""

    return Order.objects.filter(user_id=user_id).prefetch_related("items").order_by("-created_at", "-id")


def filter_orders_by_term(qs: QuerySet[Order], term: str | None) -> QuerySet[Order]:
    """Keep orders whose code or any item title/description contains ``term``."""

    term = (term or "").strip()
    if not term:
        return qs
    return qs.filter(
        Q(code__icontains=term)
        | Q(items__title_at_moment__icontains=term)
        | Q(items__description_at_moment__icontains=term)
    ).distinct()
