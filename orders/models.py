"""Orders app models.

An order is the frozen result of a checkout: totals and every line's
product details are copied at creation time and never recomputed, so
receipts survive later catalog edits and deletions.
"""

from django.conf import settings
from django.db import models


class TimeStampedModel(models.Model):
    """Abstract base model adding created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Order(TimeStampedModel):
    """Purchase order created from a user's cart.

    ``code`` is the human-facing identifier, ``ORD-<YYMMDDHHMMSS>-<NNN>``.
    """

    code = models.CharField(max_length=32, unique=True)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name="orders", on_delete=models.CASCADE)
    sub_total = models.PositiveIntegerField(default=0)
    total = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user", "created_at"], name="order_user_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                name="order_total_within_subtotal",
                condition=models.Q(total__lte=models.F("sub_total")),
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return self.code


class OrderItem(models.Model):
    """Snapshot of a cart line at the moment the order was placed."""

    order = models.ForeignKey(Order, related_name="items", on_delete=models.CASCADE)
    title_at_moment = models.CharField(max_length=200)
    description_at_moment = models.TextField(blank=True)
    image_url_at_moment = models.URLField(max_length=500)
    price_at_moment = models.PositiveIntegerField()
    discount_at_moment = models.PositiveSmallIntegerField(default=0)
    quantity = models.PositiveIntegerField()

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(name="orderitem_quantity_positive", condition=models.Q(quantity__gte=1)),
            models.CheckConstraint(
                name="orderitem_discount_percentage",
                condition=models.Q(discount_at_moment__lte=100),
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"OrderItem#{self.id} order={self.order_id} qty={self.quantity}"
