"""Cart app models.

A cart belongs to a buyer (an opaque id kept in a cookie) and, once the
buyer signs in, to a user. Lines reference products without copying their
price, so totals always follow the live catalog. The stored totals are
rewritten by the cart services after every mutation.
"""

from django.conf import settings
from django.db import models


class TimeStampedModel(models.Model):
    """Abstract base model adding created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Cart(TimeStampedModel):
    """Shopping cart for a buyer, optionally claimed by a user."""

    buyer_id = models.CharField(max_length=64, db_index=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        related_name="carts",
        on_delete=models.CASCADE,
    )
    sub_total = models.PositiveIntegerField(default=0)
    total = models.PositiveIntegerField(default=0)
    unique_item_count = models.PositiveIntegerField(default=0)
    total_saved = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["-updated_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user"],
                condition=models.Q(user__isnull=False),
                name="unique_cart_per_user",
            ),
            models.UniqueConstraint(
                fields=["buyer_id"],
                condition=models.Q(user__isnull=True),
                name="unique_anonymous_cart_per_buyer",
            ),
            models.CheckConstraint(
                name="cart_total_within_subtotal",
                condition=models.Q(total__lte=models.F("sub_total")),
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"Cart#{self.id} buyer={self.buyer_id} user={self.user_id}"

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None


class CartItem(TimeStampedModel):
    """Line in a cart: one product and how many units of it."""

    cart = models.ForeignKey(Cart, related_name="items", on_delete=models.CASCADE)
    product = models.ForeignKey("catalog.Product", related_name="cart_items", on_delete=models.CASCADE)
    quantity = models.PositiveIntegerField(default=1)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["cart", "product"], name="unique_product_per_cart"),
            models.CheckConstraint(name="quantity_positive", condition=models.Q(quantity__gte=1)),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"CartItem#{self.id} cart={self.cart_id} product={self.product_id} qty={self.quantity}"
