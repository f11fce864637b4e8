"""Catalog app models.

Only the product fields the cart and order workflows read are modelled
here: price and discount for pricing, stock for availability, and the
title, description and images captured into order snapshots. Catalog
administration beyond the Django admin lives outside this project.
"""

from common.choices import ProductCondition
from django.db import models


class TimeStampedModel(models.Model):
    """Abstract base model adding created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Product(TimeStampedModel):
    """Sellable product.

    Amounts are integers in the smallest currency unit; ``discount`` is a
    whole percentage.
    """

    CONDITION_NEW = ProductCondition.NEW
    CONDITION_USED = ProductCondition.USED
    CONDITION_CHOICES = ProductCondition.choices

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    price = models.IntegerField(default=0)
    discount = models.IntegerField(default=0)
    stock = models.IntegerField(default=0)
    condition = models.CharField(max_length=8, choices=CONDITION_CHOICES, default=CONDITION_NEW)
    is_available = models.BooleanField(default=True, db_index=True)
    is_deleted = models.BooleanField(default=False, db_index=True)

    class Meta:
        ordering = ["title"]
        constraints = [
            models.CheckConstraint(name="product_price_non_negative", condition=models.Q(price__gte=0)),
            models.CheckConstraint(
                name="product_discount_percentage",
                condition=models.Q(discount__gte=0) & models.Q(discount__lte=100),
            ),
            models.CheckConstraint(name="product_stock_non_negative", condition=models.Q(stock__gte=0)),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return self.title

    @property
    def main_image_url(self) -> str | None:
        """URL of the oldest image, or None when the product has no images.

        Iterates ``images.all()`` so a prefetch is honoured.
        """
        image = next(iter(self.images.all()), None)
        return image.url if image is not None else None


class ProductImage(models.Model):
    """Image attached to a product; the first one uploaded is the main image."""

    product = models.ForeignKey(Product, related_name="images", on_delete=models.CASCADE)
    url = models.URLField(max_length=500)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]

    def __str__(self) -> str:  # pragma: no cover
        return self.url
