"""Selectors for the catalog domain.

Read-only product lookups consumed by the cart and orders services. Stock
is always read straight from the database so callers validate against the
live value rather than one cached on a loaded instance.
"""

from common.exceptions import NotFound

from .models import Product


def get_product(*, product_id: int) -> Product:
    """Return a live product with its images.

    Raises ``NotFound`` when the product is missing, deleted or switched off.
    """

    try:
        return Product.objects.prefetch_related("images").get(id=product_id, is_deleted=False, is_available=True)
    except Product.DoesNotExist:
        raise NotFound("Product does not exist.")


def get_real_stock(*, product_id: int) -> int:
    """Return the current stock for a product, or 0 when it no longer exists."""

    stock = Product.objects.filter(id=product_id).values_list("stock", flat=True).first()
    return int(stock or 0)
