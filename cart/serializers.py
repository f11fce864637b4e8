"""Cart serializers for read and write operations.

Read serializers are fed by the ``from_cart`` / ``empty`` factories, which
own the mapping from the cart aggregate to its API shape. Money is
formatted here and nowhere else.
"""

from common.conf import ShopConfig, get_shop_config
from common.money import format_money
from common.validation import raise_for_errors
from rest_framework import serializers

from .pricing import clamp_discount, line_amounts
from .validators import validate_add_item, validate_quantity_update


class CartItemReadSerializer(serializers.Serializer):
    """Read serializer for a cart line priced from the live product."""

    product_id = serializers.IntegerField()
    title = serializers.CharField()
    image_url = serializers.CharField()
    price = serializers.IntegerField()
    quantity = serializers.IntegerField()
    discount = serializers.IntegerField()
    sub_total_price = serializers.CharField()
    total_price = serializers.CharField()

    @staticmethod
    def to_row(item, config: ShopConfig) -> dict:
        product = item.product
        discount = clamp_discount(product.discount, product_id=product.id)
        sub_total, total = line_amounts(product.price, item.quantity, discount)
        return {
            "product_id": product.id,
            "title": product.title,
            "image_url": product.main_image_url or config.default_image_url,
            "price": product.price,
            "quantity": item.quantity,
            "discount": discount,
            "sub_total_price": format_money(sub_total, config),
            "total_price": format_money(total, config),
        }


class CartReadSerializer(serializers.Serializer):
    """Read serializer for the cart summary and lines."""

    buyer_id = serializers.CharField()
    user_id = serializers.IntegerField(allow_null=True)
    items = CartItemReadSerializer(many=True)
    sub_total_price = serializers.CharField()
    total_price = serializers.CharField()
    unique_item_count = serializers.IntegerField()
    total_saved = serializers.IntegerField()

    @classmethod
    def from_cart(cls, cart, config: ShopConfig | None = None):
        config = config or get_shop_config()
        return cls(
            {
                "buyer_id": cart.buyer_id,
                "user_id": cart.user_id,
                "items": [CartItemReadSerializer.to_row(item, config) for item in cart.items.all()],
                "sub_total_price": format_money(cart.sub_total, config),
                "total_price": format_money(cart.total, config),
                "unique_item_count": cart.unique_item_count,
                "total_saved": cart.total_saved,
            }
        )

    @classmethod
    def empty(cls, buyer_id: str, user_id: int | None = None, config: ShopConfig | None = None):
        """Representation for a buyer who has no cart yet."""
        config = config or get_shop_config()
        return cls(
            {
                "buyer_id": buyer_id,
                "user_id": user_id,
                "items": [],
                "sub_total_price": format_money(0, config),
                "total_price": format_money(0, config),
                "unique_item_count": 0,
                "total_saved": 0,
            }
        )


class AddItemSerializer(serializers.Serializer):
    """Write serializer for adding an item to the cart."""

    product_id = serializers.IntegerField()
    quantity = serializers.IntegerField()

    def validate(self, attrs):
        raise_for_errors(validate_add_item(attrs))
        return attrs


class UpdateItemQuantitySerializer(serializers.Serializer):
    """Write serializer for overwriting a line quantity (0 removes the line)."""

    quantity = serializers.IntegerField()

    def validate(self, attrs):
        raise_for_errors(validate_quantity_update(attrs))
        return attrs
