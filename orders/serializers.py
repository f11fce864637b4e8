"""DRF serializers for Orders.

Orders are rendered from their frozen snapshot only; nothing here reads the
live catalog. Money is formatted with the shop currency and
``purchased_at`` is converted to the active time zone.
"""

from common.conf import get_shop_config
from common.money import format_money
from django.utils import timezone
from rest_framework import serializers

from .models import Order, OrderItem


class ShopConfigMixin:
    @property
    def shop_config(self):
        return self.context.get("shop_config") or get_shop_config()


class OrderItemSerializer(ShopConfigMixin, serializers.ModelSerializer):
    """Snapshot of a purchased line."""

    title = serializers.CharField(source="title_at_moment", read_only=True)
    description = serializers.CharField(source="description_at_moment", read_only=True)
    image_url = serializers.CharField(source="image_url_at_moment", read_only=True)
    price_at_moment = serializers.SerializerMethodField()

    class Meta:
        model = OrderItem
        fields = ["title", "description", "image_url", "price_at_moment", "discount_at_moment", "quantity"]
        read_only_fields = fields

    def get_price_at_moment(self, obj: OrderItem) -> str:
        return format_money(obj.price_at_moment, self.shop_config)


class OrderDetailSerializer(ShopConfigMixin, serializers.ModelSerializer):
    """API representation of an order."""

    items = OrderItemSerializer(many=True, read_only=True)
    total = serializers.SerializerMethodField()
    sub_total = serializers.SerializerMethodField()
    purchased_at = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = ["code", "total", "sub_total", "purchased_at", "items"]
        read_only_fields = fields

    def get_total(self, obj: Order) -> str:
        return format_money(obj.total, self.shop_config)

    def get_sub_total(self, obj: Order) -> str:
        return format_money(obj.sub_total, self.shop_config)

    def get_purchased_at(self, obj: Order) -> str:
        return timezone.localtime(obj.created_at).isoformat()
