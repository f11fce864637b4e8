"""Admin registration for orders.

Orders are historical records, so the admin is read-only.
"""

from django.contrib import admin

from .models import Order, OrderItem


class ReadOnlyAdminMixin:
    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False


class OrderItemInline(ReadOnlyAdminMixin, admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False


@admin.register(Order)
class OrderAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ("id", "code", "user", "sub_total", "total", "created_at")
    list_filter = ("created_at",)
    search_fields = ("code", "user__email", "items__title_at_moment")
    date_hierarchy = "created_at"
    inlines = [OrderItemInline]


@admin.register(OrderItem)
class OrderItemAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ("id", "order", "title_at_moment", "price_at_moment", "discount_at_moment", "quantity")
    search_fields = ("order__code", "title_at_moment")
