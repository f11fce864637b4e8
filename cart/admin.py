"""Admin registration for cart models.

Provides admin interfaces for `Cart` and `CartItem`, with inline items on
the cart page for support staff. Totals are read-only; they are owned by
the cart services.
"""

from django.contrib import admin, messages

from .models import Cart, CartItem
from .services import clear_cart


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    fields = ("product", "quantity", "created_at", "updated_at")
    readonly_fields = ("created_at", "updated_at")
    raw_id_fields = ("product",)


class OwnerTypeFilter(admin.SimpleListFilter):
    title = "owner type"
    parameter_name = "owner_type"

    def lookups(self, request, model_admin):
        return (
            ("user", "User carts"),
            ("anonymous", "Anonymous carts"),
        )

    def queryset(self, request, queryset):
        value = self.value()
        if value == "user":
            return queryset.filter(user__isnull=False)
        if value == "anonymous":
            return queryset.filter(user__isnull=True)
        return queryset


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ("id", "buyer_id", "user", "anonymous", "unique_item_count", "sub_total", "total", "updated_at")
    list_filter = (OwnerTypeFilter,)
    search_fields = ("buyer_id", "user__username", "user__email")
    ordering = ("-updated_at",)
    readonly_fields = ("sub_total", "total", "unique_item_count", "total_saved", "created_at", "updated_at")
    inlines = [CartItemInline]
    list_select_related = ("user",)
    actions = ["action_clear_cart"]

    @admin.display(boolean=True, description="Anonymous")
    def anonymous(self, obj):
        return obj.is_anonymous

    @admin.action(description="Clear cart")
    def action_clear_cart(self, request, queryset):
        for cart in queryset:
            clear_cart(buyer_id=cart.buyer_id, user_id=cart.user_id)
        messages.success(request, f"Cleared {queryset.count()} cart(s).")


@admin.register(CartItem)
class CartItemAdmin(admin.ModelAdmin):
    list_display = ("id", "cart", "product", "quantity", "updated_at")
    search_fields = ("product__title", "cart__buyer_id", "cart__user__email")
    ordering = ("id",)
    readonly_fields = ("created_at", "updated_at")
    raw_id_fields = ("cart", "product")
