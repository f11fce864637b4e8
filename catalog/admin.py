"""Admin registration for catalog models."""

from django.contrib import admin

from .models import Product, ProductImage


class ProductImageInline(admin.TabularInline):
    model = ProductImage
    extra = 0
    readonly_fields = ("created_at",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("title", "price", "discount", "stock", "condition", "is_available", "is_deleted", "updated_at")
    list_filter = ("condition", "is_available", "is_deleted")
    search_fields = ("title", "description")
    readonly_fields = ("created_at", "updated_at")
    inlines = [ProductImageInline]
