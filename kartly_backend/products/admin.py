# products/admin.py
"""
PATH: products/admin.py

Catalog admin.

- Product ids are permanent (orders reference them), so they are read-only
  once a product exists.
- Deactivate products instead of deleting them.
"""

from __future__ import annotations

from django.contrib import admin

from products.models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "name",
        "category",
        "unit_price",
        "in_stock",
        "is_active",
        "created_at",
    )
    list_filter = ("is_active", "in_stock", "category")
    search_fields = ("id", "name")
    ordering = ("-created_at",)

    def get_readonly_fields(self, request, obj=None):
        if obj is not None:
            return ("id", "created_at", "updated_at")
        return ("created_at", "updated_at")

    def has_delete_permission(self, request, obj=None):
        return False
