from django.contrib import admin

from orders.models import Order


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = (
        "order_no",
        "customer_name",
        "email",
        "total_amount",
        "points_redeemed",
        "points_earned",
        "status",
        "created_at",
    )
    list_filter = ("status", "created_at")
    search_fields = ("order_no", "customer_name", "email", "phone", "transaction_id")
    ordering = ("-created_at",)
    readonly_fields = (
        "order_no",
        "user",
        "products",
        "subtotal_amount",
        "discount_amount",
        "total_amount",
        "points_redeemed",
        "points_earned",
        "payment_screenshot_url",
        "transaction_id",
        "created_at",
        "updated_at",
    )

    def has_delete_permission(self, request, obj=None):
        return False
