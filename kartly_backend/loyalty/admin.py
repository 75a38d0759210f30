# loyalty/admin.py

"""
LOYALTY ADMIN (READ-ONLY)

Balances only move through order settlement, and transactions are an
append-only audit log, so neither is editable here.
"""

from django.contrib import admin

from loyalty.models import PointsBalance, PointsTransaction


class ReadOnlyAdmin(admin.ModelAdmin):
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(PointsBalance)
class PointsBalanceAdmin(ReadOnlyAdmin):
    list_display = ("user", "total_points", "tier", "updated_at")
    search_fields = ("user__email",)

    @admin.display(description="Tier")
    def tier(self, obj):
        return obj.tier


@admin.register(PointsTransaction)
class PointsTransactionAdmin(ReadOnlyAdmin):
    list_display = ("user", "transaction_type", "points_change", "order", "created_at")
    list_filter = ("transaction_type", "created_at")
    search_fields = ("user__email", "order__order_no", "description")
