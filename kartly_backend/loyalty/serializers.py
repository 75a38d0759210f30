# loyalty/serializers.py

"""
LOYALTY SERIALIZERS

Read shapes for the points summary and history, and the input contract of
the redemption preview.
"""

from __future__ import annotations

from rest_framework import serializers

from loyalty.models import PointsBalance, PointsTransaction
from products.serializers.cart import CartLineSerializer, StrictIntegerField


class PointsSummarySerializer(serializers.ModelSerializer):
    tier = serializers.CharField(read_only=True)
    next_tier_threshold = serializers.IntegerField(read_only=True, allow_null=True)
    points_to_next_tier = serializers.SerializerMethodField()
    tier_progress = serializers.FloatField(read_only=True)

    class Meta:
        model = PointsBalance
        fields = [
            "total_points",
            "tier",
            "next_tier_threshold",
            "points_to_next_tier",
            "tier_progress",
            "updated_at",
        ]
        read_only_fields = fields

    def get_points_to_next_tier(self, obj) -> int | None:
        threshold = obj.next_tier_threshold
        if threshold is None:
            return None
        return threshold - obj.total_points


class PointsTransactionSerializer(serializers.ModelSerializer):
    order_no = serializers.CharField(source="order.order_no", read_only=True, default=None)

    class Meta:
        model = PointsTransaction
        fields = [
            "id",
            "order_id",
            "order_no",
            "points_change",
            "transaction_type",
            "description",
            "created_at",
        ]
        read_only_fields = fields


class RedemptionPreviewInputSerializer(serializers.Serializer):
    products = CartLineSerializer(many=True, allow_empty=False)
    points_to_redeem = StrictIntegerField(min_value=0, required=False, default=0)


class RedemptionPreviewResponseSerializer(serializers.Serializer):
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)
    available_points = serializers.IntegerField()
    max_redeemable_points = serializers.IntegerField()
    points_to_redeem = serializers.IntegerField()
    effective_points = serializers.IntegerField()
    discount = serializers.DecimalField(max_digits=12, decimal_places=2)
    final_total = serializers.DecimalField(max_digits=12, decimal_places=2)
    points_earned = serializers.IntegerField()
