# orders/serializers/order.py

from rest_framework import serializers

from orders.models import Order
from orders.services.order_lifecycle import InvalidOrderTransitionError, validate_transition


class OrderSerializer(serializers.ModelSerializer):
    class Meta:
        model = Order
        fields = [
            "id",
            "order_no",
            "customer_name",
            "email",
            "phone",
            "address",
            "products",
            "subtotal_amount",
            "discount_amount",
            "total_amount",
            "points_redeemed",
            "points_earned",
            "payment_screenshot_url",
            "transaction_id",
            "status",
            "admin_notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrderReviewSerializer(serializers.ModelSerializer):
    """
    Back-office review of a submitted order.

    Only status and admin_notes are writable; status moves follow
    orders.services.order_lifecycle.
    """

    class Meta:
        model = Order
        fields = ["status", "admin_notes"]

    def validate_status(self, value):
        order = self.instance
        if order is not None and value != order.status:
            try:
                validate_transition(order=order, target_status=value)
            except InvalidOrderTransitionError as exc:
                raise serializers.ValidationError(str(exc)) from exc
        return value
