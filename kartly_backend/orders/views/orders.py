# orders/views/orders.py

"""
ORDER READ + REVIEW ENDPOINTS

Customer:
- GET /api/orders/            own orders, newest first
- GET /api/orders/<id>/

Admin (manual payment review):
- GET   /api/orders/admin/?status=<status>&search=<text>
- GET   /api/orders/admin/<id>/
- PATCH /api/orders/admin/<id>/   {status, admin_notes}

Orders are never deleted; money and points fields are never edited here.
"""

import logging

from drf_spectacular.utils import extend_schema
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, mixins, viewsets
from rest_framework.permissions import IsAuthenticated

from orders.models import Order
from orders.serializers import OrderReviewSerializer, OrderSerializer
from users.permissions import IsAdmin

logger = logging.getLogger(__name__)


class OrderViewSet(viewsets.ReadOnlyModelViewSet):
    permission_classes = [IsAuthenticated]
    serializer_class = OrderSerializer
    filterset_fields = ["status"]

    def get_queryset(self):
        return Order.objects.filter(user=self.request.user).order_by("-created_at")


@extend_schema(tags=["Orders (Admin)"])
class AdminOrderViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    permission_classes = [IsAdmin]
    queryset = Order.objects.select_related("user").order_by("-created_at")
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ["status"]
    search_fields = ["order_no", "customer_name", "email", "phone", "transaction_id"]
    http_method_names = ["get", "patch", "head", "options"]

    def get_serializer_class(self):
        if self.action in ("update", "partial_update"):
            return OrderReviewSerializer
        return OrderSerializer

    def perform_update(self, serializer):
        previous_status = serializer.instance.status
        order = serializer.save()

        if order.status != previous_status:
            logger.info(
                "Order status changed",
                extra={
                    "order_id": str(order.pk),
                    "order_no": order.order_no,
                    "from_status": previous_status,
                    "to_status": order.status,
                    "reviewed_by": str(self.request.user.pk),
                },
            )
