# loyalty/views.py

"""
LOYALTY API

- GET  /api/loyalty/points/                 caller's balance + tier summary
- GET  /api/loyalty/transactions/           caller's points history (newest first)
- POST /api/loyalty/redemption/preview/     price a cart and preview a redemption

All endpoints are read-only with respect to balances: points only move
through order submission.
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from loyalty.models import PointsTransaction
from loyalty.serializers import (
    PointsSummarySerializer,
    PointsTransactionSerializer,
    RedemptionPreviewInputSerializer,
    RedemptionPreviewResponseSerializer,
)
from loyalty.services.exceptions import RedemptionError
from loyalty.services.ledger import get_or_create_balance, peek_balance
from loyalty.services.rules import (
    calculate_points_earned,
    max_redeemable_points,
    preview_redemption,
)
from products.serializers.cart import to_cart_lines
from products.services.pricing import PricingError, resolve_cart

logger = logging.getLogger(__name__)


class PointsSummaryView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        responses={200: PointsSummarySerializer},
        description="Current points balance, tier and progress to the next tier",
        tags=["Loyalty"],
    )
    def get(self, request):
        balance = get_or_create_balance(user=request.user)
        return Response(PointsSummarySerializer(balance).data)


class PointsTransactionListView(generics.ListAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = PointsTransactionSerializer
    filterset_fields = ["transaction_type"]

    def get_queryset(self):
        return (
            PointsTransaction.objects.filter(user=self.request.user)
            .select_related("order")
            .order_by("-created_at")
        )


class RedemptionPreviewView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=RedemptionPreviewInputSerializer,
        responses={
            200: RedemptionPreviewResponseSerializer,
            400: OpenApiResponse(description="Invalid cart or redemption"),
        },
        description=(
            "Re-prices the cart from the catalog and previews a points redemption "
            "against the caller's balance. Nothing is written."
        ),
        tags=["Loyalty"],
    )
    def post(self, request):
        s = RedemptionPreviewInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        try:
            priced = resolve_cart(to_cart_lines(data["products"]))
        except PricingError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        balance = peek_balance(user=request.user)
        points_to_redeem = data.get("points_to_redeem", 0)

        try:
            preview = preview_redemption(points_to_redeem, balance.total_points, priced.total)
        except RedemptionError as exc:
            logger.info(
                "Redemption preview rejected",
                extra={"user_id": str(request.user.pk), "error_code": exc.__class__.__name__},
            )
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        final_total = priced.total - preview.discount

        payload = {
            "subtotal": priced.total,
            "available_points": balance.total_points,
            "max_redeemable_points": max_redeemable_points(balance.total_points, priced.total),
            "points_to_redeem": points_to_redeem,
            "effective_points": preview.effective_points,
            "discount": preview.discount,
            "final_total": final_total,
            "points_earned": calculate_points_earned(final_total),
        }
        return Response(RedemptionPreviewResponseSerializer(payload).data)
