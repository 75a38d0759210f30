# orders/views/submit.py

"""
ORDER SUBMISSION ENDPOINT

POST /api/orders/submit/

Security hardening:
- JWT required (401 {"error": "Unauthorized"} otherwise)
- Throttle (order_submit) because it's a write endpoint (abuse target)
- Prices, totals and discounts are computed server-side only

Every failure returns {"error": <message>}; internals never leak to the client.
"""

from __future__ import annotations

import logging

from django.core.exceptions import PermissionDenied
from django.db import OperationalError
from django.http import Http404
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import serializers, status
from rest_framework.exceptions import APIException, AuthenticationFailed, NotAuthenticated
from rest_framework.parsers import JSONParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import UserRateThrottle
from rest_framework.views import APIView

from loyalty.services.exceptions import RedemptionError, SettlementError
from orders.serializers.submit import SubmitOrderSerializer
from orders.services.exceptions import (
    AuthenticationRequiredError,
    NegativeTotalError,
    OrderPersistenceError,
    OrderValidationError,
)
from orders.services.settlement import submit_order
from products.services.pricing import ProductNotFoundError

logger = logging.getLogger(__name__)


class OrderSubmitThrottle(UserRateThrottle):
    scope = "order_submit"


class SubmitOrderResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    order_id = serializers.UUIDField()
    order_no = serializers.CharField()
    points_earned = serializers.IntegerField()
    points_redeemed = serializers.IntegerField()


# (exception class, status code, error_code, client message or None for str(exc))
ERROR_MAP = (
    (AuthenticationRequiredError, status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED", "Unauthorized"),
    (OrderValidationError, status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", None),
    (ProductNotFoundError, status.HTTP_400_BAD_REQUEST, "PRODUCT_NOT_FOUND", None),
    (RedemptionError, status.HTTP_400_BAD_REQUEST, "REDEMPTION_REJECTED", None),
    (NegativeTotalError, status.HTTP_400_BAD_REQUEST, "NEGATIVE_TOTAL", None),
    (OrderPersistenceError, status.HTTP_500_INTERNAL_SERVER_ERROR, "ORDER_PERSISTENCE_FAILED", "Failed to create order"),
    (SettlementError, status.HTTP_500_INTERNAL_SERVER_ERROR, "SETTLEMENT_FAILED", "Failed to create order"),
    (OperationalError, status.HTTP_503_SERVICE_UNAVAILABLE, "SERVICE_UNAVAILABLE", "Service temporarily unavailable, please retry"),
)


HANDLED_ERRORS = tuple(entry[0] for entry in ERROR_MAP)


def _error_entry(exc):
    return next(entry for entry in ERROR_MAP if isinstance(exc, entry[0]))


class SubmitOrderView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser]
    throttle_classes = [OrderSubmitThrottle]

    def handle_exception(self, exc):
        if not isinstance(exc, (APIException, Http404, PermissionDenied)):
            logger.exception("Unhandled order submission error", extra={"error_code": "INTERNAL_ERROR"})
            return Response({"error": "Internal server error"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        response = super().handle_exception(exc)

        if isinstance(exc, (NotAuthenticated, AuthenticationFailed)):
            response.data = {"error": "Unauthorized"}
        elif isinstance(response.data, dict) and "detail" in response.data:
            response.data = {"error": str(response.data["detail"])}

        return response

    @extend_schema(
        request=SubmitOrderSerializer,
        responses={
            200: SubmitOrderResponseSerializer,
            400: OpenApiResponse(description="Validation, pricing or redemption failure"),
            401: OpenApiResponse(description="Missing or invalid access token"),
            500: OpenApiResponse(description="Order could not be persisted"),
            503: OpenApiResponse(description="Transient database conflict, retry"),
        },
        description=(
            "Submit a storefront order for manual payment verification. "
            "Prices come from the catalog; points are earned on the discounted total."
        ),
        tags=["Orders"],
    )
    def post(self, request):
        payload = request.data
        user_id = str(request.user.pk)

        try:
            result = submit_order(user=request.user, payload=payload)
        except HANDLED_ERRORS as exc:
            _, http_status, error_code, message = _error_entry(exc)

            log = logger.warning if http_status < 500 else logger.error
            log(
                "Order submission failed",
                extra={"user_id": user_id, "error_code": error_code, "reason": str(exc)},
            )
            return Response({"error": message or str(exc)}, status=http_status)

        return Response(
            {
                "success": True,
                "order_id": result.order_id,
                "order_no": result.order.order_no,
                "points_earned": result.points_earned,
                "points_redeemed": result.points_redeemed,
            },
            status=status.HTTP_200_OK,
        )
