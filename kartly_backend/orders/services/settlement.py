# orders/services/settlement.py

"""
ORDER SETTLEMENT ORCHESTRATOR (APPLICATION SERVICE)

Purpose:
- Turn one validated storefront submission into exactly one Order.
- Price the cart from the catalog, apply the optional points redemption,
  award points on the discounted total, and settle the loyalty ledger.

Hard rules:
- Client prices, totals and discounts are never read.
- Points are earned on the FINAL (post-discount) amount.
- The balance row is locked BEFORE the redemption preview, so the balance we
  validate against is the balance we deduct from.
- Order insert + balance update + ledger rows run in one DB transaction.

LOYALTY_STRICT_SETTLEMENT:
- True (default): a settlement failure rolls back the order as well.
- False: the order is kept and the failure is logged for reconciliation.
  Insufficient balance still aborts the whole submission in both modes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DatabaseError, OperationalError, transaction

from loyalty.services.exceptions import SettlementError
from loyalty.services.ledger import lock_balance, settle
from loyalty.services.rules import calculate_points_earned, preview_redemption
from orders.models import Order
from orders.serializers.submit import SubmitOrderSerializer, first_validation_error
from orders.services.exceptions import (
    AuthenticationRequiredError,
    NegativeTotalError,
    OrderPersistenceError,
    OrderValidationError,
)
from products.serializers.cart import to_cart_lines
from products.services.pricing import resolve_cart

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")

# Largest value Order.total (max_digits=12, decimal_places=2) can store.
MAX_ORDER_TOTAL = Decimal("9999999999.99")


def _money(v) -> Decimal:
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class SettlementResult:
    order: Order
    points_earned: int
    points_redeemed: int

    @property
    def order_id(self) -> str:
        return str(self.order.pk)


def _optional_text(value) -> str | None:
    value = (value or "").strip()
    return value or None


def validate_submission(payload) -> dict:
    serializer = SubmitOrderSerializer(data=payload)
    if not serializer.is_valid():
        raise OrderValidationError(first_validation_error(serializer))
    return serializer.validated_data


def _create_order(*, user, data: dict, priced, discount: Decimal, final_total: Decimal,
                  points_earned: int, points_redeemed: int) -> Order:
    try:
        return Order.objects.create(
            user=user,
            customer_name=data["customer_name"],
            email=data["email"],
            phone=data["phone"],
            address=data["address"],
            products=priced.snapshot(),
            subtotal_amount=priced.total,
            discount_amount=discount,
            total_amount=final_total,
            points_redeemed=points_redeemed,
            points_earned=points_earned,
            payment_screenshot_url=_optional_text(data.get("screenshot_path")),
            transaction_id=_optional_text(data.get("transaction_id")),
            status=Order.STATUS_PENDING_VERIFICATION,
        )
    except OperationalError:
        raise
    except (DatabaseError, ValidationError) as exc:
        logger.exception(
            "Order insert failed",
            extra={"user_id": str(user.pk), "error_code": "ORDER_PERSISTENCE_FAILED"},
        )
        raise OrderPersistenceError("Failed to create order") from exc


def _settle_points(*, user, order: Order, points_earned: int, points_redeemed: int) -> None:
    if points_earned == 0 and points_redeemed == 0:
        return

    if getattr(settings, "LOYALTY_STRICT_SETTLEMENT", True):
        settle(
            user=user,
            points_earned=points_earned,
            points_redeemed=points_redeemed,
            order=order,
        )
        return

    try:
        settle(
            user=user,
            points_earned=points_earned,
            points_redeemed=points_redeemed,
            order=order,
        )
    except (SettlementError, DatabaseError):
        # Lenient mode: the order stands, ledger needs manual reconciliation.
        logger.exception(
            "Points settlement failed; order kept",
            extra={
                "user_id": str(user.pk),
                "order_id": str(order.pk),
                "points_earned": points_earned,
                "points_redeemed": points_redeemed,
                "error_code": "SETTLEMENT_SKIPPED",
            },
        )


def submit_order(*, user, payload) -> SettlementResult:
    """
    Validate, price, discount, persist and settle one order submission.

    Raises (nothing is written in any of these cases):
    - AuthenticationRequiredError
    - OrderValidationError           (first failing field only)
    - ProductNotFoundError
    - InsufficientBalanceError / BelowMinimumRedemptionError
    - NegativeTotalError
    - OrderPersistenceError
    - SettlementError                (strict mode only)
    - OperationalError               (transient; caller may retry)
    """
    if user is None or not getattr(user, "is_authenticated", False):
        raise AuthenticationRequiredError("Unauthorized")

    data = validate_submission(payload)

    priced = resolve_cart(to_cart_lines(data["products"]))
    if priced.total > MAX_ORDER_TOTAL:
        raise OrderValidationError("Order total exceeds the maximum allowed")
    points_to_redeem = data["points_to_redeem"]

    with transaction.atomic():
        discount = Decimal("0.00")
        points_redeemed = 0

        if points_to_redeem > 0:
            balance = lock_balance(user=user)
            preview = preview_redemption(points_to_redeem, balance.total_points, priced.total)
            discount = preview.discount
            points_redeemed = preview.effective_points

        final_total = _money(priced.total - discount)
        if final_total < 0:
            raise NegativeTotalError("Order total cannot be negative")

        points_earned = calculate_points_earned(final_total)

        order = _create_order(
            user=user,
            data=data,
            priced=priced,
            discount=discount,
            final_total=final_total,
            points_earned=points_earned,
            points_redeemed=points_redeemed,
        )

        _settle_points(
            user=user,
            order=order,
            points_earned=points_earned,
            points_redeemed=points_redeemed,
        )

    logger.info(
        "Order submitted",
        extra={
            "user_id": str(user.pk),
            "order_id": str(order.pk),
            "order_no": order.order_no,
            "total_amount": str(final_total),
            "points_earned": points_earned,
            "points_redeemed": points_redeemed,
        },
    )

    return SettlementResult(
        order=order,
        points_earned=points_earned,
        points_redeemed=points_redeemed,
    )
