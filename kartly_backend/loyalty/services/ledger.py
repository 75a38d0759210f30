# loyalty/services/ledger.py

"""
LOYALTY LEDGER (APPLICATION SERVICE)

Purpose:
- Own the per-user points balance.
- Apply earn/redeem results of one order as ONE net delta.
- Append the matching immutable PointsTransaction rows.

Hard rules:
- settle() is the only write path for PointsBalance.total_points.
- The delta is applied with a conditional UPDATE (total_points >= -net), so a
  balance can never go negative even when two redemptions race.
- Balance update and ledger rows commit or roll back together.
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError
from django.db import DatabaseError, OperationalError, transaction
from django.db.models import F
from django.utils import timezone

from loyalty.models import PointsBalance, PointsTransaction
from loyalty.services.exceptions import InsufficientBalanceError, SettlementError

logger = logging.getLogger(__name__)


# ============================================================
# READS
# ============================================================


def get_or_create_balance(*, user) -> PointsBalance:
    """Balances are created lazily with 0 points on first need."""
    balance, created = PointsBalance.objects.get_or_create(user=user)
    if created:
        logger.info("Points balance created", extra={"user_id": str(user.pk)})
    return balance


def peek_balance(*, user) -> PointsBalance:
    """Read-only lookup; a missing row comes back unsaved with 0 points."""
    balance = PointsBalance.objects.filter(user=user).first()
    if balance is None:
        balance = PointsBalance(user=user, total_points=0)
    return balance


def lock_balance(*, user) -> PointsBalance:
    """
    Fetch (or create) the caller's balance row with a row lock.

    Must run inside transaction.atomic(); concurrent settlements for the same
    user queue on this lock until the holder commits.
    """
    balance, _ = PointsBalance.objects.select_for_update().get_or_create(user=user)
    return balance


# ============================================================
# WRITES
# ============================================================


def _order_label(order) -> str:
    if order is None:
        return ""
    return getattr(order, "order_no", "") or str(order.pk)


def _apply_delta(*, user, points_earned: int, points_redeemed: int, order) -> PointsBalance:
    net = points_earned - points_redeemed

    balance, created = PointsBalance.objects.select_for_update().get_or_create(
        user=user,
        defaults={"total_points": max(0, net)},
    )

    # A freshly created row already holds max(0, net).
    if not created:
        updated = PointsBalance.objects.filter(
            pk=balance.pk,
            total_points__gte=max(-net, 0),
        ).update(
            total_points=F("total_points") + net,
            updated_at=timezone.now(),
        )
        if not updated:
            raise InsufficientBalanceError("Insufficient points available")

    label = _order_label(order)

    if points_redeemed > 0:
        PointsTransaction.objects.create(
            user=user,
            order=order,
            points_change=-points_redeemed,
            transaction_type=PointsTransaction.TYPE_REDEEMED,
            description=f"Redeemed {points_redeemed} points on order {label}".strip(),
        )

    if points_earned > 0:
        PointsTransaction.objects.create(
            user=user,
            order=order,
            points_change=points_earned,
            transaction_type=PointsTransaction.TYPE_EARNED,
            description=f"Earned {points_earned} points from order {label}".strip(),
        )

    balance.refresh_from_db(fields=["total_points", "updated_at"])
    return balance


def settle(*, user, points_earned: int, points_redeemed: int, order=None) -> PointsBalance:
    """
    Apply net = points_earned - points_redeemed to the user's balance and
    write one redeemed row (iff points_redeemed > 0) and one earned row
    (iff points_earned > 0). A missing balance row is created holding
    max(0, net).

    Raises:
    - InsufficientBalanceError: the balance no longer covers the redemption
      (e.g. a concurrent settlement spent it first).
    - OperationalError: lock/serialization conflict; transient, caller may retry.
    - SettlementError: any other persistence failure.
    """
    for name, value in (("points_earned", points_earned), ("points_redeemed", points_redeemed)):
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise SettlementError(f"{name} must be a non-negative integer")

    user_id = str(user.pk)

    try:
        with transaction.atomic():
            balance = _apply_delta(
                user=user,
                points_earned=points_earned,
                points_redeemed=points_redeemed,
                order=order,
            )
    except InsufficientBalanceError:
        logger.warning(
            "Points settlement rejected: insufficient balance",
            extra={"user_id": user_id, "error_code": "INSUFFICIENT_BALANCE"},
        )
        raise
    except OperationalError:
        logger.warning(
            "Points settlement conflict",
            extra={"user_id": user_id, "error_code": "SETTLEMENT_CONFLICT"},
        )
        raise
    except (DatabaseError, ValidationError) as exc:
        logger.exception(
            "Points settlement failed",
            extra={"user_id": user_id, "error_code": "SETTLEMENT_FAILED"},
        )
        raise SettlementError("Points settlement failed") from exc

    logger.info(
        "Points settled",
        extra={
            "user_id": user_id,
            "order_id": str(order.pk) if order is not None else None,
            "points_earned": points_earned,
            "points_redeemed": points_redeemed,
            "total_points": balance.total_points,
        },
    )
    return balance
