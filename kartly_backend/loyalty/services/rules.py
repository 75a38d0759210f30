# loyalty/services/rules.py

"""
LOYALTY RULES (PURE)

Business rules:
- Earn 5 points for every full ₹100 of the FINAL (post-discount) amount.
- 100 points = ₹10 discount; points are redeemed in whole units of 100.
- Tiers: Bronze [0, 500), Silver [500, 1000), Gold [1000, ∞).

DESIGN PRINCIPLES:
- No database access
- No side effects
- Tier is always derived from points, never stored
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from loyalty.services.exceptions import BelowMinimumRedemptionError, InsufficientBalanceError

POINTS_PER_REDEMPTION_UNIT = 100
DISCOUNT_PER_REDEMPTION_UNIT = Decimal("10")

EARN_SPEND_UNIT = Decimal("100")
POINTS_PER_EARN_UNIT = 5

TIER_BRONZE = "Bronze"
TIER_SILVER = "Silver"
TIER_GOLD = "Gold"

SILVER_THRESHOLD = 500
GOLD_THRESHOLD = 1000


# ============================================================
# TIERS
# ============================================================


def tier_for_points(points: int) -> str:
    if points >= GOLD_THRESHOLD:
        return TIER_GOLD
    if points >= SILVER_THRESHOLD:
        return TIER_SILVER
    return TIER_BRONZE


def next_tier_threshold(points: int) -> int | None:
    """Points needed for the next tier, or None when already Gold."""
    if points >= GOLD_THRESHOLD:
        return None
    if points >= SILVER_THRESHOLD:
        return GOLD_THRESHOLD
    return SILVER_THRESHOLD


def tier_progress(points: int) -> float:
    """Progress (0-100) through the current tier band."""
    if points >= GOLD_THRESHOLD:
        return 100.0
    if points >= SILVER_THRESHOLD:
        span = GOLD_THRESHOLD - SILVER_THRESHOLD
        return round((points - SILVER_THRESHOLD) / span * 100, 2)
    return round(max(points, 0) / SILVER_THRESHOLD * 100, 2)


# ============================================================
# EARN / DISCOUNT MATH
# ============================================================


def calculate_points_earned(final_total: Decimal) -> int:
    """
    floor(final_total / 100) * 5.

    Callers must pass the post-discount total.
    """
    final_total = Decimal(str(final_total))
    if final_total <= 0:
        return 0
    return int(final_total // EARN_SPEND_UNIT) * POINTS_PER_EARN_UNIT


def discount_for_points(points: int) -> Decimal:
    units = points // POINTS_PER_REDEMPTION_UNIT
    return DISCOUNT_PER_REDEMPTION_UNIT * units


def max_redeemable_points(available_balance: int, order_total: Decimal) -> int:
    """Largest whole-unit redemption allowed by both the balance and the order total."""
    by_balance = (max(available_balance, 0) // POINTS_PER_REDEMPTION_UNIT) * POINTS_PER_REDEMPTION_UNIT
    by_total = int(Decimal(str(order_total)) // DISCOUNT_PER_REDEMPTION_UNIT) * POINTS_PER_REDEMPTION_UNIT
    return max(min(by_balance, by_total), 0)


# ============================================================
# REDEMPTION PREVIEW
# ============================================================


@dataclass(frozen=True)
class RedemptionPreview:
    requested_points: int
    effective_points: int
    discount: Decimal

    @property
    def clamped(self) -> bool:
        return self.effective_points < (self.requested_points // POINTS_PER_REDEMPTION_UNIT) * POINTS_PER_REDEMPTION_UNIT


def preview_redemption(points_to_redeem, available_balance: int, order_total: Decimal) -> RedemptionPreview:
    """
    Validate a redemption request and compute its discount.

    Checks run in this order:
    1. negative / non-integer / more than available -> InsufficientBalanceError
    2. 1..99 points                                 -> BelowMinimumRedemptionError
    3. 0 points                                     -> no redemption

    Only whole 100-point units are consumed (250 requested -> 200 redeemed).
    When the discount would exceed order_total it is silently clamped to the
    largest whole unit that fits.
    """
    if isinstance(points_to_redeem, bool) or not isinstance(points_to_redeem, int):
        raise InsufficientBalanceError("Invalid points amount")

    if points_to_redeem < 0:
        raise InsufficientBalanceError("Points cannot be negative")

    if points_to_redeem > available_balance:
        raise InsufficientBalanceError("Insufficient points available")

    if 0 < points_to_redeem < POINTS_PER_REDEMPTION_UNIT:
        raise BelowMinimumRedemptionError(
            f"Minimum {POINTS_PER_REDEMPTION_UNIT} points required for redemption"
        )

    order_total = Decimal(str(order_total))

    effective_points = (points_to_redeem // POINTS_PER_REDEMPTION_UNIT) * POINTS_PER_REDEMPTION_UNIT
    discount = discount_for_points(effective_points)

    if discount > order_total:
        effective_points = int(order_total // DISCOUNT_PER_REDEMPTION_UNIT) * POINTS_PER_REDEMPTION_UNIT
        discount = discount_for_points(effective_points)

    return RedemptionPreview(
        requested_points=points_to_redeem,
        effective_points=effective_points,
        discount=discount.quantize(Decimal("0.01")),
    )
