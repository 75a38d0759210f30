# loyalty/models/points_balance.py

"""
POINTS BALANCE

One row per user holding the authoritative points total.

Guarantees:
- total_points >= 0 (database check constraint)
- Written ONLY by loyalty.services.ledger.settle()
- Tier is derived on read, never stored
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from loyalty.services.rules import next_tier_threshold, tier_for_points, tier_progress


class PointsBalance(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="points_balance",
    )

    total_points = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Points Balance"
        verbose_name_plural = "Points Balances"
        constraints = [
            models.CheckConstraint(
                condition=models.Q(total_points__gte=0),
                name="points_balance_non_negative",
            ),
        ]

    @property
    def tier(self) -> str:
        return tier_for_points(self.total_points)

    @property
    def next_tier_threshold(self) -> int | None:
        return next_tier_threshold(self.total_points)

    @property
    def tier_progress(self) -> float:
        return tier_progress(self.total_points)

    def __str__(self):
        return f"{self.user} | {self.total_points} pts | {self.tier}"
