# loyalty/models/points_transaction.py

"""
POINTS TRANSACTION (APPEND-ONLY LEDGER)

Guarantees:
- Immutable once created (no updates, no deletes)
- points_change is signed: earned > 0, redeemed < 0
- At most one earned row and one redeemed row per order
"""

from __future__ import annotations

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models


class PointsTransaction(models.Model):
    TYPE_EARNED = "earned"
    TYPE_REDEEMED = "redeemed"

    TYPE_CHOICES = [
        (TYPE_EARNED, "Earned"),
        (TYPE_REDEEMED, "Redeemed"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="points_transactions",
    )

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="points_transactions",
    )

    points_change = models.IntegerField()
    transaction_type = models.CharField(max_length=16, choices=TYPE_CHOICES)
    description = models.CharField(max_length=255, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Points Transaction"
        verbose_name_plural = "Points Transactions"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "created_at"], name="points_txn_user_created_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["order", "transaction_type"],
                name="points_txn_one_per_order_and_type",
            ),
        ]

    def __str__(self):
        return f"{self.transaction_type} {self.points_change:+d} → {self.user}"

    def clean(self):
        if self.transaction_type not in (self.TYPE_EARNED, self.TYPE_REDEEMED):
            raise ValidationError("Invalid transaction_type")

        if self.points_change is None or self.points_change == 0:
            raise ValidationError("points_change must be non-zero")

        if self.transaction_type == self.TYPE_EARNED and self.points_change < 0:
            raise ValidationError("Earned transactions must be positive")

        if self.transaction_type == self.TYPE_REDEEMED and self.points_change > 0:
            raise ValidationError("Redeemed transactions must be negative")

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("PointsTransaction records are immutable and cannot be modified")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("PointsTransaction records are immutable and cannot be deleted")
