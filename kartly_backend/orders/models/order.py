# orders/models/order.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone


class Order(models.Model):
    """
    Storefront order awaiting manual payment verification.

    Key rules:
    - Created exactly once per successful submission, status "Pending Verification".
    - products is a snapshot of catalog name/price at submission time.
    - Money and points fields are immutable after creation; only status and
      admin_notes change afterwards (back-office review).
    """

    STATUS_PENDING_VERIFICATION = "Pending Verification"
    STATUS_VERIFIED = "Verified"
    STATUS_SHIPPED = "Shipped"
    STATUS_COMPLETED = "Completed"
    STATUS_REJECTED = "Rejected"

    STATUS_CHOICES = [
        (STATUS_PENDING_VERIFICATION, "Pending Verification"),
        (STATUS_VERIFIED, "Verified"),
        (STATUS_SHIPPED, "Shipped"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_REJECTED, "Rejected"),
    ]

    IMMUTABLE_FIELDS = (
        "user_id",
        "products",
        "subtotal_amount",
        "discount_amount",
        "total_amount",
        "points_redeemed",
        "points_earned",
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order_no = models.CharField(
        max_length=64,
        unique=True,
        blank=True,
        help_text="System-generated public order number",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders",
    )

    # Customer contact
    customer_name = models.CharField(max_length=100)
    email = models.EmailField(max_length=255)
    phone = models.CharField(max_length=10)
    address = models.CharField(max_length=500)

    # [{id, name, price, quantity, line_total}], prices as decimal strings
    products = models.JSONField(default=list)

    # Money fields (server authoritative)
    subtotal_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    discount_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    points_redeemed = models.PositiveIntegerField(default=0)
    points_earned = models.PositiveIntegerField(default=0)

    # Payment evidence for manual verification (no gateway)
    payment_screenshot_url = models.CharField(max_length=500, null=True, blank=True)
    transaction_id = models.CharField(max_length=100, null=True, blank=True)

    status = models.CharField(
        max_length=32,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING_VERIFICATION,
    )
    admin_notes = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "created_at"], name="order_user_created_idx"),
            models.Index(fields=["status"], name="order_status_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(total_amount__gte=0),
                name="order_total_non_negative",
            ),
        ]

    def save(self, *args, **kwargs):
        if not self.order_no:
            prefix = timezone.now().strftime("ORD%Y%m%d")
            self.order_no = f"{prefix}-{uuid.uuid4().hex[:8].upper()}"

        if not self._state.adding:
            original = (
                type(self).objects.filter(pk=self.pk).values(*self.IMMUTABLE_FIELDS).first()
            )
            if original is not None:
                for field in self.IMMUTABLE_FIELDS:
                    if getattr(self, field) != original[field]:
                        raise ValidationError(f"Order field '{field}' is immutable after creation")

        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.order_no} | {self.total_amount} | {self.status}"
