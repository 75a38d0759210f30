# products/models/product.py

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models


class Product(models.Model):
    """
    Catalog entry: the authoritative name and price of a sellable product.

    PRICING MODEL (IMPORTANT):
    - unit_price here is the ONLY price the order flow trusts.
    - Orders snapshot name + unit_price at submission time, so later edits
      never change historical orders.
    - Inactive products cannot be ordered.
    """

    # Human-readable slug ids ("cozycup-premium") are used in storefront URLs and carts.
    id = models.SlugField(primary_key=True, max_length=64)

    name = models.CharField(max_length=255, db_index=True)
    category = models.CharField(max_length=100, blank=True, default="")

    short_description = models.CharField(max_length=500, blank=True, default="")
    full_description = models.TextField(blank=True, default="")

    unit_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )

    image_url = models.URLField(max_length=500, blank=True, default="")

    in_stock = models.BooleanField(default=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["is_active", "category"], name="product_active_category_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.id})"

    def clean(self):
        if self.unit_price is None or Decimal(self.unit_price) <= 0:
            raise ValidationError("Unit price must be greater than zero")
