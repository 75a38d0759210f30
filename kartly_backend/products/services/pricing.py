# products/services/pricing.py

"""
PRICING RESOLVER

Purpose:
- Turn a caller-supplied cart of (product id, quantity) pairs into trusted
  order lines priced from the catalog.

Hard rules:
- Caller prices and names are never read; only the catalog is trusted.
- Every distinct product id is looked up in ONE query.
- Unknown or inactive ids fail the whole cart (no partial pricing).
- Money is Decimal end to end, quantized to 2dp per line and for the total.
- Read-only: this module never writes.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from products.models import Product

TWOPLACES = Decimal("0.01")


def _money(v) -> Decimal:
    if v is None or v == "":
        return Decimal("0.00")
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


# ============================================================
# DOMAIN ERRORS
# ============================================================


class PricingError(Exception):
    """Base error for cart pricing failures."""


class ProductNotFoundError(PricingError):
    """Raised when a cart references a product the catalog does not sell."""

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")


# ============================================================
# VALUE OBJECTS
# ============================================================


@dataclass(frozen=True)
class CartLine:
    product_id: str
    quantity: int


@dataclass(frozen=True)
class ResolvedLine:
    product_id: str
    name: str
    unit_price: Decimal
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return _money(self.unit_price * Decimal(self.quantity))

    def as_snapshot(self) -> dict:
        """JSON-safe snapshot persisted on the order."""
        return {
            "id": self.product_id,
            "name": self.name,
            "price": str(self.unit_price),
            "quantity": self.quantity,
            "line_total": str(self.line_total),
        }


@dataclass(frozen=True)
class PricedCart:
    lines: tuple[ResolvedLine, ...]
    total: Decimal

    def snapshot(self) -> list[dict]:
        return [line.as_snapshot() for line in self.lines]


# ============================================================
# RESOLVER
# ============================================================


def _validate_lines(lines: list[CartLine]) -> None:
    if not lines:
        raise PricingError("Cart is empty")

    for line in lines:
        if not (line.product_id or "").strip():
            raise PricingError("Every cart line needs a product id")
        if isinstance(line.quantity, bool) or not isinstance(line.quantity, int) or line.quantity <= 0:
            raise PricingError(f"Invalid quantity for {line.product_id}")


def resolve_cart(lines: Iterable[CartLine]) -> PricedCart:
    """
    Price a cart from the catalog.

    Duplicate product ids are kept as separate lines; each is priced from the
    same catalog row. Raises ProductNotFoundError naming the first unknown id
    in cart order.
    """
    lines = list(lines)
    _validate_lines(lines)

    requested_ids = list(dict.fromkeys(line.product_id.strip() for line in lines))

    catalog = {
        p.id: p
        for p in Product.objects.filter(id__in=requested_ids, is_active=True).only(
            "id", "name", "unit_price"
        )
    }

    if len(catalog) != len(requested_ids):
        missing = next(pid for pid in requested_ids if pid not in catalog)
        raise ProductNotFoundError(missing)

    resolved = []
    total = Decimal("0.00")

    for line in lines:
        product = catalog[line.product_id.strip()]
        resolved_line = ResolvedLine(
            product_id=product.id,
            name=product.name,
            unit_price=_money(product.unit_price),
            quantity=line.quantity,
        )
        resolved.append(resolved_line)
        total += resolved_line.line_total

    return PricedCart(lines=tuple(resolved), total=_money(total))
