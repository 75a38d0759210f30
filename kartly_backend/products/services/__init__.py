from .pricing import (
    CartLine,
    PricedCart,
    PricingError,
    ProductNotFoundError,
    ResolvedLine,
    resolve_cart,
)

__all__ = [
    "CartLine",
    "PricedCart",
    "PricingError",
    "ProductNotFoundError",
    "ResolvedLine",
    "resolve_cart",
]
