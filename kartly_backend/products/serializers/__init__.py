# products/serializers/__init__.py

from .cart import CartLineSerializer, StrictIntegerField, to_cart_lines
from .product import ProductSerializer

__all__ = [
    "CartLineSerializer",
    "ProductSerializer",
    "StrictIntegerField",
    "to_cart_lines",
]
