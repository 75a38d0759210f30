"""
ORDERS MODELS PACKAGE EXPORTS
"""

from .order import Order

__all__ = [
    "Order",
]
