"""
LOYALTY MODELS PACKAGE EXPORTS
"""

from .points_balance import PointsBalance
from .points_transaction import PointsTransaction

__all__ = [
    "PointsBalance",
    "PointsTransaction",
]
