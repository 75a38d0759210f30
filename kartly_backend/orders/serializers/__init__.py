from .order import OrderReviewSerializer, OrderSerializer
from .submit import SubmitOrderSerializer, first_validation_error

__all__ = [
    "OrderReviewSerializer",
    "OrderSerializer",
    "SubmitOrderSerializer",
    "first_validation_error",
]
