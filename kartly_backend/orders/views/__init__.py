from .orders import AdminOrderViewSet, OrderViewSet
from .submit import SubmitOrderView

__all__ = [
    "AdminOrderViewSet",
    "OrderViewSet",
    "SubmitOrderView",
]
