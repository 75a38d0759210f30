"""
ORDER LIFECYCLE DOMAIN RULES

This module defines the ONLY allowed status transitions
for storefront orders during manual payment review.

DESIGN PRINCIPLES:
- No database writes
- No points mutation (earned/redeemed points are final at submission)
- Single source of truth
"""

from orders.models import Order

# ============================================================
# DOMAIN ERRORS
# ============================================================


class OrderLifecycleError(Exception):
    pass


class InvalidOrderTransitionError(OrderLifecycleError):
    pass


# ============================================================
# STATE DEFINITIONS
# ============================================================

TERMINAL_STATES = {
    Order.STATUS_COMPLETED,
    Order.STATUS_REJECTED,
}

ALLOWED_TRANSITIONS = {
    Order.STATUS_PENDING_VERIFICATION: {
        Order.STATUS_VERIFIED,
        Order.STATUS_REJECTED,
    },
    Order.STATUS_VERIFIED: {
        Order.STATUS_SHIPPED,
        Order.STATUS_REJECTED,
    },
    Order.STATUS_SHIPPED: {
        Order.STATUS_COMPLETED,
    },
}


# ============================================================
# DOMAIN RULES
# ============================================================


def can_transition(*, from_status: str, to_status: str) -> bool:
    if from_status in TERMINAL_STATES:
        return False

    return to_status in ALLOWED_TRANSITIONS.get(from_status, set())


def validate_transition(*, order: Order, target_status: str):
    if not can_transition(
        from_status=order.status,
        to_status=target_status,
    ):
        raise InvalidOrderTransitionError(
            f"Order {order.order_no} cannot transition from "
            f"'{order.status}' to '{target_status}'"
        )
