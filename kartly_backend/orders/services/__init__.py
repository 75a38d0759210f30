"""
Orders application services.

Import from the submodules directly:
- orders.services.settlement      (order submission orchestrator)
- orders.services.order_lifecycle (back-office status transitions)
"""
