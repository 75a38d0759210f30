from django.urls import include, path
from rest_framework.routers import SimpleRouter

from orders.views import AdminOrderViewSet, OrderViewSet, SubmitOrderView

admin_router = SimpleRouter()
admin_router.register(r"", AdminOrderViewSet, basename="admin-orders")

router = SimpleRouter()
router.register(r"", OrderViewSet, basename="orders")

# Explicit paths must come before the router's <pk> patterns.
urlpatterns = [
    path("submit/", SubmitOrderView.as_view(), name="order-submit"),
    path("admin/", include(admin_router.urls)),
    path("", include(router.urls)),
]
