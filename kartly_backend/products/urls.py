# products/urls.py

"""
PRODUCTS URLS

Mounted at /api/products/:
- /api/products/         list / create
- /api/products/<id>/    retrieve / update / deactivate
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from products.views import ProductViewSet

router = DefaultRouter()
router.register(r"", ProductViewSet, basename="products")

urlpatterns = [
    path("", include(router.urls)),
]
