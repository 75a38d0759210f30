# products/views/product.py

"""
PRODUCT VIEWSET

Purpose:
- Public product browsing for the storefront (AllowAny, active products only)
- Admin catalog management (create / update / deactivate)

Deleting a product deactivates it: orders keep referencing its id.
"""

from django.db.models import Q
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.response import Response

from products.models import Product
from products.serializers.product import ProductSerializer
from users.permissions import IsAdminOrReadOnly


class ProductViewSet(viewsets.ModelViewSet):
    """
    Catalog endpoints.

    Public:
    - GET /api/products/?q=<search>&category=<name>
    - GET /api/products/<id>/

    Admin:
    - POST / PUT / PATCH / DELETE (delete = deactivate)
    - ?include_inactive=true on list
    """

    serializer_class = ProductSerializer
    permission_classes = [IsAdminOrReadOnly]
    filterset_fields = ["category", "in_stock"]

    def _is_admin(self) -> bool:
        user = getattr(self.request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "is_admin", False))

    def get_queryset(self):
        qs = Product.objects.all()

        include_inactive = (
            self.request.query_params.get("include_inactive", "").strip().lower() == "true"
        )
        if not self._is_admin():
            qs = qs.filter(is_active=True)
        elif self.action == "list" and not include_inactive:
            qs = qs.filter(is_active=True)

        q = (self.request.query_params.get("q") or "").strip()
        if q:
            qs = qs.filter(Q(name__icontains=q) | Q(short_description__icontains=q))

        return qs.order_by("-created_at")

    @extend_schema(
        parameters=[
            OpenApiParameter(name="q", required=False, type=str),
            OpenApiParameter(name="include_inactive", required=False, type=bool),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        product = self.get_object()
        if product.is_active:
            product.is_active = False
            product.save(update_fields=["is_active", "updated_at"])
        return Response(status=status.HTTP_204_NO_CONTENT)
