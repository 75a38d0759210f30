# products/tests/test_catalog_api.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from products.models import Product

User = get_user_model()


class CatalogApiTests(TestCase):
    """
    GUARANTEES:
    - Anyone can browse active products
    - Only admins can write
    - Delete deactivates instead of removing
    """

    def setUp(self):
        self.client = APIClient()

        self.admin = User.objects.create_user(email="admin@example.com", password="pass", role="admin")
        self.customer = User.objects.create_user(email="shopper@example.com", password="pass")

        self.active = Product.objects.create(
            id="cozycup-premium",
            name="CozyCup Premium",
            category="Drinkware",
            short_description="Self-heating smart mug",
            unit_price=Decimal("2499.00"),
        )
        self.inactive = Product.objects.create(
            id="retired-mug",
            name="Retired Mug",
            unit_price=Decimal("999.00"),
            is_active=False,
        )

    def _ids(self, response):
        return {row["id"] for row in response.data["results"]}

    def test_anonymous_list_shows_active_only(self):
        response = self.client.get("/api/products/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(self._ids(response), {"cozycup-premium"})

    def test_anonymous_cannot_see_inactive_detail(self):
        response = self.client.get("/api/products/retired-mug/")
        self.assertEqual(response.status_code, 404)

    def test_search_by_name(self):
        response = self.client.get("/api/products/", {"q": "cozy"})
        self.assertEqual(self._ids(response), {"cozycup-premium"})

        response = self.client.get("/api/products/", {"q": "teapot"})
        self.assertEqual(self._ids(response), set())

    def test_admin_can_include_inactive(self):
        self.client.force_authenticate(self.admin)

        response = self.client.get("/api/products/", {"include_inactive": "true"})
        self.assertEqual(self._ids(response), {"cozycup-premium", "retired-mug"})

    def test_customer_cannot_create_product(self):
        self.client.force_authenticate(self.customer)

        response = self.client.post(
            "/api/products/",
            {"id": "lid", "name": "Lid", "unit_price": "99.00"},
            format="json",
        )
        self.assertEqual(response.status_code, 403)

    def test_admin_creates_product(self):
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            "/api/products/",
            {"id": "lid", "name": "Lid", "unit_price": "99.00"},
            format="json",
        )
        self.assertEqual(response.status_code, 201)
        self.assertTrue(Product.objects.filter(id="lid").exists())

    def test_admin_cannot_create_zero_price(self):
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            "/api/products/",
            {"id": "lid", "name": "Lid", "unit_price": "0.00"},
            format="json",
        )
        self.assertEqual(response.status_code, 400)

    def test_delete_deactivates(self):
        self.client.force_authenticate(self.admin)

        response = self.client.delete("/api/products/cozycup-premium/")

        self.assertEqual(response.status_code, 204)
        self.active.refresh_from_db()
        self.assertFalse(self.active.is_active)
