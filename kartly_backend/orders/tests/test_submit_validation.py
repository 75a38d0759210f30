# orders/tests/test_submit_validation.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from loyalty.models import PointsTransaction
from orders.models import Order
from products.models import Product

User = get_user_model()

SUBMIT_URL = "/api/orders/submit/"


def _payload(**overrides):
    payload = {
        "customer_name": "Asha Rao",
        "email": "asha@example.com",
        "phone": "9876543210",
        "address": "12 MG Road, Bengaluru 560001",
        "products": [{"id": "cozycup-premium", "quantity": 1}],
    }
    payload.update(overrides)
    return payload


class SubmitValidationTests(TestCase):
    """
    GUARANTEES:
    - Only the FIRST failing field is reported
    - Messages are stable strings the storefront can show
    - Nothing is written when validation fails
    """

    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="asha@example.com", password="pass")
        self.client.force_authenticate(self.user)

        Product.objects.create(id="cozycup-premium", name="CozyCup Premium", unit_price=Decimal("2499.00"))

    def assertRejected(self, payload, message):
        response = self.client.post(SUBMIT_URL, payload, format="json")

        self.assertEqual(response.status_code, 400, response.data)
        self.assertEqual(response.data, {"error": message})
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(PointsTransaction.objects.count(), 0)

    # --------------------------------------------------
    # Per-field rules
    # --------------------------------------------------

    def test_customer_name(self):
        for value in ("", " A ", "x" * 101, None):
            with self.subTest(value=value):
                self.assertRejected(_payload(customer_name=value), "Invalid customer name")

    def test_customer_name_is_trimmed(self):
        response = self.client.post(SUBMIT_URL, _payload(customer_name="  Al  "), format="json")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(Order.objects.get().customer_name, "Al")

    def test_email(self):
        for value in ("not-an-email", "a@b", "a b@c.com", "", "x" * 250 + "@a.com"):
            with self.subTest(value=value):
                self.assertRejected(_payload(email=value), "Invalid email address")

    def test_phone(self):
        for value in ("12345", "98765432101", "98765-4321", "abcdefghij", ""):
            with self.subTest(value=value):
                self.assertRejected(_payload(phone=value), "Invalid phone number. Must be 10 digits.")

    def test_address(self):
        for value in ("short", "         x         ", "x" * 501):
            with self.subTest(value=value):
                self.assertRejected(
                    _payload(address=value),
                    "Invalid address. Must be between 10 and 500 characters.",
                )

    def test_products_list(self):
        for value in ([], "cozycup-premium", {"id": "cozycup-premium"}, None):
            with self.subTest(value=value):
                self.assertRejected(_payload(products=value), "Invalid products list")

    def test_missing_products(self):
        payload = _payload()
        del payload["products"]
        self.assertRejected(payload, "Invalid products list")

    def test_product_lines(self):
        bad_lines = [
            [{"id": "cozycup-premium", "quantity": 0}],
            [{"id": "cozycup-premium", "quantity": -1}],
            [{"id": "cozycup-premium", "quantity": 1.5}],
            [{"id": "cozycup-premium", "quantity": "2"}],
            [{"id": "cozycup-premium"}],
            [{"quantity": 1}],
            [{"id": "cozycup-premium", "quantity": 1}, "oops"],
        ]
        for lines in bad_lines:
            with self.subTest(lines=lines):
                self.assertRejected(_payload(products=lines), "Invalid product data")

    def test_quantity_upper_bound(self):
        for quantity in (1001, 10**12):
            with self.subTest(quantity=quantity):
                self.assertRejected(
                    _payload(products=[{"id": "cozycup-premium", "quantity": quantity}]),
                    "Invalid product data",
                )

    def test_quantity_at_bound_is_accepted(self):
        response = self.client.post(
            SUBMIT_URL,
            _payload(products=[{"id": "cozycup-premium", "quantity": 1000}]),
            format="json",
        )

        self.assertEqual(response.status_code, 200, response.data)
        self.assertEqual(Order.objects.get().subtotal_amount, Decimal("2499000.00"))

    def test_total_beyond_storable_amount(self):
        Product.objects.create(id="gold-kettle", name="Gold Kettle", unit_price=Decimal("99999999.99"))

        self.assertRejected(
            _payload(products=[{"id": "gold-kettle", "quantity": 200}]),
            "Order total exceeds the maximum allowed",
        )

    def test_points_to_redeem(self):
        for value in (-100, 1.5, "100", True):
            with self.subTest(value=value):
                self.assertRejected(_payload(points_to_redeem=value), "Invalid points to redeem")

    def test_payment_details(self):
        self.assertRejected(_payload(transaction_id="T" * 101), "Invalid payment details")
        self.assertRejected(_payload(screenshot_path="p" * 501), "Invalid payment details")

    # --------------------------------------------------
    # Ordering
    # --------------------------------------------------

    def test_first_failing_field_wins(self):
        self.assertRejected(
            _payload(customer_name="", email="bad", phone="1", products=[]),
            "Invalid customer name",
        )
        self.assertRejected(
            _payload(email="bad", phone="1", products=[]),
            "Invalid email address",
        )
        self.assertRejected(
            _payload(phone="1", address="short", products=[]),
            "Invalid phone number. Must be 10 digits.",
        )
        self.assertRejected(
            _payload(products=[], points_to_redeem=-1),
            "Invalid products list",
        )

    def test_field_validation_precedes_catalog_lookup(self):
        self.assertRejected(
            _payload(phone="1", products=[{"id": "ghost-mug", "quantity": 1}]),
            "Invalid phone number. Must be 10 digits.",
        )

    def test_non_object_body(self):
        response = self.client.post(SUBMIT_URL, [1, 2, 3], format="json")

        self.assertEqual(response.status_code, 400)
        self.assertIn("error", response.data)
        self.assertEqual(Order.objects.count(), 0)
