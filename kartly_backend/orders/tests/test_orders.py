# orders/tests/test_orders.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase
from rest_framework.test import APIClient

from orders.models import Order
from orders.services.order_lifecycle import (
    InvalidOrderTransitionError,
    validate_transition,
)

User = get_user_model()


def _make_order(user, **overrides):
    fields = {
        "user": user,
        "customer_name": "Asha Rao",
        "email": "asha@example.com",
        "phone": "9876543210",
        "address": "12 MG Road, Bengaluru 560001",
        "products": [
            {
                "id": "cozycup-premium",
                "name": "CozyCup Premium",
                "price": "2499.00",
                "quantity": 1,
                "line_total": "2499.00",
            }
        ],
        "subtotal_amount": Decimal("2499.00"),
        "total_amount": Decimal("2499.00"),
        "points_earned": 120,
    }
    fields.update(overrides)
    return Order.objects.create(**fields)


class OrderModelTests(TestCase):
    """
    Tests for Order lifecycle and immutability.

    GUARANTEES:
    - Order totals are preserved after creation
    - Status transitions obey domain rules
    - Illegal transitions are blocked
    """

    def setUp(self):
        self.user = User.objects.create_user(email="asha@example.com", password="pass")
        self.order = _make_order(self.user)

    # =====================================================
    # CREATION / IMMUTABILITY
    # =====================================================

    def test_order_number_is_generated(self):
        self.assertTrue(self.order.order_no.startswith("ORD"))
        other = _make_order(self.user)
        self.assertNotEqual(self.order.order_no, other.order_no)

    def test_new_order_is_pending_verification(self):
        self.assertEqual(self.order.status, Order.STATUS_PENDING_VERIFICATION)

    def test_order_totals_are_immutable(self):
        self.order.total_amount = Decimal("1.00")

        with self.assertRaises(ValidationError):
            self.order.save()

        refreshed = Order.objects.get(id=self.order.id)
        self.assertEqual(refreshed.total_amount, Decimal("2499.00"))

    def test_status_can_be_updated(self):
        self.order.status = Order.STATUS_VERIFIED
        self.order.admin_notes = "Payment matched bank statement"
        self.order.save()

        refreshed = Order.objects.get(id=self.order.id)
        self.assertEqual(refreshed.status, Order.STATUS_VERIFIED)

    # =====================================================
    # LIFECYCLE TRANSITION TESTS
    # =====================================================

    def test_pending_order_can_be_verified_or_rejected(self):
        for target in (Order.STATUS_VERIFIED, Order.STATUS_REJECTED):
            with self.subTest(target=target):
                try:
                    validate_transition(order=self.order, target_status=target)
                except InvalidOrderTransitionError:
                    self.fail("Valid transition raised InvalidOrderTransitionError")

    def test_pending_order_cannot_skip_to_shipped(self):
        with self.assertRaises(InvalidOrderTransitionError):
            validate_transition(order=self.order, target_status=Order.STATUS_SHIPPED)

    def test_completed_and_rejected_are_terminal(self):
        for terminal in (Order.STATUS_COMPLETED, Order.STATUS_REJECTED):
            with self.subTest(terminal=terminal):
                self.order.status = terminal
                with self.assertRaises(InvalidOrderTransitionError):
                    validate_transition(order=self.order, target_status=Order.STATUS_VERIFIED)


class CustomerOrderApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="asha@example.com", password="pass")
        self.other = User.objects.create_user(email="ravi@example.com", password="pass")

        self.mine = _make_order(self.user)
        self.theirs = _make_order(self.other, email="ravi@example.com")

        self.client.force_authenticate(self.user)

    def test_list_is_scoped_to_caller(self):
        response = self.client.get("/api/orders/")

        self.assertEqual(response.status_code, 200)
        ids = [row["id"] for row in response.data["results"]]
        self.assertEqual(ids, [str(self.mine.id)])

    def test_cannot_read_other_customers_order(self):
        response = self.client.get(f"/api/orders/{self.theirs.id}/")
        self.assertEqual(response.status_code, 404)

    def test_customer_cannot_use_admin_review(self):
        response = self.client.get("/api/orders/admin/")
        self.assertEqual(response.status_code, 403)


class AdminOrderReviewTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(email="admin@example.com", password="pass", role="admin")
        self.customer = User.objects.create_user(email="asha@example.com", password="pass")

        self.order = _make_order(self.customer)
        self.client.force_authenticate(self.admin)

    def _url(self):
        return f"/api/orders/admin/{self.order.id}/"

    def test_admin_lists_and_filters_by_status(self):
        _make_order(self.customer, status=Order.STATUS_REJECTED)

        response = self.client.get("/api/orders/admin/", {"status": Order.STATUS_PENDING_VERIFICATION})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["results"][0]["id"], str(self.order.id))

    def test_admin_search(self):
        response = self.client.get("/api/orders/admin/", {"search": self.order.order_no})
        self.assertEqual(response.data["count"], 1)

    def test_admin_verifies_order(self):
        response = self.client.patch(
            self._url(),
            {"status": Order.STATUS_VERIFIED, "admin_notes": "UPI ref matched"},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.STATUS_VERIFIED)
        self.assertEqual(self.order.admin_notes, "UPI ref matched")

    def test_admin_cannot_make_illegal_transition(self):
        response = self.client.patch(self._url(), {"status": Order.STATUS_COMPLETED}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.data["status"],
            [
                f"Order {self.order.order_no} cannot transition from "
                f"'{Order.STATUS_PENDING_VERIFICATION}' to '{Order.STATUS_COMPLETED}'"
            ],
        )
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.STATUS_PENDING_VERIFICATION)

    def test_terminal_order_rejects_review_transition(self):
        self.order = _make_order(self.customer, status=Order.STATUS_REJECTED)

        response = self.client.patch(self._url(), {"status": Order.STATUS_VERIFIED}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertIn("cannot transition", str(response.data["status"][0]))
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.STATUS_REJECTED)

    def test_review_ignores_money_fields(self):
        response = self.client.patch(self._url(), {"total_amount": "1.00"}, format="json")

        self.assertEqual(response.status_code, 200)
        self.order.refresh_from_db()
        self.assertEqual(self.order.total_amount, Decimal("2499.00"))

    def test_orders_cannot_be_deleted(self):
        response = self.client.delete(self._url())
        self.assertEqual(response.status_code, 405)
