# orders/tests/test_settlement.py

from decimal import Decimal
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.db import IntegrityError, OperationalError
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from loyalty.models import PointsBalance, PointsTransaction
from loyalty.services.exceptions import InsufficientBalanceError, SettlementError
from orders.models import Order
from orders.services.exceptions import AuthenticationRequiredError, OrderValidationError
from orders.services.settlement import submit_order
from products.models import Product

User = get_user_model()

SUBMIT_URL = "/api/orders/submit/"


def _payload(**overrides):
    payload = {
        "customer_name": "Asha Rao",
        "email": "asha@example.com",
        "phone": "9876543210",
        "address": "12 MG Road, Bengaluru 560001",
        "products": [{"id": "cozycup-premium", "quantity": 2}],
    }
    payload.update(overrides)
    return payload


class SettlementOrchestratorTests(TestCase):
    """
    GUARANTEES:
    - Order + balance + ledger commit together (strict mode)
    - A stale balance read can never overdraw
    - Lenient mode keeps the order when only the ledger fails
    """

    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="asha@example.com", password="pass")
        self.client.force_authenticate(self.user)

        Product.objects.create(id="cozycup-premium", name="CozyCup Premium", unit_price=Decimal("2499.00"))

    def _balance(self) -> int:
        return PointsBalance.objects.get(user=self.user).total_points

    # =====================================================
    # SERVICE LEVEL
    # =====================================================

    def test_service_returns_result(self):
        result = submit_order(user=self.user, payload=_payload())

        self.assertEqual(result.points_earned, 245)
        self.assertEqual(result.points_redeemed, 0)
        self.assertEqual(result.order_id, str(result.order.pk))
        self.assertTrue(result.order.order_no)

    def test_service_requires_authenticated_user(self):
        with self.assertRaises(AuthenticationRequiredError):
            submit_order(user=None, payload=_payload())

    def test_service_reports_first_error(self):
        with self.assertRaises(OrderValidationError) as ctx:
            submit_order(user=self.user, payload=_payload(email="bad", phone="1"))

        self.assertEqual(str(ctx.exception), "Invalid email address")

    # =====================================================
    # CONCURRENT REDEMPTION
    # =====================================================

    def test_stale_balance_read_cannot_overdraw(self):
        """
        Simulates the loser of a race: it previewed against 150 points but a
        concurrent order already spent 100 of them.
        """
        PointsBalance.objects.create(user=self.user, total_points=50)
        stale = PointsBalance(user=self.user, total_points=150)

        with patch("orders.services.settlement.lock_balance", return_value=stale):
            with self.assertRaises(InsufficientBalanceError):
                submit_order(user=self.user, payload=_payload(points_to_redeem=100))

        self.assertEqual(self._balance(), 50)
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(PointsTransaction.objects.count(), 0)

    def test_sequential_redemptions_against_same_balance(self):
        PointsBalance.objects.create(user=self.user, total_points=150)

        first = self.client.post(SUBMIT_URL, _payload(points_to_redeem=100), format="json")
        second = self.client.post(SUBMIT_URL, _payload(points_to_redeem=100), format="json")

        self.assertEqual(first.status_code, 200)
        # 150 - 100 + 245 earned = 295: the second redemption is covered.
        self.assertEqual(second.status_code, 200)
        self.assertEqual(self._balance(), 150 - 100 + 245 - 100 + 245)

    def test_race_loser_gets_400_and_no_order(self):
        PointsBalance.objects.create(user=self.user, total_points=50)
        stale = PointsBalance(user=self.user, total_points=150)

        with patch("orders.services.settlement.lock_balance", return_value=stale):
            response = self.client.post(SUBMIT_URL, _payload(points_to_redeem=100), format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data, {"error": "Insufficient points available"})
        self.assertEqual(Order.objects.count(), 0)

    # =====================================================
    # FAILURE MODES
    # =====================================================

    def test_strict_mode_rolls_back_order_on_settlement_failure(self):
        with patch("orders.services.settlement.settle", side_effect=SettlementError("boom")):
            response = self.client.post(SUBMIT_URL, _payload(), format="json")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data, {"error": "Failed to create order"})
        self.assertEqual(Order.objects.count(), 0)

    @override_settings(LOYALTY_STRICT_SETTLEMENT=False)
    def test_lenient_mode_keeps_order_on_settlement_failure(self):
        with patch("orders.services.settlement.settle", side_effect=SettlementError("boom")):
            response = self.client.post(SUBMIT_URL, _payload(), format="json")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(Order.objects.count(), 1)
        self.assertEqual(PointsTransaction.objects.count(), 0)

    @override_settings(LOYALTY_STRICT_SETTLEMENT=False)
    def test_lenient_mode_still_rejects_overdraw(self):
        PointsBalance.objects.create(user=self.user, total_points=50)
        stale = PointsBalance(user=self.user, total_points=150)

        with patch("orders.services.settlement.lock_balance", return_value=stale):
            response = self.client.post(SUBMIT_URL, _payload(points_to_redeem=100), format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(self._balance(), 50)

    def test_lock_conflict_is_reported_as_retryable(self):
        with patch(
            "orders.services.settlement.settle",
            side_effect=OperationalError("could not serialize access"),
        ):
            response = self.client.post(SUBMIT_URL, _payload(), format="json")

        self.assertEqual(response.status_code, 503)
        self.assertIn("error", response.data)
        self.assertEqual(Order.objects.count(), 0)

    def test_order_insert_failure(self):
        with patch.object(Order.objects, "create", side_effect=IntegrityError("duplicate")):
            response = self.client.post(SUBMIT_URL, _payload(), format="json")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data, {"error": "Failed to create order"})
        self.assertFalse(PointsTransaction.objects.exists())

    def test_unexpected_error_is_masked(self):
        with patch("orders.services.settlement.resolve_cart", side_effect=RuntimeError("kaboom")):
            response = self.client.post(SUBMIT_URL, _payload(), format="json")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data, {"error": "Internal server error"})
        self.assertEqual(Order.objects.count(), 0)
