# users/tests/test_auth.py

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from loyalty.models import PointsBalance

User = get_user_model()


class RegisterAndTokenTests(TestCase):
    """
    GUARANTEES:
    - Self-service signup always creates customers
    - Emails are case-insensitive identities
    - JWT is issued for valid credentials only
    """

    def setUp(self):
        self.client = APIClient()

    def test_register_creates_customer(self):
        response = self.client.post(
            "/api/auth/register/",
            {"email": "New.Shopper@Example.com", "password": "CozyCup#2024", "role": "admin"},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        user = User.objects.get(id=response.data["user_id"])
        self.assertEqual(user.email, "new.shopper@example.com")
        self.assertEqual(user.role, "customer")
        self.assertFalse(user.is_admin)

    def test_register_rejects_duplicate_email(self):
        User.objects.create_user(email="shopper@example.com", password="pass")

        response = self.client.post(
            "/api/auth/register/",
            {"email": "SHOPPER@example.com", "password": "CozyCup#2024"},
            format="json",
        )
        self.assertEqual(response.status_code, 400)

    def test_jwt_create_and_use(self):
        User.objects.create_user(email="shopper@example.com", password="CozyCup#2024")

        response = self.client.post(
            "/api/auth/jwt/create/",
            {"email": "shopper@example.com", "password": "CozyCup#2024"},
            format="json",
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn("access", response.data)
        self.assertIn("refresh", response.data)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        me = self.client.get("/api/auth/me/")
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.data["email"], "shopper@example.com")

    def test_jwt_rejects_bad_password(self):
        User.objects.create_user(email="shopper@example.com", password="CozyCup#2024")

        response = self.client.post(
            "/api/auth/jwt/create/",
            {"email": "shopper@example.com", "password": "wrong"},
            format="json",
        )
        self.assertEqual(response.status_code, 401)


class MeViewTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(
            email="shopper@example.com",
            password="pass",
            first_name="Asha",
        )

    def test_me_requires_auth(self):
        response = self.client.get("/api/auth/me/")
        self.assertEqual(response.status_code, 401)

    def test_me_includes_points_summary(self):
        PointsBalance.objects.create(user=self.user, total_points=620)
        self.client.force_authenticate(self.user)

        response = self.client.get("/api/auth/me/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["first_name"], "Asha")
        self.assertEqual(response.data["role"], "customer")
        self.assertEqual(response.data["points"]["total_points"], 620)
        self.assertEqual(response.data["points"]["tier"], "Silver")
        self.assertEqual(response.data["points"]["points_to_next_tier"], 380)


class UserManagerTests(TestCase):
    def test_email_required(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email="  ", password="pass")

    def test_superuser_is_admin(self):
        user = User.objects.create_superuser(email="root@example.com", password="pass")

        self.assertTrue(user.is_admin)
        self.assertTrue(user.is_staff)
        self.assertTrue(user.is_superuser)
