from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase
from rest_framework.test import APIRequestFactory

from users.permissions import IsAdmin, IsAdminOrReadOnly

User = get_user_model()


class PermissionRoleTests(TestCase):
    """
    Tests for role-based permissions.

    GUARANTEES:
    - Correct role access
    - No privilege escalation
    - Anonymous users denied writes everywhere
    """

    def setUp(self):
        self.factory = APIRequestFactory()

        self.admin = User.objects.create_user(email="admin@example.com", password="pass", role="admin")
        self.customer = User.objects.create_user(email="shopper@example.com", password="pass")

    def _request(self, method="get", user=None):
        request = getattr(self.factory, method)("/")
        request.user = user or AnonymousUser()
        return request

    def test_admin_permission(self):
        self.assertTrue(IsAdmin().has_permission(self._request(user=self.admin), None))
        self.assertFalse(IsAdmin().has_permission(self._request(user=self.customer), None))
        self.assertFalse(IsAdmin().has_permission(self._request(), None))

    def test_read_only_for_everyone(self):
        perm = IsAdminOrReadOnly()
        self.assertTrue(perm.has_permission(self._request(), None))
        self.assertTrue(perm.has_permission(self._request(user=self.customer), None))

    def test_writes_for_admin_only(self):
        perm = IsAdminOrReadOnly()
        self.assertTrue(perm.has_permission(self._request("post", self.admin), None))
        self.assertFalse(perm.has_permission(self._request("post", self.customer), None))
        self.assertFalse(perm.has_permission(self._request("post"), None))
