"""API tests for staff authentication and account management."""

from __future__ import annotations

from datetime import timedelta

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


class AuthAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(
            email="admin@heiwa.house",
            password="CorrectPassword1",
            role=User.Role.ADMIN,
        )

    def test_login_returns_tokens(self) -> None:
        response = self.client.post(
            reverse("auth:login"),
            {"email": "admin@heiwa.house", "password": "CorrectPassword1"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIn("access", response.data["tokens"])
        self.assertIn("refresh", response.data["tokens"])
        self.assertEqual(response.data["user"]["role"], "admin")

    def test_login_limited_attempts(self) -> None:
        url = reverse("auth:login")
        wrong_payload = {"email": self.user.email, "password": "wrong"}
        for _ in range(5):
            response = self.client.post(url, wrong_payload, format="json")

        self.user.refresh_from_db()
        self.assertTrue(self.user.is_locked)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        locked_response = self.client.post(
            url, {"email": self.user.email, "password": "CorrectPassword1"}, format="json"
        )
        self.assertEqual(locked_response.status_code, status.HTTP_400_BAD_REQUEST)

        # After lock expires user can login again
        self.user.locked_until = timezone.now() - timedelta(minutes=1)
        self.user.save(update_fields=["locked_until"])
        response = self.client.post(url, {"email": self.user.email, "password": "CorrectPassword1"})
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

    def test_me_requires_authentication(self) -> None:
        response = self.client.get(reverse("auth:me"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

        self.client.force_authenticate(self.user)
        response = self.client.get(reverse("auth:me"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["email"], self.user.email)


class RoleHierarchyTests(APITestCase):
    def test_roles_are_ordered(self) -> None:
        viewer = User.objects.create_user(email="viewer@heiwa.house", password="x" * 10)
        superadmin = User.objects.create_user(
            email="boss@heiwa.house", password="x" * 10, role=User.Role.SUPERADMIN
        )
        self.assertFalse(viewer.is_admin_role())
        self.assertTrue(superadmin.is_admin_role())
        self.assertTrue(superadmin.is_superadmin())

    def test_only_superadmin_manages_staff(self) -> None:
        admin = User.objects.create_user(email="admin@heiwa.house", password="x" * 10, role=User.Role.ADMIN)
        superadmin = User.objects.create_user(
            email="boss@heiwa.house", password="x" * 10, role=User.Role.SUPERADMIN
        )
        payload = {"email": "new@heiwa.house", "password": "SurfTheWave42", "role": "viewer"}

        self.client.force_authenticate(admin)
        response = self.client.post(reverse("user-list"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(superadmin)
        response = self.client.post(reverse("user-list"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        created = User.objects.get(email="new@heiwa.house")
        self.assertTrue(created.check_password("SurfTheWave42"))

        response = self.client.delete(reverse("user-detail", args=[created.id]))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        created.refresh_from_db()
        self.assertFalse(created.is_active)
