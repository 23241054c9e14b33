"""API tests for the activity catalogue."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.activities.models import Activity
from apps.users.models import User


class ActivityAPITests(APITestCase):
    def setUp(self) -> None:
        Activity.objects.create(title="Surf lessons", category=Activity.Category.SURF, display_order=1)
        Activity.objects.create(title="Yoga", category=Activity.Category.FLOW, display_order=2)
        Activity.objects.create(
            title="Breathwork",
            category=Activity.Category.FLOW,
            display_order=2,
            availability_tier=Activity.AvailabilityTier.ON_REQUEST,
        )
        Activity.objects.create(title="Skate ramp", category=Activity.Category.PLAY, display_order=0)
        Activity.objects.create(title="Old tour", category=Activity.Category.PLAY, is_active=False)
        self.list_url = reverse("activity-list")
        self.admin = User.objects.create_user(
            email="admin@heiwa.house",
            password="AdminPass123",
            role=User.Role.ADMIN,
        )

    def test_public_list_is_ordered_and_hides_inactive(self) -> None:
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [item["title"] for item in response.data],
            ["Skate ramp", "Surf lessons", "Breathwork", "Yoga"],
        )

    def test_filter_by_category_and_tier(self) -> None:
        response = self.client.get(self.list_url, {"category": "flow", "tier": "on_request"})

        self.assertEqual([item["title"] for item in response.data], ["Breathwork"])

    def test_staff_can_list_inactive(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(self.list_url, {"is_active": "false"})

        self.assertEqual([item["title"] for item in response.data], ["Old tour"])

    def test_only_admins_write(self) -> None:
        payload = {"title": "Sunset hike", "category": "play", "features": ["Guide", "Snacks"]}

        response = self.client.post(self.list_url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

        self.client.force_authenticate(self.admin)
        response = self.client.post(self.list_url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["features"], ["Guide", "Snacks"])
        self.assertEqual(response.data["availability_tier"], "always")

    def test_title_and_category_are_required(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(self.list_url, {"description": "No name"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("title", response.data)
        self.assertIn("category", response.data)

    def test_features_must_be_strings(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            self.list_url,
            {"title": "Pool", "category": "play", "features": [1, 2]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("features", response.data)
