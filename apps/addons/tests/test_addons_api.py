"""API tests for the add-on catalogue."""

from __future__ import annotations

from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.addons.models import AddOn
from apps.users.models import User


class AddOnAPITests(APITestCase):
    def setUp(self) -> None:
        AddOn.objects.create(name="Wetsuit", price=Decimal("8.00"), category=AddOn.Category.EQUIPMENT)
        AddOn.objects.create(name="Airport transfer", price=Decimal("40.00"), category=AddOn.Category.TRANSPORT)
        AddOn.objects.create(name="Breakfast", price=Decimal("10.00"), category=AddOn.Category.FOOD)
        AddOn.objects.create(name="Board", price=Decimal("15.00"), category=AddOn.Category.EQUIPMENT)
        AddOn.objects.create(name="Retired", price=Decimal("1.00"), is_active=False)
        self.list_url = reverse("add-on-list")

    def test_public_list_is_ordered_by_category_then_name(self) -> None:
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [item["name"] for item in response.data],
            ["Board", "Wetsuit", "Breakfast", "Airport transfer"],
        )

    def test_filter_by_category(self) -> None:
        response = self.client.get(self.list_url, {"category": "food"})

        self.assertEqual([item["name"] for item in response.data], ["Breakfast"])

    def test_only_admins_write(self) -> None:
        payload = {"name": "Yoga", "price": "12.00", "category": "service", "max_quantity": 5}

        response = self.client.post(self.list_url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

        admin = User.objects.create_user(email="admin@heiwa.house", password="AdminPass123", role=User.Role.ADMIN)
        self.client.force_authenticate(admin)
        response = self.client.post(self.list_url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["max_quantity"], 5)
