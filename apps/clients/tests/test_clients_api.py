"""API tests for client management, exports and erasure."""

from __future__ import annotations

import csv
from datetime import timedelta
from io import StringIO

from django.db import connection
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.clients.models import Client
from apps.rooms.models import Room
from apps.users.models import User


class ClientAPITestCase(APITestCase):
    def setUp(self) -> None:
        self.viewer = User.objects.create_user(email="desk@heiwa.house", password="ViewerPass123")
        self.admin = User.objects.create_user(
            email="admin@heiwa.house",
            password="AdminPass123",
            role=User.Role.ADMIN,
        )
        self.room = Room.objects.create(name="Garden Double", capacity=2)
        self.ana = Client.objects.create(
            first_name="Ana",
            last_name="Silva",
            email="ana@example.com",
            phone="+351 912 000 000",
            medical_conditions="Asthma",
        )
        self.rui = Client.objects.create(first_name="Rui", last_name="Costa", email="rui@example.com")
        self.list_url = reverse("client-list")

    def _booking(self, client: Client, check_in, check_out, **extra) -> Booking:
        booking = Booking.objects.create(
            booking_type=Booking.BookingType.ROOM,
            room=self.room,
            check_in=check_in,
            check_out=check_out,
            **extra,
        )
        booking.clients.add(client)
        return booking


class ClientListTests(ClientAPITestCase):
    def test_requires_staff(self) -> None:
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_search_by_name_and_email(self) -> None:
        self.client.force_authenticate(self.viewer)

        response = self.client.get(self.list_url, {"search": "silva"})
        self.assertEqual([item["email"] for item in response.data], ["ana@example.com"])

        response = self.client.get(self.list_url, {"search": "rui@"})
        self.assertEqual([item["full_name"] for item in response.data], ["Rui Costa"])

    def test_booking_count_is_annotated(self) -> None:
        today = timezone.localdate()
        self._booking(self.ana, today + timedelta(days=10), today + timedelta(days=12))
        self.client.force_authenticate(self.viewer)

        response = self.client.get(reverse("client-detail", args=[self.ana.id]))

        self.assertEqual(response.data["booking_count"], 1)
        self.assertEqual(response.data["medical_conditions"], "Asthma")

    def test_medical_conditions_are_encrypted_at_rest(self) -> None:
        with connection.cursor() as cursor:
            cursor.execute("SELECT medical_conditions FROM clients_client WHERE id = %s", [self.ana.id])
            stored = cursor.fetchone()[0]

        self.assertNotIn("Asthma", stored)
        self.assertEqual(Client.objects.get(pk=self.ana.pk).medical_conditions, "Asthma")

    def test_viewer_cannot_create(self) -> None:
        self.client.force_authenticate(self.viewer)

        response = self.client.post(
            self.list_url,
            {"first_name": "Joao", "last_name": "Reis", "email": "joao@example.com"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_email_is_normalised_and_unique(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            self.list_url,
            {"first_name": "Joao", "last_name": "Reis", "email": "  Joao@Example.com "},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["email"], "joao@example.com")

        response = self.client.post(
            self.list_url,
            {"first_name": "Ana", "last_name": "Again", "email": "ANA@example.com"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["email"], ["A client with this email already exists."])


class ClientExportTests(ClientAPITestCase):
    def test_csv_export(self) -> None:
        self.client.force_authenticate(self.viewer)

        response = self.client.get(reverse("client-export"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("attachment; filename=\"clients-", response["Content-Disposition"])
        rows = list(csv.reader(StringIO(response.content.decode("utf-8"))))
        self.assertEqual(rows[0][:4], ["ID", "First name", "Last name", "Email"])
        self.assertEqual(sorted(row[3] for row in rows[1:]), ["ana@example.com", "rui@example.com"])
        self.assertNotIn("Asthma", response.content.decode("utf-8"))

    def test_csv_export_honours_search(self) -> None:
        self.client.force_authenticate(self.viewer)

        response = self.client.get(reverse("client-export"), {"search": "costa"})

        rows = list(csv.reader(StringIO(response.content.decode("utf-8"))))
        self.assertEqual(len(rows), 2)
        self.assertEqual(rows[1][1], "Rui")

    def test_gdpr_export_includes_bookings(self) -> None:
        today = timezone.localdate()
        booking = self._booking(self.ana, today - timedelta(days=30), today - timedelta(days=27))
        self.client.force_authenticate(self.viewer)

        response = self.client.get(reverse("client-gdpr-export", args=[self.ana.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["client"]["email"], "ana@example.com")
        self.assertEqual(response.data["client"]["medical_conditions"], "Asthma")
        self.assertEqual(len(response.data["bookings"]), 1)
        self.assertEqual(response.data["bookings"][0]["booking_code"], booking.booking_code)
        self.assertEqual(response.data["bookings"][0]["room"], "Garden Double")
        self.assertIn("exported_at", response.data)


class ClientEraseTests(ClientAPITestCase):
    def test_viewer_cannot_erase(self) -> None:
        self.client.force_authenticate(self.viewer)

        response = self.client.post(reverse("client-erase", args=[self.ana.id]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_erase_refused_with_upcoming_booking(self) -> None:
        today = timezone.localdate()
        self._booking(self.ana, today + timedelta(days=5), today + timedelta(days=8))
        self.client.force_authenticate(self.admin)

        response = self.client.post(reverse("client-erase", args=[self.ana.id]))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Client has upcoming bookings and cannot be erased yet.")

    def test_erase_anonymises_and_keeps_history(self) -> None:
        today = timezone.localdate()
        booking = self._booking(self.ana, today - timedelta(days=30), today - timedelta(days=27))
        self._booking(
            self.ana,
            today + timedelta(days=5),
            today + timedelta(days=8),
            status=Booking.Status.CANCELLED,
        )
        self.client.force_authenticate(self.admin)

        response = self.client.post(reverse("client-erase", args=[self.ana.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data, {"id": self.ana.id, "is_anonymized": True})
        self.ana.refresh_from_db()
        self.assertEqual(self.ana.full_name, "Erased Client")
        self.assertEqual(self.ana.email, f"erased-{self.ana.id}@anonymized.invalid")
        self.assertEqual(self.ana.medical_conditions, "")
        self.assertTrue(booking.clients.filter(pk=self.ana.pk).exists())

        response = self.client.post(reverse("client-erase", args=[self.ana.id]))
        self.assertEqual(response.data["detail"], "Client has already been erased.")

    def test_erased_client_cannot_be_edited(self) -> None:
        self.rui.anonymize()
        self.client.force_authenticate(self.admin)

        response = self.client.patch(
            reverse("client-detail", args=[self.rui.id]),
            {"first_name": "Rui"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
