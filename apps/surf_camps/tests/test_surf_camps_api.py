"""API tests for surf camps and participant room assignments."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking, SurfCampAssignment
from apps.clients.models import Client
from apps.rooms.models import Room, RoomBlock
from apps.surf_camps.models import SurfCamp
from apps.users.models import User


class SurfCampAPITests(APITestCase):
    def setUp(self) -> None:
        start = timezone.localdate() + timedelta(days=60)
        self.room = Room.objects.create(name="Camp Dorm", capacity=2)
        self.camp = SurfCamp.objects.create(
            name="Autumn Surf Week",
            start_date=start,
            end_date=start + timedelta(days=7),
            max_participants=6,
            price_per_person=Decimal("450.00"),
            level=SurfCamp.Level.BEGINNER,
            location="Ericeira",
        )
        self.camp.rooms.add(self.room)
        SurfCamp.objects.create(
            name="Old Week",
            start_date=date(2020, 5, 1),
            end_date=date(2020, 5, 8),
            price_per_person=Decimal("400.00"),
            is_active=False,
        )
        self.admin = User.objects.create_user(
            email="admin@heiwa.house",
            password="AdminPass123",
            role=User.Role.ADMIN,
        )
        self.booking = Booking.objects.create(
            booking_type=Booking.BookingType.SURF_WEEK,
            surf_camp=self.camp,
            check_in=self.camp.start_date,
            check_out=self.camp.end_date,
            guests=2,
        )
        self.ana = Client.objects.create(first_name="Ana", last_name="Silva", email="ana@example.com")
        self.rui = Client.objects.create(first_name="Rui", last_name="Costa", email="rui@example.com")
        for client in (self.ana, self.rui):
            SurfCampAssignment.objects.create(booking=self.booking, client=client, surf_camp=self.camp)
        self.assignments_url = reverse("surf-camp-assignments", args=[self.camp.id])

    def test_public_list_shows_active_camps_with_spots(self) -> None:
        response = self.client.get(reverse("surf-camp-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["booked_participants"], 2)
        self.assertEqual(response.data[0]["spots_remaining"], 4)
        self.assertEqual(response.data[0]["nights"], 7)

    def test_filter_by_level_and_location(self) -> None:
        response = self.client.get(reverse("surf-camp-list"), {"level": "advanced"})
        self.assertEqual(response.data, [])

        response = self.client.get(reverse("surf-camp-list"), {"location": "erice"})
        self.assertEqual(len(response.data), 1)

    def test_admin_creates_camp(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("surf-camp-list"),
            {
                "name": "Winter Week",
                "start_date": "2031-01-05",
                "end_date": "2031-01-12",
                "price_per_person": "380.00",
                "group_discount_rate": "0.050",
                "rooms": [self.room.id],
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["rooms"], [self.room.id])

    def test_camp_dates_are_validated(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("surf-camp-list"),
            {"name": "Broken", "start_date": "2031-01-05", "end_date": "2031-01-05", "price_per_person": "1.00"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_assign_participants_to_rooms(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            self.assignments_url,
            {"assignments": [{"room_id": self.room.id, "client_ids": [self.ana.id, self.rui.id]}]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual({item["room_id"] for item in response.data["assignments"]}, {self.room.id})

        response = self.client.get(self.assignments_url)
        self.assertEqual(response.data["spots_remaining"], 4)
        self.assertEqual(len(response.data["assignments"]), 2)

    def test_room_capacity_is_enforced(self) -> None:
        carla = Client.objects.create(first_name="Carla", last_name="Dias", email="carla@example.com")
        SurfCampAssignment.objects.create(booking=self.booking, client=carla, surf_camp=self.camp)
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            self.assignments_url,
            {"assignments": [{"room_id": self.room.id, "client_ids": [self.ana.id, self.rui.id, carla.id]}]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_non_participant_cannot_be_assigned(self) -> None:
        stranger = Client.objects.create(first_name="Zed", last_name="Nobody", email="zed@example.com")
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            self.assignments_url,
            {"assignments": [{"room_id": self.room.id, "client_ids": [stranger.id]}]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], f"Client {stranger.id} is not a participant of this surf camp.")

    def test_placements_can_be_replaced(self) -> None:
        self.client.force_authenticate(self.admin)
        payload = {"assignments": [{"room_id": self.room.id, "client_ids": [self.ana.id, self.rui.id]}]}

        first = self.client.post(self.assignments_url, payload, format="json")
        second = self.client.post(self.assignments_url, payload, format="json")

        self.assertEqual(first.status_code, status.HTTP_200_OK, first.data)
        self.assertEqual(second.status_code, status.HTTP_200_OK, second.data)

    def test_room_held_by_room_booking_is_rejected(self) -> None:
        self.client.force_authenticate(self.admin)
        self.client.post(
            self.assignments_url,
            {"assignments": [{"room_id": self.room.id, "client_ids": [self.ana.id]}]},
            format="json",
        )
        garden = Room.objects.create(name="Garden Double", capacity=2)
        self.camp.rooms.add(garden)
        Booking.objects.create(
            booking_type=Booking.BookingType.ROOM,
            room=garden,
            check_in=self.camp.start_date + timedelta(days=2),
            check_out=self.camp.start_date + timedelta(days=4),
        )

        response = self.client.post(
            self.assignments_url,
            {"assignments": [{"room_id": garden.id, "client_ids": [self.ana.id]}]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Room is not available for the selected dates.")
        placement = SurfCampAssignment.objects.get(booking=self.booking, client=self.ana)
        self.assertEqual(placement.room_id, self.room.id)

    def test_blocked_room_is_rejected(self) -> None:
        RoomBlock.objects.create(
            room=self.room,
            start_date=self.camp.start_date,
            end_date=self.camp.start_date + timedelta(days=1),
        )
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            self.assignments_url,
            {"assignments": [{"room_id": self.room.id, "client_ids": [self.ana.id]}]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Room is blocked for the selected dates.")

    def test_client_listed_twice_in_a_room_is_rejected(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            self.assignments_url,
            {"assignments": [{"room_id": self.room.id, "client_ids": [self.ana.id, self.ana.id]}]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIsNone(SurfCampAssignment.objects.get(booking=self.booking, client=self.ana).room_id)

    def test_assignments_need_staff(self) -> None:
        response = self.client.get(self.assignments_url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
