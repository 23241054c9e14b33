"""Tests for the API key protected WordPress plugin endpoints."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.core.cache import cache
from django.test import override_settings
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking, SurfCampAssignment
from apps.bookings.pricing import quote_surf_week
from apps.clients.models import Client
from apps.rooms.models import Room
from apps.surf_camps.models import SurfCamp

API_KEY = "test-wordpress-key"


class WordPressAPITestCase(APITestCase):
    def setUp(self) -> None:
        self.today = timezone.localdate()
        self.room = Room.objects.create(
            name="Ocean View",
            capacity=2,
            price_standard=Decimal("100.00"),
            price_off_season=Decimal("80.00"),
        )
        Room.objects.create(name="Closed Room", capacity=2, is_active=False)
        self.camp = SurfCamp.objects.create(
            name="Spring Surf Week",
            start_date=self.today + timedelta(days=40),
            end_date=self.today + timedelta(days=47),
            max_participants=8,
            price_per_person=Decimal("450.00"),
            level=SurfCamp.Level.INTERMEDIATE,
            location="Ericeira",
        )
        self.full_camp = SurfCamp.objects.create(
            name="Tiny Week",
            start_date=self.today + timedelta(days=50),
            end_date=self.today + timedelta(days=57),
            max_participants=1,
            price_per_person=Decimal("450.00"),
        )
        self.client.credentials(HTTP_X_HEIWA_API_KEY=API_KEY)


class WordPressAuthTests(WordPressAPITestCase):
    def test_missing_key_is_rejected(self) -> None:
        self.client.credentials()

        response = self.client.get(reverse("wordpress:rooms"))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data["success"])
        self.assertEqual(response.data["error"], "Unauthorized")

    def test_wrong_key_is_rejected(self) -> None:
        self.client.credentials(HTTP_X_HEIWA_API_KEY="guess")

        response = self.client.get(reverse("wordpress:surf-camps"))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    @override_settings(WORDPRESS_API_KEY="")
    def test_unconfigured_key_rejects_everything(self) -> None:
        response = self.client.get(reverse("wordpress:rooms"))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class WordPressCatalogueTests(WordPressAPITestCase):
    def test_rooms_carry_meta(self) -> None:
        response = self.client.get(reverse("wordpress:rooms"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["success"])
        self.assertEqual([room["name"] for room in response.data["data"]], ["Ocean View"])
        self.assertEqual(response.data["meta"]["source"], "rooms")
        self.assertEqual(response.data["meta"]["api_version"], "1.0")

    def test_surf_camps_skip_full_weeks(self) -> None:
        booking = Booking.objects.create(
            booking_type=Booking.BookingType.SURF_WEEK,
            surf_camp=self.full_camp,
            check_in=self.full_camp.start_date,
            check_out=self.full_camp.end_date,
        )
        mia = Client.objects.create(first_name="Mia", last_name="Lopes", email="mia@example.com")
        SurfCampAssignment.objects.create(booking=booking, client=mia, surf_camp=self.full_camp)

        response = self.client.get(reverse("wordpress:surf-camps"))

        self.assertEqual([camp["name"] for camp in response.data["data"]], ["Spring Surf Week"])

    def test_surf_camps_filter_by_level(self) -> None:
        response = self.client.get(reverse("wordpress:surf-camps"), {"level": "advanced"})

        self.assertEqual(response.data["data"], [])

    def test_room_availability(self) -> None:
        response = self.client.get(
            reverse("wordpress:rooms-availability"),
            {
                "start_date": (self.today + timedelta(days=10)).isoformat(),
                "end_date": (self.today + timedelta(days=12)).isoformat(),
                "guests": 2,
            },
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["total_rooms"], 1)
        self.assertEqual(len(response.data["data"]["available_rooms"]), 1)
        self.assertEqual(response.data["meta"]["source"], "rooms_availability")

    def test_room_availability_rejects_bad_range(self) -> None:
        response = self.client.get(
            reverse("wordpress:rooms-availability"),
            {"start_date": "2031-03-10", "end_date": "2031-03-09"},
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data["success"])
        self.assertEqual(response.data["error"], "end_date must be after start_date.")


class WordPressBookingTests(WordPressAPITestCase):
    def test_booking_is_tagged_with_wordpress_source(self) -> None:
        response = self.client.post(
            reverse("wordpress:bookings"),
            {
                "booking_type": "room",
                "room_id": self.room.id,
                "start_date": (self.today + timedelta(days=20)).isoformat(),
                "end_date": (self.today + timedelta(days=22)).isoformat(),
                "participants": [{"firstName": "Lea", "lastName": "Mar", "email": "lea@example.com"}],
                "source_url": "https://heiwahouse.com/rooms/ocean-view",
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["data"]["source"], Booking.Source.WORDPRESS)
        self.assertEqual(response.data["meta"]["source"], "bookings")
        booking = Booking.objects.get(pk=response.data["data"]["id"])
        self.assertEqual(booking.source_url, "https://heiwahouse.com/rooms/ocean-view")

    def test_invalid_booking_answers_with_envelope(self) -> None:
        response = self.client.post(
            reverse("wordpress:bookings"),
            {"booking_type": "surf_week", "participants": []},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data["success"])
        self.assertIn("details", response.data)
        self.assertIn("meta", response.data)


class WordPressAvailabilityTests(WordPressAPITestCase):
    def setUp(self) -> None:
        super().setUp()
        cache.clear()
        self.camp_params = {
            "camp_id": self.camp.id,
            "start_date": self.camp.start_date.isoformat(),
            "end_date": self.camp.end_date.isoformat(),
        }

    def test_camp_availability_with_pricing(self) -> None:
        response = self.client.get(reverse("wordpress:availability"), {**self.camp_params, "participants": 2})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["available"])
        data = response.data["data"]
        self.assertEqual(data["camp_info"]["name"], "Spring Surf Week")
        self.assertEqual(data["availability"]["available_spots"], 8)
        self.assertTrue(data["availability"]["can_accommodate"])
        self.assertEqual(data["pricing"], quote_surf_week(self.camp, 2).as_dict())
        self.assertEqual(response.data["meta"]["source"], "availability")

    def test_camp_cannot_take_more_than_its_spots(self) -> None:
        response = self.client.get(reverse("wordpress:availability"), {**self.camp_params, "participants": 9})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["available"])
        self.assertFalse(response.data["data"]["availability"]["can_accommodate"])

    def test_dates_outside_the_camp(self) -> None:
        params = {**self.camp_params, "end_date": (self.camp.end_date + timedelta(days=2)).isoformat()}

        response = self.client.get(reverse("wordpress:availability"), params)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["success"])
        self.assertFalse(response.data["available"])
        self.assertEqual(response.data["data"]["reason"], "Requested dates are outside camp duration")
        self.assertEqual(response.data["data"]["camp_dates"]["start_date"], self.camp.start_date.isoformat())

    def test_camp_availability_requires_parameters(self) -> None:
        response = self.client.get(reverse("wordpress:availability"), {"camp_id": self.camp.id})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Missing required parameters: camp_id, start_date and end_date")

    def test_inactive_camp_is_not_found(self) -> None:
        self.camp.is_active = False
        self.camp.save()

        response = self.client.get(reverse("wordpress:availability"), self.camp_params)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "Camp not found")

    def test_dates_availability_merges_cache_meta(self) -> None:
        response = self.client.get(
            reverse("wordpress:dates-availability"),
            {"start_date": "2031-01-10", "end_date": "2031-01-12", "participants": 2},
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["data"]["date_availability"]), 3)
        self.assertEqual(response.data["meta"]["source"], "dates_availability")
        self.assertIn("checked_at", response.data["meta"])

    def test_dates_availability_requires_both_dates(self) -> None:
        response = self.client.get(reverse("wordpress:dates-availability"), {"start_date": "2031-01-10"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Missing required parameters: start_date and end_date")
