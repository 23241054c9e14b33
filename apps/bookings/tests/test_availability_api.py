"""API tests for the public availability endpoints."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.core.cache import cache
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.rooms.models import Room


class RoomAvailabilityAPITests(APITestCase):
    def setUp(self) -> None:
        self.url = reverse("availability")
        self.room = Room.objects.create(
            name="Sea Suite",
            capacity=2,
            price_standard=Decimal("120.00"),
            price_off_season=Decimal("90.00"),
        )

    def test_missing_parameters(self) -> None:
        response = self.client.get(self.url, {"roomId": self.room.id})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data,
            {"success": False, "error": "Missing required parameters: roomId, checkIn, checkOut"},
        )

    def test_check_out_must_follow_check_in(self) -> None:
        response = self.client.get(
            self.url, {"roomId": self.room.id, "checkIn": "2030-07-10", "checkOut": "2030-07-10"}
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Check-out date must be after check-in date")

    def test_unknown_room(self) -> None:
        response = self.client.get(self.url, {"roomId": 999, "checkIn": "2030-07-10", "checkOut": "2030-07-12"})

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "Room not found")

    def test_free_room_in_peak_season(self) -> None:
        response = self.client.get(
            self.url, {"roomId": self.room.id, "checkIn": "2030-07-10", "checkOut": "2030-07-13"}
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["success"])
        data = response.data["data"]
        self.assertTrue(data["available"])
        self.assertTrue(data["isPeakSeason"])
        self.assertEqual(data["nights"], 3)
        self.assertEqual(data["basePrice"], Decimal("120.00"))
        self.assertEqual(data["totalPrice"], Decimal("360.00"))
        self.assertEqual(data["room"]["bookingType"], "whole")
        self.assertEqual(data["conflictingBookings"], [])

    def test_booked_room_reports_conflicts(self) -> None:
        Booking.objects.create(
            booking_type=Booking.BookingType.ROOM,
            room=self.room,
            check_in=date(2030, 7, 11),
            check_out=date(2030, 7, 15),
            status=Booking.Status.CONFIRMED,
        )

        response = self.client.get(
            self.url, {"roomId": self.room.id, "checkIn": "2030-07-10", "checkOut": "2030-07-13"}
        )

        self.assertFalse(response.data["data"]["available"])
        self.assertEqual(len(response.data["data"]["conflictingBookings"]), 1)

    def test_post_rejects_guests_over_capacity(self) -> None:
        response = self.client.post(
            self.url,
            {"roomId": self.room.id, "checkIn": "2030-07-10", "checkOut": "2030-07-12", "guests": 3},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            response.data,
            {"success": True, "data": {"available": False, "message": "Room capacity is 2 guests"}},
        )

    def test_post_requires_guests(self) -> None:
        response = self.client.post(
            self.url,
            {"roomId": self.room.id, "checkIn": "2030-07-10", "checkOut": "2030-07-12"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Missing required fields")

    def test_post_within_capacity_runs_the_check(self) -> None:
        response = self.client.post(
            self.url,
            {"roomId": self.room.id, "checkIn": "2030-01-10", "checkOut": "2030-01-12", "guests": 2},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["data"]["available"])
        self.assertEqual(response.data["data"]["totalPrice"], Decimal("180.00"))


class DateAvailabilityAPITests(APITestCase):
    def setUp(self) -> None:
        cache.clear()
        self.url = reverse("date-availability")
        self.room = Room.objects.create(name="Dorm", capacity=4, booking_type=Room.BookingType.PER_BED)

    def test_missing_parameters(self) -> None:
        response = self.client.get(self.url, {"start_date": "2030-01-10"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Missing required parameters: start_date and end_date")

    def test_reports_each_day_with_meta(self) -> None:
        response = self.client.get(
            self.url, {"start_date": "2030-01-10", "end_date": "2030-01-11", "participants": 2}
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["success"])
        self.assertEqual(len(response.data["data"]["date_availability"]), 2)
        self.assertEqual(response.data["data"]["summary"]["available_dates"], 2)
        self.assertIn("checked_at", response.data["meta"])
        self.assertIn("cache_expires_at", response.data["meta"])

    def test_new_booking_invalidates_cached_answer(self) -> None:
        params = {"start_date": "2030-01-10", "end_date": "2030-01-10", "participants": 1}
        first = self.client.get(self.url, params)
        self.assertEqual(first.data["data"]["date_availability"][0]["booked"], 0)

        cached = self.client.get(self.url, params)
        self.assertEqual(cached.data["meta"]["checked_at"], first.data["meta"]["checked_at"])

        with self.captureOnCommitCallbacks(execute=True):
            Booking.objects.create(
                booking_type=Booking.BookingType.ROOM,
                room=self.room,
                check_in=date(2030, 1, 10),
                check_out=date(2030, 1, 12),
                guests=3,
            )

        fresh = self.client.get(self.url, params)
        self.assertEqual(fresh.data["data"]["date_availability"][0]["booked"], 3)
        self.assertEqual(fresh.data["data"]["date_availability"][0]["remaining"], 1)

    def test_cache_is_dropped_only_after_commit(self) -> None:
        params = {"start_date": "2030-01-10", "end_date": "2030-01-10", "participants": 1}
        first = self.client.get(self.url, params)

        with self.captureOnCommitCallbacks() as callbacks:
            Booking.objects.create(
                booking_type=Booking.BookingType.ROOM,
                room=self.room,
                check_in=date(2030, 1, 10),
                check_out=date(2030, 1, 12),
                guests=3,
            )
            before_commit = self.client.get(self.url, params)

        self.assertEqual(before_commit.data["meta"]["checked_at"], first.data["meta"]["checked_at"])
        self.assertTrue(callbacks)

        for callback in callbacks:
            callback()
        after_commit = self.client.get(self.url, params)
        self.assertEqual(after_commit.data["data"]["date_availability"][0]["booked"], 3)

    def test_end_before_start_is_rejected(self) -> None:
        response = self.client.get(self.url, {"start_date": "2030-01-10", "end_date": "2030-01-09"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data["success"])
