"""Tests for periodic booking tasks."""

from __future__ import annotations

from datetime import date, timedelta

from django.core import mail
from django.test import TestCase
from django.utils import timezone

from apps.bookings.models import AssignmentStatus, Booking, RoomAssignment
from apps.bookings.tasks import complete_finished_bookings, expire_pending_bookings, notify_booking_confirmed
from apps.clients.models import Client
from apps.rooms.models import Room


class BookingTaskTests(TestCase):
    def setUp(self) -> None:
        self.room = Room.objects.create(name="Garden Double", capacity=2)
        self.client_profile = Client.objects.create(first_name="Ana", last_name="Silva", email="ana@example.com")

    def _booking(self, check_in: date, check_out: date, **extra) -> Booking:
        booking = Booking.objects.create(
            booking_type=Booking.BookingType.ROOM,
            room=self.room,
            check_in=check_in,
            check_out=check_out,
            **extra,
        )
        booking.clients.add(self.client_profile)
        RoomAssignment.objects.create(
            booking=booking,
            client=self.client_profile,
            room=self.room,
            check_in=check_in,
            check_out=check_out,
        )
        return booking

    def test_expire_pending_bookings(self) -> None:
        start = timezone.localdate() + timedelta(days=30)
        stale = self._booking(start, start + timedelta(days=2), expires_at=timezone.now() - timedelta(minutes=1))
        fresh = self._booking(
            start + timedelta(days=5),
            start + timedelta(days=7),
            expires_at=timezone.now() + timedelta(hours=1),
        )
        paid = self._booking(
            start + timedelta(days=10),
            start + timedelta(days=12),
            expires_at=timezone.now() - timedelta(minutes=1),
            payment_status=Booking.PaymentStatus.PAID,
        )

        with self.captureOnCommitCallbacks(execute=True):
            result = expire_pending_bookings()

        self.assertEqual(result, {"expired": 1})
        stale.refresh_from_db()
        self.assertEqual(stale.status, Booking.Status.EXPIRED)
        self.assertEqual(stale.payment_status, Booking.PaymentStatus.FAILED)
        self.assertEqual(stale.room_assignments.get().status, AssignmentStatus.CANCELLED)
        fresh.refresh_from_db()
        self.assertEqual(fresh.status, Booking.Status.PENDING)
        paid.refresh_from_db()
        self.assertEqual(paid.status, Booking.Status.PENDING)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].subject, f"Booking #{stale.booking_code} expired")

    def test_complete_finished_bookings(self) -> None:
        today = timezone.localdate()
        finished = self._booking(today - timedelta(days=3), today, status=Booking.Status.CONFIRMED)
        staying = self._booking(today - timedelta(days=1), today + timedelta(days=2), status=Booking.Status.CONFIRMED)

        result = complete_finished_bookings()

        self.assertEqual(result, {"completed": 1})
        finished.refresh_from_db()
        staying.refresh_from_db()
        self.assertEqual(finished.status, Booking.Status.COMPLETED)
        self.assertEqual(staying.status, Booking.Status.CONFIRMED)

    def test_notification_for_missing_booking(self) -> None:
        self.assertFalse(notify_booking_confirmed(123456))
        self.assertEqual(mail.outbox, [])
