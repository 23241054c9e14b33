"""Tests for booking email notifications."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from unittest import mock

from django.core import mail
from django.test import TestCase, override_settings
from django.utils import timezone

from apps.bookings.models import Booking
from apps.clients.models import Client
from apps.notifications import services
from apps.rooms.models import Room


class BookingEmailTests(TestCase):
    def setUp(self) -> None:
        self.room = Room.objects.create(name="Ocean View", capacity=2)
        self.booking = Booking.objects.create(
            booking_type=Booking.BookingType.ROOM,
            room=self.room,
            check_in=date(2031, 5, 3),
            check_out=date(2031, 5, 6),
            guests=2,
            total_amount=Decimal("345.00"),
            expires_at=timezone.now() + timedelta(hours=48),
        )
        self.ana = Client.objects.create(first_name="Ana", last_name="Silva", email="ana@example.com")
        self.rui = Client.objects.create(first_name="Rui", last_name="Costa", email="rui@example.com")
        self.booking.clients.add(self.ana, self.rui)

    def test_received_email_goes_to_every_client_and_staff(self) -> None:
        self.assertTrue(services.send_booking_received_email(self.booking))

        recipients = sorted(message.to[0] for message in mail.outbox)
        self.assertEqual(recipients, ["ana@example.com", "rui@example.com", "staff@heiwahouse.test"])
        guest_mail = next(message for message in mail.outbox if message.to == ["ana@example.com"])
        self.assertEqual(guest_mail.subject, f"Booking #{self.booking.booking_code} received")
        self.assertIn("Ocean View", guest_mail.body)
        self.assertIn("03.05.2031", guest_mail.body)

    @override_settings(BOOKING_NOTIFICATION_EMAIL="")
    def test_staff_email_skipped_without_address(self) -> None:
        self.assertFalse(services.send_new_booking_to_staff_email(self.booking))
        self.assertEqual(mail.outbox, [])

    def test_cancelled_email_mentions_refund(self) -> None:
        self.booking.mark_refunded("Storm warning")

        services.send_booking_cancelled_email(self.booking)

        self.assertEqual(len(mail.outbox), 2)
        self.assertIn("Storm warning", mail.outbox[0].body)
        self.assertIn("refund has been issued", mail.outbox[0].body)

    def test_booking_without_clients_sends_nothing(self) -> None:
        self.booking.clients.clear()

        self.assertFalse(services.send_booking_confirmation_email(self.booking))
        self.assertEqual(mail.outbox, [])

    def test_mail_backend_failure_is_reported(self) -> None:
        with mock.patch.object(services, "send_mail", side_effect=OSError("SMTP down")):
            sent = services.send_email_notification("ana@example.com", "Hello", None, {"message": "Hi"})

        self.assertFalse(sent)
