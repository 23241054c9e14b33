"""Booking domain models for Heiwa House."""

from __future__ import annotations

import secrets
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.exceptions import ValidationError  # type: ignore
from django.db import models, transaction  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class AssignmentStatus(models.TextChoices):
    ACTIVE = "active", _("Active")
    CANCELLED = "cancelled", _("Cancelled")


class Booking(models.Model):
    """Reservation of a room or a surf week for one or more clients."""

    class BookingType(models.TextChoices):
        ROOM = "room", _("Room")
        SURF_WEEK = "surf_week", _("Surf week")

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        CANCELLED = "cancelled", _("Cancelled")
        COMPLETED = "completed", _("Completed")
        EXPIRED = "expired", _("Expired")

    class PaymentStatus(models.TextChoices):
        PENDING = "pending", _("Pending")
        PAID = "paid", _("Paid")
        REFUNDED = "refunded", _("Refunded")
        FAILED = "failed", _("Failed")

    class PaymentMethod(models.TextChoices):
        STRIPE = "stripe", _("Card (Stripe)")
        CASH = "cash", _("Cash")
        TRANSFER = "transfer", _("Bank transfer")
        OTHER = "other", _("Other")

    class Source(models.TextChoices):
        WEB = "web", _("Website")
        WORDPRESS = "wordpress", _("WordPress widget")
        ADMIN = "admin", _("Admin dashboard")

    BLOCKING_STATUSES = (Status.PENDING, Status.CONFIRMED)

    booking_code = models.CharField(max_length=12, unique=True, editable=False)
    booking_type = models.CharField(
        max_length=20,
        choices=BookingType.choices,
        default=BookingType.ROOM,
    )
    room = models.ForeignKey(
        "rooms.Room",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="bookings",
    )
    surf_camp = models.ForeignKey(
        "surf_camps.SurfCamp",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="bookings",
    )
    clients = models.ManyToManyField("clients.Client", blank=True, related_name="bookings")
    check_in = models.DateField()
    check_out = models.DateField()
    guests = models.PositiveSmallIntegerField(default=1)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        default=PaymentMethod.STRIPE,
    )
    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    taxes = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    fees = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    discount_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    currency = models.CharField(max_length=3, default="EUR")
    is_peak_season = models.BooleanField(default=False)
    source = models.CharField(
        max_length=20,
        choices=Source.choices,
        default=Source.WEB,
    )
    source_url = models.URLField(max_length=500, blank=True)
    notes = models.TextField(blank=True)
    expires_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text=_("Unpaid pending bookings expire after this moment."),
    )
    cancelled_at = models.DateTimeField(null=True, blank=True)
    cancellation_reason = models.CharField(max_length=255, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_bookings",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(check_out__gt=models.F("check_in")),
                name="booking_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["room", "check_in", "check_out"], name="booking_room_dates_idx"),
            models.Index(fields=["surf_camp", "status"], name="booking_camp_status_idx"),
            models.Index(fields=["status", "payment_status"], name="booking_status_payment_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.booking_code}"

    @property
    def nights(self) -> int:
        return max(1, (self.check_out - self.check_in).days)

    @property
    def is_blocking(self) -> bool:
        return self.status in self.BLOCKING_STATUSES

    def clean(self) -> None:
        if self.check_in >= self.check_out:
            raise ValidationError(_("Check-out must be after check-in."))
        if self.booking_type == self.BookingType.ROOM and not self.room_id:
            raise ValidationError(_("A room booking needs a room."))
        if self.booking_type == self.BookingType.SURF_WEEK and not self.surf_camp_id:
            raise ValidationError(_("A surf week booking needs a surf camp."))

    def save(self, *args, **kwargs):  # type: ignore
        with transaction.atomic():
            if self._state.adding and not self.booking_code:
                self.booking_code = self.generate_booking_code()
            self.clean()
            super().save(*args, **kwargs)

    @classmethod
    def generate_booking_code(cls) -> str:
        code = secrets.token_hex(4).upper()
        while cls.objects.filter(booking_code=code).exists():
            code = secrets.token_hex(4).upper()
        return code

    def _cancel_assignments(self) -> None:
        self.room_assignments.update(status=AssignmentStatus.CANCELLED)
        self.camp_assignments.update(status=AssignmentStatus.CANCELLED)

    def mark_cancelled(self, reason: str = "") -> None:
        self.status = self.Status.CANCELLED
        self.cancellation_reason = reason
        self.cancelled_at = timezone.now()
        self.save(update_fields=["status", "cancellation_reason", "cancelled_at", "updated_at"])
        self._cancel_assignments()

    def mark_paid(self) -> None:
        self.payment_status = self.PaymentStatus.PAID
        self.status = self.Status.CONFIRMED
        self.expires_at = None
        self.save(update_fields=["payment_status", "status", "expires_at", "updated_at"])

    def mark_refunded(self, reason: str = "") -> None:
        self.payment_status = self.PaymentStatus.REFUNDED
        self.status = self.Status.CANCELLED
        self.cancellation_reason = reason
        self.cancelled_at = timezone.now()
        self.save(
            update_fields=[
                "payment_status",
                "status",
                "cancellation_reason",
                "cancelled_at",
                "updated_at",
            ]
        )
        self._cancel_assignments()

    def mark_expired(self) -> None:
        self.status = self.Status.EXPIRED
        self.payment_status = self.PaymentStatus.FAILED
        self.cancellation_reason = "Payment hold expired"
        self.cancelled_at = timezone.now()
        self.save(
            update_fields=[
                "status",
                "payment_status",
                "cancellation_reason",
                "cancelled_at",
                "updated_at",
            ]
        )
        self._cancel_assignments()

    def should_expire(self) -> bool:
        return bool(
            self.expires_at
            and timezone.now() > self.expires_at
            and self.status == self.Status.PENDING
            and self.payment_status != self.PaymentStatus.PAID
        )


class BookingAddOn(models.Model):
    """Extra (board rental, transfer, ...) ordered with a booking."""

    booking = models.ForeignKey(Booking, on_delete=models.CASCADE, related_name="add_on_items")
    add_on = models.ForeignKey("addons.AddOn", on_delete=models.PROTECT, related_name="booking_items")
    quantity = models.PositiveSmallIntegerField(default=1)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    total_price = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        verbose_name = _("Booking add-on")
        verbose_name_plural = _("Booking add-ons")
        constraints = [
            models.UniqueConstraint(fields=["booking", "add_on"], name="unique_booking_add_on"),
        ]

    def __str__(self) -> str:
        return f"{self.add_on} x{self.quantity}"


class RoomAssignment(models.Model):
    """A client sleeping in a room for the nights of a room booking."""

    booking = models.ForeignKey(Booking, on_delete=models.CASCADE, related_name="room_assignments")
    client = models.ForeignKey("clients.Client", on_delete=models.CASCADE, related_name="room_assignments")
    room = models.ForeignKey("rooms.Room", on_delete=models.PROTECT, related_name="assignments")
    check_in = models.DateField()
    check_out = models.DateField()
    status = models.CharField(
        max_length=20,
        choices=AssignmentStatus.choices,
        default=AssignmentStatus.ACTIVE,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Room assignment")
        verbose_name_plural = _("Room assignments")
        ordering = ["check_in", "room_id"]
        constraints = [
            models.UniqueConstraint(fields=["booking", "client"], name="unique_room_assignment_client"),
        ]

    def __str__(self) -> str:
        return f"{self.client} in {self.room} ({self.check_in} - {self.check_out})"


class SurfCampAssignment(models.Model):
    """A client taking part in a surf week, optionally placed in a room."""

    booking = models.ForeignKey(Booking, on_delete=models.CASCADE, related_name="camp_assignments")
    client = models.ForeignKey("clients.Client", on_delete=models.CASCADE, related_name="camp_assignments")
    surf_camp = models.ForeignKey(
        "surf_camps.SurfCamp",
        on_delete=models.CASCADE,
        related_name="assignments",
    )
    room = models.ForeignKey(
        "rooms.Room",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="camp_assignments",
    )
    status = models.CharField(
        max_length=20,
        choices=AssignmentStatus.choices,
        default=AssignmentStatus.ACTIVE,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Surf camp assignment")
        verbose_name_plural = _("Surf camp assignments")
        ordering = ["surf_camp_id", "id"]
        constraints = [
            models.UniqueConstraint(fields=["booking", "client"], name="unique_camp_assignment_client"),
        ]

    def __str__(self) -> str:
        return f"{self.client} @ {self.surf_camp}"
