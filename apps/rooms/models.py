"""Room domain models for Heiwa House.

A room is either sold as a whole or bed by bed. Whole rooms take one
booking per night; per-bed rooms are shared by several bookings as long
as the beds taken on every night stay within the room capacity.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.text import slugify  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Room(models.Model):
    """Bookable room of the house."""

    class BookingType(models.TextChoices):
        WHOLE = "whole", _("Whole room")
        PER_BED = "per_bed", _("Per bed")

    name = models.CharField(max_length=120)
    slug = models.SlugField(max_length=140, unique=True, blank=True)
    description = models.TextField(blank=True)
    capacity = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    booking_type = models.CharField(
        max_length=20,
        choices=BookingType.choices,
        default=BookingType.WHOLE,
    )
    price_standard = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text=_("Nightly price in peak season."),
    )
    price_off_season = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    price_per_bed = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    occupancy_pricing = models.JSONField(
        default=dict,
        blank=True,
        help_text=_('Nightly price by guest count, e.g. {"1": 80, "2": 120}.'),
    )
    amenities = models.JSONField(default=list, blank=True)
    images = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)
    sort_order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Room")
        verbose_name_plural = _("Rooms")
        ordering = ["sort_order", "name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(capacity__gte=1),
                name="room_capacity_positive",
            ),
        ]

    def __str__(self) -> str:
        return self.name

    @property
    def is_per_bed(self) -> bool:
        return self.booking_type == self.BookingType.PER_BED

    def seasonal_rate(self, peak: bool) -> Decimal:
        """Nightly price for the season, falling back to the other season when unset."""
        if peak:
            return self.price_standard or self.price_off_season
        return self.price_off_season or self.price_standard

    def occupancy_rate(self, guests: int) -> Decimal | None:
        value = (self.occupancy_pricing or {}).get(str(guests))
        if value in (None, ""):
            return None
        return Decimal(str(value))

    def save(self, *args, **kwargs):  # type: ignore
        if not self.slug:
            base_slug = slugify(self.name)[:120] or "room"
            candidate = base_slug
            counter = 1
            while self.__class__.objects.filter(slug=candidate).exclude(pk=self.pk).exists():
                counter += 1
                candidate = f"{base_slug}-{counter}"
            self.slug = candidate
        super().save(*args, **kwargs)


class RoomBlock(models.Model):
    """Period during which a room cannot be booked."""

    class BlockType(models.TextChoices):
        MANUAL = "manual", _("Manual block")
        MAINTENANCE = "maintenance", _("Maintenance")

    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name="blocks")
    start_date = models.DateField()
    end_date = models.DateField(help_text=_("First day the room is free again."))
    block_type = models.CharField(
        max_length=20,
        choices=BlockType.choices,
        default=BlockType.MANUAL,
    )
    reason = models.CharField(max_length=255, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="room_blocks",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Room block")
        verbose_name_plural = _("Room blocks")
        ordering = ["start_date"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gt=models.F("start_date")),
                name="room_block_valid_date_range",
            ),
        ]
        indexes = [
            models.Index(fields=["room", "start_date", "end_date"], name="room_block_dates_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.room.name}: {self.start_date} - {self.end_date} ({self.block_type})"
