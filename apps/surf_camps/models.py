"""Surf camp models."""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.text import slugify  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

MAX_GROUP_DISCOUNT = Decimal("0.30")


class SurfCamp(models.Model):
    """Surf week with fixed dates, booked as a whole by its participants."""

    class Category(models.TextChoices):
        FRENCHMANS = "FR", _("Frenchman's")
        HEIWA_HOUSE = "HH", _("Heiwa House")

    class Level(models.TextChoices):
        BEGINNER = "beginner", _("Beginner")
        INTERMEDIATE = "intermediate", _("Intermediate")
        ADVANCED = "advanced", _("Advanced")
        ALL = "all", _("All levels")

    name = models.CharField(max_length=150)
    slug = models.SlugField(max_length=170, unique=True, blank=True)
    category = models.CharField(
        max_length=2,
        choices=Category.choices,
        default=Category.HEIWA_HOUSE,
    )
    description = models.TextField(blank=True)
    start_date = models.DateField()
    end_date = models.DateField()
    max_participants = models.PositiveSmallIntegerField(default=10, validators=[MinValueValidator(1)])
    price_per_person = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    group_discount_rate = models.DecimalField(
        max_digits=4,
        decimal_places=3,
        default=Decimal("0.000"),
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(MAX_GROUP_DISCOUNT)],
        help_text=_("Discount per extra participant, e.g. 0.05 for 5 %. Capped at 30 %."),
    )
    level = models.CharField(max_length=20, choices=Level.choices, default=Level.ALL)
    location = models.CharField(max_length=120, blank=True)
    rooms = models.ManyToManyField("rooms.Room", blank=True, related_name="surf_camps")
    images = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Surf camp")
        verbose_name_plural = _("Surf camps")
        ordering = ["start_date", "name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gt=models.F("start_date")),
                name="surf_camp_valid_dates",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.start_date:%d.%m.%Y})"

    @property
    def nights(self) -> int:
        return (self.end_date - self.start_date).days

    @property
    def is_upcoming(self) -> bool:
        return self.start_date >= timezone.localdate()

    def booked_participants(self) -> int:
        from apps.bookings.models import AssignmentStatus, Booking

        return self.assignments.filter(
            status=AssignmentStatus.ACTIVE,
            booking__status__in=Booking.BLOCKING_STATUSES,
        ).count()

    def spots_remaining(self) -> int:
        return max(0, self.max_participants - self.booked_participants())

    def save(self, *args, **kwargs):  # type: ignore
        if not self.slug:
            base_slug = slugify(f"{self.name}-{self.start_date}")[:150] or "surf-camp"
            candidate = base_slug
            counter = 1
            while self.__class__.objects.filter(slug=candidate).exclude(pk=self.pk).exists():
                counter += 1
                candidate = f"{base_slug}-{counter}"
            self.slug = candidate
        super().save(*args, **kwargs)
