"""Activity catalogue."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Activity(models.Model):
    class Category(models.TextChoices):
        PLAY = "play", _("Play")
        FLOW = "flow", _("Flow")
        SURF = "surf", _("Surf")

    class AvailabilityTier(models.TextChoices):
        ALWAYS = "always", _("Always available")
        ON_REQUEST = "on_request", _("On request")

    title = models.CharField(max_length=150)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=10, choices=Category.choices)
    icon = models.CharField(max_length=50, blank=True)
    availability_tier = models.CharField(
        max_length=20,
        choices=AvailabilityTier.choices,
        default=AvailabilityTier.ALWAYS,
    )
    display_order = models.PositiveIntegerField(default=0)
    image_url = models.URLField(blank=True)
    hero_image_url = models.URLField(blank=True)
    hero_video_url = models.URLField(blank=True)
    features = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Activity")
        verbose_name_plural = _("Activities")
        ordering = ["display_order", "title"]

    def __str__(self) -> str:
        return self.title
