"""Add-on catalogue."""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class AddOn(models.Model):
    class Category(models.TextChoices):
        EQUIPMENT = "equipment", _("Equipment")
        SERVICE = "service", _("Service")
        FOOD = "food", _("Food")
        TRANSPORT = "transport", _("Transport")
        OTHER = "other", _("Other")

    name = models.CharField(max_length=120)
    description = models.TextField(blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    category = models.CharField(max_length=20, choices=Category.choices, default=Category.OTHER)
    max_quantity = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        help_text=_("Leave empty for no limit."),
    )
    images = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Add-on")
        verbose_name_plural = _("Add-ons")
        ordering = ["category", "name"]

    def __str__(self) -> str:
        return self.name
