"""Client profile model."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.infrastructure.fields import EncryptedTextField


class Client(models.Model):
    """Guest or surf camp participant."""

    class SurfExperience(models.TextChoices):
        NONE = "none", _("Never surfed")
        BEGINNER = "beginner", _("Beginner")
        INTERMEDIATE = "intermediate", _("Intermediate")
        ADVANCED = "advanced", _("Advanced")

    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=32, blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    emergency_contact_name = models.CharField(max_length=150, blank=True)
    emergency_contact_phone = models.CharField(max_length=32, blank=True)
    dietary_restrictions = models.CharField(max_length=255, blank=True)
    medical_conditions = EncryptedTextField(blank=True)
    surf_experience = models.CharField(
        max_length=20,
        choices=SurfExperience.choices,
        blank=True,
    )
    notes = models.TextField(blank=True)
    marketing_consent = models.BooleanField(default=False)
    last_booking_date = models.DateField(null=True, blank=True)
    is_anonymized = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Client")
        verbose_name_plural = _("Clients")
        ordering = ["last_name", "first_name"]
        indexes = [
            models.Index(fields=["last_name", "first_name"], name="client_name_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.full_name} <{self.email}>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def anonymize(self) -> None:
        """Strip personal data while keeping the row for booking history."""
        self.first_name = "Erased"
        self.last_name = "Client"
        self.email = f"erased-{self.pk}@anonymized.invalid"
        self.phone = ""
        self.date_of_birth = None
        self.emergency_contact_name = ""
        self.emergency_contact_phone = ""
        self.dietary_restrictions = ""
        self.medical_conditions = ""
        self.notes = ""
        self.marketing_consent = False
        self.is_anonymized = True
        self.save()
