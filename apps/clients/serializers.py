"""Serializers for client profiles."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Client


class ClientSerializer(serializers.ModelSerializer):
    full_name = serializers.ReadOnlyField()
    booking_count = serializers.SerializerMethodField()

    class Meta:
        model = Client
        fields = [
            "id",
            "first_name",
            "last_name",
            "full_name",
            "email",
            "phone",
            "date_of_birth",
            "emergency_contact_name",
            "emergency_contact_phone",
            "dietary_restrictions",
            "medical_conditions",
            "surf_experience",
            "notes",
            "marketing_consent",
            "last_booking_date",
            "is_anonymized",
            "booking_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["last_booking_date", "is_anonymized", "created_at", "updated_at"]

    def get_booking_count(self, obj: Client) -> int:
        annotated = getattr(obj, "booking_count", None)
        if annotated is not None:
            return annotated
        return obj.bookings.count()

    def validate_email(self, value: str) -> str:
        value = value.strip().lower()
        qs = Client.objects.filter(email=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("A client with this email already exists.")
        return value

    def validate(self, attrs):  # type: ignore
        if self.instance is not None and self.instance.is_anonymized:
            raise serializers.ValidationError("Erased clients cannot be edited.")
        return attrs
