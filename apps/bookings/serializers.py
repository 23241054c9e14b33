"""Serializers for the booking domain."""

from __future__ import annotations

from typing import Any

from rest_framework import serializers  # type: ignore

from apps.addons.models import AddOn
from apps.clients.models import Client
from apps.rooms.models import Room
from apps.surf_camps.models import SurfCamp

from .exceptions import BookingError
from .models import Booking, BookingAddOn
from .services import update_booking

CAMEL_CASE_ALIASES = {
    "firstName": "first_name",
    "lastName": "last_name",
    "dateOfBirth": "date_of_birth",
    "dietaryRestrictions": "dietary_restrictions",
    "medicalConditions": "medical_conditions",
    "surfExperience": "surf_experience",
    "emergencyContactName": "emergency_contact_name",
    "emergencyContactPhone": "emergency_contact_phone",
}


class ParticipantSerializer(serializers.Serializer):
    """A guest or surf week participant; booking widgets send camelCase keys."""

    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    date_of_birth = serializers.DateField(required=False, allow_null=True)
    dietary_restrictions = serializers.CharField(max_length=255, required=False, allow_blank=True)
    medical_conditions = serializers.CharField(required=False, allow_blank=True)
    surf_experience = serializers.ChoiceField(
        choices=Client.SurfExperience.choices,
        required=False,
        allow_blank=True,
    )
    emergency_contact_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    emergency_contact_phone = serializers.CharField(max_length=32, required=False, allow_blank=True)

    def to_internal_value(self, data):  # type: ignore
        if isinstance(data, dict):
            data = {CAMEL_CASE_ALIASES.get(key, key): value for key, value in data.items()}
        return super().to_internal_value(data)


class AddOnSelectionSerializer(serializers.Serializer):
    add_on_id = serializers.PrimaryKeyRelatedField(queryset=AddOn.objects.filter(is_active=True))
    quantity = serializers.IntegerField(min_value=1, default=1)


class BookingCreateSerializer(serializers.Serializer):
    """Public booking request from the website or the WordPress widget."""

    booking_type = serializers.ChoiceField(choices=Booking.BookingType.choices)
    room_id = serializers.PrimaryKeyRelatedField(
        queryset=Room.objects.all(),
        required=False,
        allow_null=True,
    )
    camp_id = serializers.PrimaryKeyRelatedField(
        queryset=SurfCamp.objects.all(),
        required=False,
        allow_null=True,
    )
    start_date = serializers.DateField(required=False, allow_null=True)
    end_date = serializers.DateField(required=False, allow_null=True)
    guests = serializers.IntegerField(min_value=1, required=False)
    participants = ParticipantSerializer(many=True, allow_empty=False)
    add_ons = AddOnSelectionSerializer(many=True, required=False)
    payment_method = serializers.ChoiceField(
        choices=Booking.PaymentMethod.choices,
        default=Booking.PaymentMethod.STRIPE,
    )
    source_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):  # type: ignore
        if attrs["booking_type"] == Booking.BookingType.ROOM:
            if not attrs.get("room_id"):
                raise serializers.ValidationError({"room_id": "This field is required for room bookings."})
            if not attrs.get("start_date") or not attrs.get("end_date"):
                raise serializers.ValidationError("start_date and end_date are required for room bookings.")
        elif not attrs.get("camp_id"):
            raise serializers.ValidationError({"camp_id": "This field is required for surf week bookings."})

        add_on_ids = [item["add_on_id"].pk for item in attrs.get("add_ons", [])]
        if len(add_on_ids) != len(set(add_on_ids)):
            raise serializers.ValidationError({"add_ons": "Each add-on can only be listed once."})
        return attrs

    def service_kwargs(self) -> dict[str, Any]:
        data = self.validated_data
        return {
            "booking_type": data["booking_type"],
            "participants": data["participants"],
            "room": data.get("room_id"),
            "surf_camp": data.get("camp_id"),
            "check_in": data.get("start_date"),
            "check_out": data.get("end_date"),
            "guests": data.get("guests"),
            "add_ons": [(item["add_on_id"], item["quantity"]) for item in data.get("add_ons", [])],
            "payment_method": data["payment_method"],
            "source_url": data.get("source_url", ""),
            "notes": data.get("notes", ""),
        }


class BookingQuoteSerializer(serializers.Serializer):
    """Query parameters of the quote endpoint. ``add_ons`` is a list like ``3:2,5:1``."""

    booking_type = serializers.ChoiceField(choices=Booking.BookingType.choices)
    room_id = serializers.PrimaryKeyRelatedField(queryset=Room.objects.all(), required=False)
    camp_id = serializers.PrimaryKeyRelatedField(queryset=SurfCamp.objects.all(), required=False)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    guests = serializers.IntegerField(min_value=1, default=1)
    add_ons = serializers.CharField(required=False, allow_blank=True)

    def validate_add_ons(self, value: str) -> list[tuple[AddOn, int]]:
        selections: list[tuple[AddOn, int]] = []
        for chunk in filter(None, (part.strip() for part in value.split(","))):
            add_on_id, _, quantity = chunk.partition(":")
            try:
                add_on = AddOn.objects.get(pk=int(add_on_id), is_active=True)
                selections.append((add_on, int(quantity or 1)))
            except (ValueError, AddOn.DoesNotExist):
                raise serializers.ValidationError(f"Unknown add-on selection: {chunk}.")
        return selections

    def service_kwargs(self) -> dict[str, Any]:
        data = self.validated_data
        return {
            "booking_type": data["booking_type"],
            "room": data.get("room_id"),
            "surf_camp": data.get("camp_id"),
            "check_in": data.get("start_date"),
            "check_out": data.get("end_date"),
            "guests": data["guests"],
            "add_ons": data.get("add_ons") or [],
        }


class BookingClientSerializer(serializers.ModelSerializer):
    full_name = serializers.ReadOnlyField()

    class Meta:
        model = Client
        fields = ["id", "full_name", "email", "phone"]


class BookingAddOnSerializer(serializers.ModelSerializer):
    add_on_id = serializers.ReadOnlyField(source="add_on.id")
    name = serializers.ReadOnlyField(source="add_on.name")

    class Meta:
        model = BookingAddOn
        fields = ["add_on_id", "name", "quantity", "unit_price", "total_price"]


class BookingSerializer(serializers.ModelSerializer):
    """Full booking with clients, add-ons and the price breakdown."""

    room_name = serializers.ReadOnlyField(source="room.name")
    surf_camp_name = serializers.ReadOnlyField(source="surf_camp.name")
    nights = serializers.ReadOnlyField()
    clients = BookingClientSerializer(many=True, read_only=True)
    add_ons = BookingAddOnSerializer(source="add_on_items", many=True, read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "booking_code",
            "booking_type",
            "room",
            "room_name",
            "surf_camp",
            "surf_camp_name",
            "clients",
            "check_in",
            "check_out",
            "nights",
            "guests",
            "status",
            "payment_status",
            "payment_method",
            "subtotal",
            "taxes",
            "fees",
            "discount_amount",
            "total_amount",
            "currency",
            "is_peak_season",
            "add_ons",
            "source",
            "source_url",
            "notes",
            "expires_at",
            "cancelled_at",
            "cancellation_reason",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BookingUpdateSerializer(serializers.ModelSerializer):
    """Staff edits. Moving a stay re-checks availability and reprices it."""

    room = serializers.PrimaryKeyRelatedField(queryset=Room.objects.all(), required=False)
    discount_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)

    class Meta:
        model = Booking
        fields = ["room", "check_in", "check_out", "guests", "discount_amount", "payment_method", "notes"]

    def validate(self, attrs):  # type: ignore
        booking: Booking = self.instance
        if attrs.get("room") is not None and booking.booking_type != Booking.BookingType.ROOM:
            raise serializers.ValidationError({"room": "Surf week bookings have no room."})
        if (
            booking.booking_type == Booking.BookingType.SURF_WEEK
            and "guests" in attrs
            and attrs["guests"] != booking.guests
        ):
            raise serializers.ValidationError(
                {"guests": "Surf week participants come from the camp assignments and cannot be edited here."}
            )
        if not booking.is_blocking and {"room", "check_in", "check_out", "guests"} & attrs.keys():
            raise serializers.ValidationError("Only pending or confirmed bookings can be moved.")
        return attrs

    def update(self, instance, validated_data):  # type: ignore
        try:
            return update_booking(instance, **validated_data)
        except BookingError as exc:
            raise serializers.ValidationError({"non_field_errors": [str(exc)]})


class BookingReasonSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
