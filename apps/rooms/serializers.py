"""Serializers for the rooms domain."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from rest_framework import serializers  # type: ignore

from .models import Room, RoomBlock


class RoomSerializer(serializers.ModelSerializer):
    class Meta:
        model = Room
        fields = [
            "id",
            "name",
            "slug",
            "description",
            "capacity",
            "booking_type",
            "price_standard",
            "price_off_season",
            "price_per_bed",
            "occupancy_pricing",
            "amenities",
            "images",
            "is_active",
            "sort_order",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]
        extra_kwargs = {
            "slug": {"required": False, "allow_blank": True},
        }

    def validate_occupancy_pricing(self, value):  # type: ignore
        if not isinstance(value, dict):
            raise serializers.ValidationError("Expected an object mapping guest count to nightly price.")
        for guests, price in value.items():
            if not str(guests).isdigit() or int(guests) < 1:
                raise serializers.ValidationError(f"Invalid guest count: {guests}.")
            try:
                amount = Decimal(str(price))
            except InvalidOperation:
                raise serializers.ValidationError(f"Invalid price for {guests} guests.")
            if not amount.is_finite():
                raise serializers.ValidationError(f"Invalid price for {guests} guests.")
            if amount < 0:
                raise serializers.ValidationError("Prices cannot be negative.")
        return value

    def validate_amenities(self, value):  # type: ignore
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise serializers.ValidationError("Amenities must be a list of strings.")
        return value

    def validate_images(self, value):  # type: ignore
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise serializers.ValidationError("Images must be a list of URLs.")
        return value


class RoomBlockSerializer(serializers.ModelSerializer):
    created_by = serializers.ReadOnlyField(source="created_by_id")
    room_id = serializers.ReadOnlyField(source="room.id")
    block_type_display = serializers.ReadOnlyField(source="get_block_type_display")

    class Meta:
        model = RoomBlock
        fields = [
            "id",
            "room_id",
            "start_date",
            "end_date",
            "block_type",
            "block_type_display",
            "reason",
            "created_by",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class RoomBlockWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = RoomBlock
        fields = ["start_date", "end_date", "block_type", "reason"]

    def validate(self, attrs):  # type: ignore
        instance = self.instance
        start = attrs.get("start_date", getattr(instance, "start_date", None))
        end = attrs.get("end_date", getattr(instance, "end_date", None))
        if start and end and end <= start:
            raise serializers.ValidationError("End date must be after start date.")
        return attrs


class RoomAvailabilityQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    guests = serializers.IntegerField(min_value=1, default=1)

    def validate(self, attrs):  # type: ignore
        if attrs["end_date"] <= attrs["start_date"]:
            raise serializers.ValidationError("end_date must be after start_date.")
        return attrs
