"""Serializers for surf camps and their room assignments."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.rooms.models import Room

from .models import SurfCamp


class SurfCampSerializer(serializers.ModelSerializer):
    rooms = serializers.PrimaryKeyRelatedField(many=True, queryset=Room.objects.all(), required=False)
    nights = serializers.ReadOnlyField()
    booked_participants = serializers.SerializerMethodField()
    spots_remaining = serializers.SerializerMethodField()

    class Meta:
        model = SurfCamp
        fields = [
            "id",
            "name",
            "slug",
            "category",
            "description",
            "start_date",
            "end_date",
            "nights",
            "max_participants",
            "booked_participants",
            "spots_remaining",
            "price_per_person",
            "group_discount_rate",
            "level",
            "location",
            "rooms",
            "images",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]
        extra_kwargs = {
            "slug": {"required": False, "allow_blank": True},
        }

    def get_booked_participants(self, obj: SurfCamp) -> int:
        return obj.booked_participants()

    def get_spots_remaining(self, obj: SurfCamp) -> int:
        return obj.spots_remaining()

    def validate(self, attrs):  # type: ignore
        instance = self.instance
        start = attrs.get("start_date", getattr(instance, "start_date", None))
        end = attrs.get("end_date", getattr(instance, "end_date", None))
        if start and end and end <= start:
            raise serializers.ValidationError("End date must be after start date.")
        return attrs


class RoomAllocationSerializer(serializers.Serializer):
    room_id = serializers.IntegerField()
    client_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=True)


class SurfCampAssignmentWriteSerializer(serializers.Serializer):
    assignments = RoomAllocationSerializer(many=True)

    def validate_assignments(self, value):  # type: ignore
        camp: SurfCamp = self.context["surf_camp"]
        camp_rooms = {room.id: room for room in camp.rooms.all()}
        seen_clients: set[int] = set()
        for allocation in value:
            room = camp_rooms.get(allocation["room_id"])
            if room is None:
                raise serializers.ValidationError(
                    f"Room {allocation['room_id']} is not available to this surf camp."
                )
            client_ids = allocation["client_ids"]
            repeated = sorted({client_id for client_id in client_ids if client_ids.count(client_id) > 1})
            if repeated:
                raise serializers.ValidationError(f"Client {repeated[0]} is listed more than once for {room.name}.")
            if len(allocation["client_ids"]) > room.capacity:
                raise serializers.ValidationError(
                    f"{room.name} sleeps at most {room.capacity} participants."
                )
            duplicates = seen_clients.intersection(allocation["client_ids"])
            if duplicates:
                raise serializers.ValidationError(
                    f"Client {sorted(duplicates)[0]} is assigned to more than one room."
                )
            seen_clients.update(allocation["client_ids"])
        return value
