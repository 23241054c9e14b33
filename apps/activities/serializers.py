from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Activity


class ActivitySerializer(serializers.ModelSerializer):
    class Meta:
        model = Activity
        fields = [
            "id",
            "title",
            "description",
            "category",
            "icon",
            "availability_tier",
            "display_order",
            "image_url",
            "hero_image_url",
            "hero_video_url",
            "features",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_features(self, value):  # type: ignore
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise serializers.ValidationError("Features must be a list of strings.")
        return value
