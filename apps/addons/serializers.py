from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import AddOn


class AddOnSerializer(serializers.ModelSerializer):
    class Meta:
        model = AddOn
        fields = [
            "id",
            "name",
            "description",
            "price",
            "category",
            "max_quantity",
            "images",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_max_quantity(self, value):  # type: ignore
        if value is not None and value < 1:
            raise serializers.ValidationError("Max quantity must be at least 1.")
        return value
