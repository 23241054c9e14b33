"""Serializers for staff user endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from django.contrib.auth.password_validation import validate_password  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "username",
            "first_name",
            "last_name",
            "role",
            "is_active",
            "last_login",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "last_login", "created_at", "updated_at"]


class StaffUserWriteSerializer(serializers.ModelSerializer):
    """Creating and editing staff accounts (superadmin only)."""

    password = serializers.CharField(write_only=True, required=False, min_length=8)

    class Meta:
        model = User
        fields = ["email", "username", "first_name", "last_name", "role", "is_active", "password"]

    def validate_password(self, value: str) -> str:  # type: ignore
        validate_password(value)
        return value

    def validate(self, attrs):  # type: ignore
        if self.instance is None and not attrs.get("password"):
            raise serializers.ValidationError({"password": "A password is required for new accounts."})
        return attrs

    def create(self, validated_data):  # type: ignore
        password = validated_data.pop("password")
        return User.objects.create_user(password=password, **validated_data)

    def update(self, instance, validated_data):  # type: ignore
        password = validated_data.pop("password", None)
        instance = super().update(instance, validated_data)
        if password:
            instance.set_password(password)
            instance.save(update_fields=["password"])
        return instance
