"""Serializers for the staff login flow."""

from __future__ import annotations

import logging
from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()

logger = logging.getLogger(__name__)

LOGIN_ATTEMPTS_THRESHOLD = 5


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        email = attrs.get("email", "")
        password = attrs.get("password", "")

        try:
            user = User.objects.get(email__iexact=email)
        except User.DoesNotExist:
            raise serializers.ValidationError({"email": "Invalid email or password."})

        if user.is_locked:
            logger.warning("Login attempt on locked account %s", user.email)
            raise serializers.ValidationError(
                {"non_field_errors": ["Account temporarily locked. Try again later."]}
            )

        if not user.is_active or not user.check_password(password):
            user.register_failed_attempt(threshold=LOGIN_ATTEMPTS_THRESHOLD)
            raise serializers.ValidationError({"email": "Invalid email or password."})

        user.unlock()
        attrs["user"] = user
        return attrs
