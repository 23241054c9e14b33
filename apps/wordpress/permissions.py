"""Shared-secret authentication for the WordPress plugin."""

from __future__ import annotations

import logging
import secrets

from django.conf import settings  # type: ignore
from rest_framework import permissions, status  # type: ignore
from rest_framework.exceptions import APIException  # type: ignore

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-Heiwa-API-Key"


class InvalidAPIKey(APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "A valid X-Heiwa-API-Key header is required."
    default_code = "invalid_api_key"


class HasWordPressAPIKey(permissions.BasePermission):
    """The request must carry the configured plugin key."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        expected = getattr(settings, "WORDPRESS_API_KEY", "")
        provided = request.headers.get(API_KEY_HEADER, "")
        if not expected:
            logger.error("WORDPRESS_API_KEY is not configured, rejecting plugin request")
            raise InvalidAPIKey()
        if not provided or not secrets.compare_digest(provided.encode("utf-8"), expected.encode("utf-8")):
            logger.warning("Rejected WordPress request from %s with a bad API key", request.META.get("REMOTE_ADDR"))
            raise InvalidAPIKey()
        return True
