"""``{success, data | error}`` envelopes used by the public booking endpoints."""

from __future__ import annotations

from typing import Any

from rest_framework import status as http_status  # type: ignore
from rest_framework.response import Response  # type: ignore


def success_response(data: Any, status: int = http_status.HTTP_200_OK, **extra: Any) -> Response:
    return Response({"success": True, "data": data, **extra}, status=status)


def error_response(error: str, status: int = http_status.HTTP_400_BAD_REQUEST, **extra: Any) -> Response:
    return Response({"success": False, "error": error, **extra}, status=status)


def first_error_message(errors: Any) -> str:
    """Flatten DRF serializer errors to the first human readable message."""
    if isinstance(errors, dict):
        for field, value in errors.items():
            message = first_error_message(value)
            if field in ("non_field_errors", "detail"):
                return message
            if isinstance(value, (list, dict)) and message:
                return f"{field}: {message}"
        return ""
    if isinstance(errors, list):
        for value in errors:
            message = first_error_message(value)
            if message:
                return message
        return ""
    return str(errors)
