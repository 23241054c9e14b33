"""Errors raised by booking services and translated to 400 responses by the views."""

from __future__ import annotations


class BookingError(Exception):
    """Base class for booking domain errors."""


class BookingConflictError(BookingError):
    """Raised when a room or surf week is busy for the requested dates."""


class BookingValidationError(BookingError):
    """Raised when a booking request breaks a business rule."""
