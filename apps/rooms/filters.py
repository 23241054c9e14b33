"""FilterSet definitions for room listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Room


class RoomFilterSet(django_filters.FilterSet):
    is_active = django_filters.BooleanFilter(field_name="is_active")
    booking_type = django_filters.ChoiceFilter(choices=Room.BookingType.choices)
    min_capacity = django_filters.NumberFilter(field_name="capacity", lookup_expr="gte")

    class Meta:
        model = Room
        fields = ["is_active", "booking_type"]
