"""FilterSet definitions for activity listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Activity


class ActivityFilterSet(django_filters.FilterSet):
    category = django_filters.ChoiceFilter(choices=Activity.Category.choices)
    tier = django_filters.ChoiceFilter(field_name="availability_tier", choices=Activity.AvailabilityTier.choices)
    is_active = django_filters.BooleanFilter(field_name="is_active")

    class Meta:
        model = Activity
        fields = ["category", "is_active"]
