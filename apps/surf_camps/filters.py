"""FilterSet for the surf camp catalogue."""

from __future__ import annotations

import django_filters  # type: ignore
from django.utils import timezone  # type: ignore

from .models import SurfCamp


class SurfCampFilterSet(django_filters.FilterSet):
    location = django_filters.CharFilter(field_name="location", lookup_expr="icontains")
    level = django_filters.ChoiceFilter(choices=SurfCamp.Level.choices)
    category = django_filters.ChoiceFilter(choices=SurfCamp.Category.choices)
    upcoming = django_filters.BooleanFilter(method="filter_upcoming")
    is_active = django_filters.BooleanFilter(field_name="is_active")

    class Meta:
        model = SurfCamp
        fields = ["location", "level", "category", "is_active"]

    def filter_upcoming(self, queryset, name, value):  # type: ignore
        if value:
            return queryset.filter(start_date__gte=timezone.localdate())
        return queryset
