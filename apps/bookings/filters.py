"""FilterSet for the staff booking list."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Booking.Status.choices)
    payment_status = django_filters.ChoiceFilter(choices=Booking.PaymentStatus.choices)
    booking_type = django_filters.ChoiceFilter(choices=Booking.BookingType.choices)
    room = django_filters.NumberFilter(field_name="room_id")
    surf_camp = django_filters.NumberFilter(field_name="surf_camp_id")
    start = django_filters.DateFilter(field_name="check_out", lookup_expr="gt")
    end = django_filters.DateFilter(field_name="check_in", lookup_expr="lt")
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Booking
        fields = ["status", "payment_status", "booking_type", "source"]

    def filter_search(self, queryset, name, value):  # type: ignore
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(booking_code__icontains=value) | Q(clients__email__icontains=value)
        ).distinct()
