"""API views for dashboard statistics.

The overview aggregates counts and revenue across rooms, clients and
bookings, the arrivals of the coming week and the bed occupancy over the
next thirty days.
"""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.bookings.availability import date_availability
from apps.bookings.models import Booking
from apps.clients.models import Client
from apps.rooms.models import Room
from apps.surf_camps.models import SurfCamp
from apps.users.permissions import IsStaffMember

ARRIVALS_WINDOW_DAYS = 7
OCCUPANCY_WINDOW_DAYS = 30


def occupancy_rate(start, days: int) -> Decimal:
    """Share of bed-nights taken between ``start`` and ``start + days``, as a percentage."""
    availability = date_availability(start, start + timedelta(days=days - 1))
    capacity = sum(day["capacity"] for day in availability["date_availability"])
    if not capacity:
        return Decimal("0.00")
    taken = sum(min(day["booked"], day["capacity"]) for day in availability["date_availability"])
    return (Decimal(taken) * 100 / Decimal(capacity)).quantize(Decimal("0.01"))


class OverviewView(APIView):
    permission_classes = [IsStaffMember]

    def get(self, request, format=None):  # type: ignore
        today = timezone.localdate()

        status_counts = dict(
            Booking.objects.values_list("status").annotate(total=models.Count("id")).order_by()
        )
        revenue = Booking.objects.filter(payment_status=Booking.PaymentStatus.PAID).aggregate(
            total=models.Sum("total_amount")
        ).get("total") or Decimal("0")
        revenue = Decimal(revenue).quantize(Decimal("0.01"))

        arrivals = (
            Booking.objects.filter(
                status__in=Booking.BLOCKING_STATUSES,
                check_in__gte=today,
                check_in__lt=today + timedelta(days=ARRIVALS_WINDOW_DAYS),
            )
            .select_related("room", "surf_camp")
            .prefetch_related("clients")
            .order_by("check_in")
        )
        upcoming_camps = SurfCamp.objects.filter(is_active=True, start_date__gte=today).order_by("start_date")

        return Response(
            {
                "rooms": {
                    "total": Room.objects.count(),
                    "active": Room.objects.filter(is_active=True).count(),
                },
                "clients": Client.objects.filter(is_anonymized=False).count(),
                "bookings": {
                    "total": sum(status_counts.values()),
                    "by_status": {choice: status_counts.get(choice, 0) for choice in Booking.Status.values},
                },
                "revenue": {
                    "total": str(revenue),
                    "currency": getattr(settings, "BOOKING_CURRENCY", "EUR"),
                },
                "upcoming_arrivals": [
                    {
                        "id": booking.id,
                        "booking_code": booking.booking_code,
                        "check_in": booking.check_in.isoformat(),
                        "room": booking.room.name if booking.room else None,
                        "surf_camp": booking.surf_camp.name if booking.surf_camp else None,
                        "guests": booking.guests,
                        "clients": [client.full_name for client in booking.clients.all()],
                        "status": booking.status,
                    }
                    for booking in arrivals
                ],
                "occupancy_rate": str(occupancy_rate(today, OCCUPANCY_WINDOW_DAYS)),
                "upcoming_surf_camps": [
                    {
                        "id": camp.id,
                        "name": camp.name,
                        "start_date": camp.start_date.isoformat(),
                        "end_date": camp.end_date.isoformat(),
                        "spots_remaining": camp.spots_remaining(),
                    }
                    for camp in upcoming_camps
                ],
            }
        )
