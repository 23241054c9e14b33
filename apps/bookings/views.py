"""API views for bookings and availability checks."""

from __future__ import annotations

import logging
from datetime import date

from django.db.models import Prefetch  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, serializers, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.rooms.models import Room
from apps.users.permissions import IsAdminRole, IsStaffMember

from .availability import check_room_availability, date_availability
from .cache import get_cached_date_availability
from .exceptions import BookingConflictError, BookingError
from .filters import BookingFilterSet
from .models import Booking, BookingAddOn
from .responses import error_response, first_error_message, success_response
from .serializers import (
    BookingCreateSerializer,
    BookingQuoteSerializer,
    BookingReasonSerializer,
    BookingSerializer,
    BookingUpdateSerializer,
)
from .services import cancel_booking, confirm_payment, create_booking, quote_booking, refund_booking

logger = logging.getLogger(__name__)

MAX_DATE_RANGE_DAYS = 366


def submit_booking(request, *, source: str, **extra) -> Response:
    """Validate a public booking request and create it, answering with an envelope."""
    serializer = BookingCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return error_response(
            first_error_message(serializer.errors) or "Invalid booking request.",
            details=serializer.errors,
            **extra,
        )
    user = request.user if request.user and request.user.is_authenticated else None
    try:
        booking = create_booking(source=source, created_by=user, **serializer.service_kwargs())
    except BookingConflictError as exc:
        logger.info("Booking request rejected, %s", exc)
        return error_response(str(exc), code="conflict", **extra)
    except BookingError as exc:
        return error_response(str(exc), **extra)
    return success_response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED, **extra)


class BookingViewSet(viewsets.ModelViewSet):
    """Public booking creation; staff manage bookings through the dashboard."""

    queryset = Booking.objects.select_related("room", "surf_camp").prefetch_related(
        "clients",
        Prefetch("add_on_items", queryset=BookingAddOn.objects.select_related("add_on")),
    )
    permission_classes = [IsStaffMember]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = BookingFilterSet
    ordering_fields = ["check_in", "created_at", "total_amount", "status"]
    ordering = ["-created_at"]
    http_method_names = ["get", "post", "patch", "head", "options"]
    lookup_value_regex = r"\d+"

    def get_permissions(self):  # type: ignore
        if self.action in {"create", "quote"}:
            return [permissions.AllowAny()]
        if self.action in {"partial_update", "cancel", "confirm_payment", "refund"}:
            return [IsAdminRole()]
        return super().get_permissions()

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "partial_update":
            return BookingUpdateSerializer
        return BookingSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        return submit_booking(request, source=Booking.Source.WEB)

    def partial_update(self, request, *args, **kwargs):  # type: ignore
        booking = self.get_object()
        serializer = BookingUpdateSerializer(booking, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        booking = serializer.save()
        return Response(BookingSerializer(booking).data)

    @action(detail=False, methods=["get"])
    def quote(self, request):  # type: ignore
        serializer = BookingQuoteSerializer(data=request.query_params)
        if not serializer.is_valid():
            return error_response(first_error_message(serializer.errors), details=serializer.errors)
        try:
            quote = quote_booking(**serializer.service_kwargs())
        except BookingError as exc:
            return error_response(str(exc))
        return success_response(quote.as_dict())

    def _transition(self, request, handler, *, with_reason: bool = False) -> Response:
        booking: Booking = self.get_object()
        args = []
        if with_reason:
            reason_serializer = BookingReasonSerializer(data=request.data)
            reason_serializer.is_valid(raise_exception=True)
            args.append(reason_serializer.validated_data["reason"])
        try:
            booking = handler(booking, *args)
        except BookingError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(BookingSerializer(booking).data)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        return self._transition(request, cancel_booking, with_reason=True)

    @action(detail=True, methods=["post"], url_path="confirm-payment")
    def confirm_payment(self, request, pk=None):  # type: ignore
        return self._transition(request, confirm_payment)

    @action(detail=True, methods=["post"])
    def refund(self, request, pk=None):  # type: ignore
        return self._transition(request, refund_booking, with_reason=True)


class RoomAvailabilityCheckSerializer(serializers.Serializer):
    roomId = serializers.IntegerField()
    checkIn = serializers.DateField()
    checkOut = serializers.DateField()
    guests = serializers.IntegerField(min_value=1, required=False, default=1)


class AvailabilityView(APIView):
    """Single room availability check used by the booking widget."""

    permission_classes = [permissions.AllowAny]
    authentication_classes: list = []

    def _check(self, params, *, require_guests: bool) -> Response:
        required = ["roomId", "checkIn", "checkOut"] + (["guests"] if require_guests else [])
        if any(params.get(name) in (None, "") for name in required):
            message = "Missing required fields" if require_guests else (
                "Missing required parameters: roomId, checkIn, checkOut"
            )
            return error_response(message)

        serializer = RoomAvailabilityCheckSerializer(data=params)
        if not serializer.is_valid():
            return error_response(first_error_message(serializer.errors), details=serializer.errors)
        data = serializer.validated_data
        if data["checkOut"] <= data["checkIn"]:
            return error_response("Check-out date must be after check-in date")

        room = Room.objects.filter(pk=data["roomId"]).first()
        if room is None:
            return error_response("Room not found", status=status.HTTP_404_NOT_FOUND)
        if require_guests and data["guests"] > room.capacity:
            return success_response(
                {"available": False, "message": f"Room capacity is {room.capacity} guests"}
            )
        return success_response(
            check_room_availability(room, data["checkIn"], data["checkOut"], data["guests"])
        )

    def get(self, request):  # type: ignore
        return self._check(request.query_params, require_guests=False)

    def post(self, request):  # type: ignore
        return self._check(request.data, require_guests=True)


class DateAvailabilityQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    participants = serializers.IntegerField(min_value=1, default=1)

    def validate(self, attrs):  # type: ignore
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError("end_date cannot be before start_date.")
        if (attrs["end_date"] - attrs["start_date"]).days >= MAX_DATE_RANGE_DAYS:
            raise serializers.ValidationError(f"At most {MAX_DATE_RANGE_DAYS} days can be checked at once.")
        return attrs


class DateAvailabilityView(APIView):
    """Beds left per day, cached for a few minutes."""

    permission_classes = [permissions.AllowAny]
    authentication_classes: list = []

    def get(self, request):  # type: ignore
        if not request.query_params.get("start_date") or not request.query_params.get("end_date"):
            return error_response("Missing required parameters: start_date and end_date")
        serializer = DateAvailabilityQuerySerializer(data=request.query_params)
        if not serializer.is_valid():
            return error_response(first_error_message(serializer.errors), details=serializer.errors)

        start_date: date = serializer.validated_data["start_date"]
        end_date: date = serializer.validated_data["end_date"]
        participants: int = serializer.validated_data["participants"]
        data, meta = get_cached_date_availability(
            {"start_date": start_date.isoformat(), "end_date": end_date.isoformat(), "participants": participants},
            lambda: date_availability(start_date, end_date, participants),
        )
        return success_response(data, meta=meta)


__all__ = [
    "AvailabilityView",
    "BookingViewSet",
    "DateAvailabilityView",
    "submit_booking",
]
