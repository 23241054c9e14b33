"""Endpoints proxied by the WordPress plugin."""

from __future__ import annotations

from django.utils import timezone  # type: ignore
from rest_framework import serializers, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.bookings.availability import available_rooms, date_availability
from apps.bookings.cache import get_cached_date_availability
from apps.bookings.models import Booking
from apps.bookings.pricing import quote_surf_week
from apps.bookings.responses import error_response, first_error_message, success_response
from apps.bookings.views import DateAvailabilityQuerySerializer, submit_booking
from apps.rooms.models import Room
from apps.rooms.serializers import RoomAvailabilityQuerySerializer, RoomSerializer
from apps.surf_camps.models import SurfCamp
from apps.surf_camps.serializers import SurfCampSerializer

from .permissions import HasWordPressAPIKey, InvalidAPIKey

API_VERSION = "1.0"


class WordPressAPIView(APIView):
    authentication_classes: list = []
    permission_classes = [HasWordPressAPIKey]
    source_name = ""

    def meta(self) -> dict:
        return {
            "generated_at": timezone.now().isoformat(),
            "api_version": API_VERSION,
            "source": self.source_name,
        }

    def handle_exception(self, exc):  # type: ignore
        if isinstance(exc, InvalidAPIKey):
            return Response(
                {"success": False, "error": "Unauthorized", "message": str(exc.detail)},
                status=status.HTTP_401_UNAUTHORIZED,
            )
        return super().handle_exception(exc)


class SurfCampListView(WordPressAPIView):
    """Upcoming surf weeks that still have spots."""

    source_name = "surf_camps"

    def get(self, request):  # type: ignore
        camps = SurfCamp.objects.filter(
            is_active=True,
            start_date__gte=timezone.localdate(),
        ).prefetch_related("rooms").order_by("start_date")
        location = request.query_params.get("location")
        level = request.query_params.get("level")
        if location:
            camps = camps.filter(location__icontains=location)
        if level:
            camps = camps.filter(level=level)
        open_camps = [camp for camp in camps if camp.spots_remaining() > 0]
        return success_response(SurfCampSerializer(open_camps, many=True).data, meta=self.meta())


class RoomListView(WordPressAPIView):
    source_name = "rooms"

    def get(self, request):  # type: ignore
        rooms = Room.objects.filter(is_active=True)
        return success_response(RoomSerializer(rooms, many=True).data, meta=self.meta())


class RoomAvailabilityView(WordPressAPIView):
    source_name = "rooms_availability"

    def get(self, request):  # type: ignore
        query = RoomAvailabilityQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return error_response(first_error_message(query.errors), details=query.errors, meta=self.meta())
        start_date = query.validated_data["start_date"]
        end_date = query.validated_data["end_date"]
        guests = query.validated_data["guests"]
        rooms = available_rooms(start_date, end_date, guests)
        return success_response(
            {
                "available_rooms": RoomSerializer(rooms, many=True).data,
                "total_rooms": Room.objects.filter(is_active=True).count(),
                "requested_dates": {
                    "start_date": start_date.isoformat(),
                    "end_date": end_date.isoformat(),
                    "guests": guests,
                },
            },
            meta=self.meta(),
        )


class BookingCreateView(WordPressAPIView):
    source_name = "bookings"

    def post(self, request):  # type: ignore
        return submit_booking(request, source=Booking.Source.WORDPRESS, meta=self.meta())


class DateAvailabilityView(WordPressAPIView):
    """Per-day bed availability for the widget calendar."""

    source_name = "dates_availability"

    def get(self, request):  # type: ignore
        if not request.query_params.get("start_date") or not request.query_params.get("end_date"):
            return error_response("Missing required parameters: start_date and end_date", meta=self.meta())
        query = DateAvailabilityQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return error_response(first_error_message(query.errors), details=query.errors, meta=self.meta())
        start_date = query.validated_data["start_date"]
        end_date = query.validated_data["end_date"]
        participants = query.validated_data["participants"]
        data, cache_meta = get_cached_date_availability(
            {"start_date": start_date.isoformat(), "end_date": end_date.isoformat(), "participants": participants},
            lambda: date_availability(start_date, end_date, participants),
        )
        return success_response(data, meta={**self.meta(), **cache_meta})


class CampAvailabilityQuerySerializer(serializers.Serializer):
    camp_id = serializers.IntegerField(min_value=1)
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    participants = serializers.IntegerField(min_value=1, default=1)

    def validate(self, attrs):  # type: ignore
        if attrs["end_date"] <= attrs["start_date"]:
            raise serializers.ValidationError("end_date must be after start_date.")
        return attrs


class CampAvailabilityView(WordPressAPIView):
    """Spots and price for a party joining one surf week."""

    source_name = "availability"
    required_params = ("camp_id", "start_date", "end_date")

    def get(self, request):  # type: ignore
        if not all(request.query_params.get(name) for name in self.required_params):
            return error_response(
                "Missing required parameters: camp_id, start_date and end_date", meta=self.meta()
            )
        query = CampAvailabilityQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return error_response(first_error_message(query.errors), details=query.errors, meta=self.meta())
        start_date = query.validated_data["start_date"]
        end_date = query.validated_data["end_date"]
        participants = query.validated_data["participants"]

        camp = SurfCamp.objects.filter(pk=query.validated_data["camp_id"], is_active=True).first()
        if camp is None:
            return error_response("Camp not found", status=status.HTTP_404_NOT_FOUND, meta=self.meta())

        camp_dates = {"start_date": camp.start_date.isoformat(), "end_date": camp.end_date.isoformat()}
        if start_date < camp.start_date or end_date > camp.end_date:
            return success_response(
                {
                    "camp_id": camp.id,
                    "camp_name": camp.name,
                    "requested_dates": {"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
                    "camp_dates": camp_dates,
                    "reason": "Requested dates are outside camp duration",
                },
                available=False,
                meta=self.meta(),
            )

        spots = camp.spots_remaining()
        can_accommodate = spots >= participants
        return success_response(
            {
                "camp_info": {"id": camp.id, "name": camp.name, "level": camp.level, "dates": camp_dates},
                "availability": {
                    "total_capacity": camp.max_participants,
                    "booked_participants": camp.booked_participants(),
                    "available_spots": spots,
                    "requested_participants": participants,
                    "can_accommodate": can_accommodate,
                },
                "pricing": quote_surf_week(camp, participants).as_dict(),
            },
            available=can_accommodate,
            meta=self.meta(),
        )
