"""Room API views."""

from __future__ import annotations

from datetime import date

from django.db import transaction  # type: ignore
from django.shortcuts import get_object_or_404  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, serializers, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.availability import (
    available_rooms,
    lock_queryset_if_possible,
    room_blocks,
    room_bookings,
    room_camp_assignments,
)
from apps.users.permissions import IsAdminRole, IsStaffMember, is_staff_user

from .filters import RoomFilterSet
from .models import Room, RoomBlock
from .serializers import (
    RoomAvailabilityQuerySerializer,
    RoomBlockSerializer,
    RoomBlockWriteSerializer,
    RoomSerializer,
)


class RoomViewSet(viewsets.ModelViewSet):
    """Public room catalogue; admins manage rooms."""

    queryset = Room.objects.all()
    serializer_class = RoomSerializer
    permission_classes = [IsAdminRole]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = RoomFilterSet
    ordering_fields = ["sort_order", "name", "capacity", "price_standard"]
    lookup_value_regex = r"\d+"

    def get_permissions(self):  # type: ignore
        if self.action in {"list", "retrieve", "availability"}:
            return [permissions.AllowAny()]
        return super().get_permissions()

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if is_staff_user(self.request.user):
            return qs
        return qs.filter(is_active=True)

    @action(detail=False, methods=["get"], url_path="availability")
    def availability(self, request):  # type: ignore
        query = RoomAvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        start_date = query.validated_data["start_date"]
        end_date = query.validated_data["end_date"]
        guests = query.validated_data["guests"]

        rooms = available_rooms(start_date, end_date, guests)
        return Response(
            {
                "available_rooms": RoomSerializer(rooms, many=True).data,
                "total_rooms": Room.objects.filter(is_active=True).count(),
                "requested_dates": {
                    "start_date": start_date.isoformat(),
                    "end_date": end_date.isoformat(),
                    "guests": guests,
                },
            }
        )


class RoomCalendarMixin:
    """Loads the room from the URL for nested calendar endpoints."""

    room_lookup_url_kwarg = "room_id"
    permission_classes = [IsStaffMember]

    def initial(self, request, *args, **kwargs):  # type: ignore
        super().initial(request, *args, **kwargs)
        room_id = kwargs.get(self.room_lookup_url_kwarg)
        self.room_object = get_object_or_404(Room, pk=room_id)

    def get_room(self) -> Room:
        return self.room_object

    def get_serializer_context(self):  # type: ignore
        context = super().get_serializer_context()
        context["room"] = getattr(self, "room_object", None)
        return context


class RoomBlockViewSet(RoomCalendarMixin, viewsets.ModelViewSet):
    """Manual blocks that take a room off sale."""

    serializer_class = RoomBlockSerializer
    queryset = RoomBlock.objects.select_related("room", "created_by").all()

    def get_permissions(self):  # type: ignore
        if self.action in {"list", "retrieve"}:
            return [IsStaffMember()]
        return [IsAdminRole()]

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return RoomBlockWriteSerializer
        return RoomBlockSerializer

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset().filter(room=self.get_room())
        start = self.request.query_params.get("start")
        end = self.request.query_params.get("end")
        if start:
            qs = qs.filter(end_date__gt=start)
        if end:
            qs = qs.filter(start_date__lt=end)
        return qs.order_by("start_date")

    def _validate_overlap(self, start_date: date, end_date: date, exclude_id: int | None = None) -> None:
        room = self.get_room()
        if room_blocks(room, start_date, end_date, exclude_block_id=exclude_id).exists():
            raise serializers.ValidationError("The selected dates overlap an existing block for this room.")
        if room_bookings(room, start_date, end_date).exists() or room_camp_assignments(
            room, start_date, end_date
        ).exists():
            raise serializers.ValidationError("The selected dates overlap an active booking for this room.")

    def _lock_room(self) -> None:
        lock_queryset_if_possible(Room.objects.filter(pk=self.get_room().pk)).first()

    @transaction.atomic
    def perform_create(self, serializer):  # type: ignore
        self._lock_room()
        self._validate_overlap(serializer.validated_data["start_date"], serializer.validated_data["end_date"])
        serializer.save(room=self.get_room(), created_by=self.request.user)

    @transaction.atomic
    def perform_update(self, serializer):  # type: ignore
        instance: RoomBlock = serializer.instance
        start_date = serializer.validated_data.get("start_date", instance.start_date)
        end_date = serializer.validated_data.get("end_date", instance.end_date)
        self._lock_room()
        self._validate_overlap(start_date, end_date, exclude_id=instance.id)
        serializer.save()

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)
        read_serializer = RoomBlockSerializer(serializer.instance, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        read_serializer = RoomBlockSerializer(serializer.instance, context=self.get_serializer_context())
        return Response(read_serializer.data, status=status.HTTP_200_OK)
