"""Surf camp API views."""

from __future__ import annotations

from django.utils import timezone  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.exceptions import BookingError
from apps.users.permissions import IsAdminRole, IsStaffMember, is_staff_user

from .filters import SurfCampFilterSet
from .models import SurfCamp
from .serializers import SurfCampAssignmentWriteSerializer, SurfCampSerializer
from .services import active_assignments, replace_room_assignments


def _assignment_payload(assignments) -> list[dict]:
    return [
        {
            "id": assignment.id,
            "booking_id": assignment.booking_id,
            "booking_code": assignment.booking.booking_code,
            "client_id": assignment.client_id,
            "client_name": assignment.client.full_name,
            "client_email": assignment.client.email,
            "room_id": assignment.room_id,
            "room_name": assignment.room.name if assignment.room else None,
            "status": assignment.status,
        }
        for assignment in assignments
    ]


class SurfCampViewSet(viewsets.ModelViewSet):
    """Public surf week catalogue; admins manage camps and room assignments."""

    queryset = SurfCamp.objects.prefetch_related("rooms").all()
    serializer_class = SurfCampSerializer
    permission_classes = [IsAdminRole]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = SurfCampFilterSet
    ordering_fields = ["start_date", "price_per_person", "name"]
    lookup_value_regex = r"\d+"

    def get_permissions(self):  # type: ignore
        if self.action in {"list", "retrieve"}:
            return [permissions.AllowAny()]
        if self.action == "assignments" and self.request.method in permissions.SAFE_METHODS:
            return [IsStaffMember()]
        return super().get_permissions()

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if is_staff_user(self.request.user):
            return qs
        return qs.filter(is_active=True)

    @action(detail=True, methods=["get", "post"])
    def assignments(self, request, pk=None):  # type: ignore
        camp: SurfCamp = self.get_object()
        if request.method == "GET":
            return Response(
                {
                    "surf_camp_id": camp.id,
                    "spots_remaining": camp.spots_remaining(),
                    "assignments": _assignment_payload(active_assignments(camp)),
                }
            )

        serializer = SurfCampAssignmentWriteSerializer(data=request.data, context={"surf_camp": camp})
        serializer.is_valid(raise_exception=True)
        try:
            assignments = replace_room_assignments(camp, serializer.validated_data["assignments"])
        except BookingError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(
            {
                "surf_camp_id": camp.id,
                "updated_at": timezone.now().isoformat(),
                "assignments": _assignment_payload(assignments),
            }
        )
