"""Client management API for staff."""

from __future__ import annotations

import logging

from django.db.models import Count  # type: ignore
from django.http import HttpResponse  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import filters, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.models import Booking
from apps.users.permissions import IsAdminRole, IsStaffMember

from . import exports
from .models import Client
from .serializers import ClientSerializer

logger = logging.getLogger(__name__)


class ClientViewSet(viewsets.ModelViewSet):
    serializer_class = ClientSerializer
    permission_classes = [IsStaffMember]
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ["first_name", "last_name", "email", "phone"]
    ordering_fields = ["last_name", "first_name", "email", "created_at", "last_booking_date"]
    lookup_value_regex = r"\d+"

    def get_queryset(self):  # type: ignore
        return Client.objects.annotate(booking_count=Count("bookings", distinct=True))

    def get_permissions(self):  # type: ignore
        if self.action == "erase":
            return [IsAdminRole()]
        return super().get_permissions()

    @action(detail=False, methods=["get"])
    def export(self, request):  # type: ignore
        clients = self.filter_queryset(self.get_queryset())
        filename = f"clients-{timezone.localdate().isoformat()}.csv"
        response = HttpResponse(exports.clients_to_csv(clients), content_type="text/csv; charset=utf-8")
        response["Content-Disposition"] = f'attachment; filename="{filename}"'
        logger.info("Client CSV export by user %s", request.user.pk)
        return response

    @action(detail=True, methods=["get"], url_path="gdpr-export")
    def gdpr_export(self, request, pk=None):  # type: ignore
        client: Client = self.get_object()
        logger.info("GDPR export of client %s by user %s", client.pk, request.user.pk)
        return Response(exports.gdpr_export(client))

    @action(detail=True, methods=["post"])
    def erase(self, request, pk=None):  # type: ignore
        client: Client = self.get_object()
        if client.is_anonymized:
            return Response({"detail": "Client has already been erased."}, status=status.HTTP_400_BAD_REQUEST)
        open_bookings = client.bookings.filter(
            status__in=Booking.BLOCKING_STATUSES,
            check_out__gte=timezone.localdate(),
        )
        if open_bookings.exists():
            return Response(
                {"detail": "Client has upcoming bookings and cannot be erased yet."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        client.anonymize()
        logger.info("Client %s erased by user %s", client.pk, request.user.pk)
        return Response({"id": client.pk, "is_anonymized": True})
