"""Activity catalogue API."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, viewsets  # type: ignore

from apps.users.permissions import IsAdminRole, is_staff_user

from .filters import ActivityFilterSet
from .models import Activity
from .serializers import ActivitySerializer


class ActivityViewSet(viewsets.ModelViewSet):
    """Active activities are public, ordered by display order then title."""

    queryset = Activity.objects.order_by("display_order", "title")
    serializer_class = ActivitySerializer
    permission_classes = [IsAdminRole]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ActivityFilterSet
    lookup_value_regex = r"\d+"

    def get_permissions(self):  # type: ignore
        if self.action in {"list", "retrieve"}:
            return [permissions.AllowAny()]
        return super().get_permissions()

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if is_staff_user(self.request.user):
            return qs
        return qs.filter(is_active=True)
