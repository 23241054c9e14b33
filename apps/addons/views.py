"""Add-on catalogue API."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, viewsets  # type: ignore

from apps.users.permissions import IsAdminRole, is_staff_user

from .models import AddOn
from .serializers import AddOnSerializer


class AddOnViewSet(viewsets.ModelViewSet):
    """Active add-ons are public, ordered by category then name."""

    queryset = AddOn.objects.order_by("category", "name")
    serializer_class = AddOnSerializer
    permission_classes = [IsAdminRole]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["category", "is_active"]
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
