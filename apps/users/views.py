"""Staff account management API."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from .permissions import IsSuperAdmin
from .serializers import StaffUserWriteSerializer, UserSerializer

User = get_user_model()


class StaffUserViewSet(viewsets.ModelViewSet):
    """Superadmins create, edit and deactivate dashboard accounts."""

    queryset = User.objects.all()
    permission_classes = [IsSuperAdmin]

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return StaffUserWriteSerializer
        return UserSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        user = self.get_object()
        if user.pk == request.user.pk:
            return Response(
                {"detail": "You cannot deactivate your own account."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        user.is_active = False
        user.save(update_fields=["is_active"])
        return Response(status=status.HTTP_204_NO_CONTENT)
