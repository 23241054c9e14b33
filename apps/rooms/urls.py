"""URL routing for the rooms domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import RoomBlockViewSet, RoomViewSet

router = SimpleRouter()
router.register(r"", RoomViewSet, basename="room")

block_list = RoomBlockViewSet.as_view({"get": "list", "post": "create"})
block_detail = RoomBlockViewSet.as_view(
    {"patch": "partial_update", "put": "update", "delete": "destroy", "get": "retrieve"}
)

urlpatterns = [
    path("<int:room_id>/blocks/", block_list, name="room-block-list"),
    path("<int:room_id>/blocks/<int:pk>/", block_detail, name="room-block-detail"),
    path("", include(router.urls)),
]
