from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import ActivityViewSet

router = SimpleRouter()
router.register(r"", ActivityViewSet, basename="activity")

urlpatterns = [
    path("", include(router.urls)),
]
