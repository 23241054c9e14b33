"""URL routing for surf camps."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import SurfCampViewSet

router = SimpleRouter()
router.register(r"", SurfCampViewSet, basename="surf-camp")

urlpatterns = [
    path("", include(router.urls)),
]
