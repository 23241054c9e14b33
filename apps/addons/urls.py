from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import AddOnViewSet

router = SimpleRouter()
router.register(r"", AddOnViewSet, basename="add-on")

urlpatterns = [
    path("", include(router.urls)),
]
