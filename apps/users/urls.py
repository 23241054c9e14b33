"""URL declarations for the users app."""

from __future__ import annotations

from django.urls import path, include  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import StaffUserViewSet

router = SimpleRouter()
router.register(r'', StaffUserViewSet, basename='user')

urlpatterns = [
    path('', include(router.urls)),
]
