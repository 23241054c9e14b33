"""URL routing for dashboard endpoints."""

from django.urls import path  # type: ignore

from .views import OverviewView

urlpatterns = [
    path("overview/", OverviewView.as_view(), name="dashboard-overview"),
]
