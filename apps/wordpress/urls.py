"""URL routing for the WordPress plugin API."""

from django.urls import path  # type: ignore

from .views import (
    BookingCreateView,
    CampAvailabilityView,
    DateAvailabilityView,
    RoomAvailabilityView,
    RoomListView,
    SurfCampListView,
)

app_name = "wordpress"

urlpatterns = [
    path("surf-camps/", SurfCampListView.as_view(), name="surf-camps"),
    path("rooms/", RoomListView.as_view(), name="rooms"),
    path("rooms/availability/", RoomAvailabilityView.as_view(), name="rooms-availability"),
    path("availability/", CampAvailabilityView.as_view(), name="availability"),
    path("dates/availability/", DateAvailabilityView.as_view(), name="dates-availability"),
    path("bookings/", BookingCreateView.as_view(), name="bookings"),
]
