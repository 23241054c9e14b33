"""URL configuration for the Heiwa House booking backend.

The `urlpatterns` list routes URLs to views. It includes the Django admin,
the admin API routers of each app, the public availability checks and the
WordPress plugin endpoints.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView  # type: ignore

from apps.bookings.views import AvailabilityView, DateAvailabilityView

urlpatterns = [
    path('admin/', admin.site.urls),
    # Application URLs
    path('api/auth/', include(('apps.users.auth_urls', 'auth'), namespace='auth')),
    path('api/users/', include('apps.users.urls')),
    path('api/rooms/', include('apps.rooms.urls')),
    path('api/surf-camps/', include('apps.surf_camps.urls')),
    path('api/add-ons/', include('apps.addons.urls')),
    path('api/activities/', include('apps.activities.urls')),
    path('api/clients/', include('apps.clients.urls')),
    path('api/bookings/', include('apps.bookings.urls')),
    path('api/availability/', AvailabilityView.as_view(), name='availability'),
    path('api/dates/availability/', DateAvailabilityView.as_view(), name='date-availability'),
    path('api/dashboard/', include('apps.dashboard.urls')),
    # WordPress booking widget plugin
    path('api/wordpress/', include('apps.wordpress.urls', namespace='wordpress')),
    # API schema and docs
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
]
