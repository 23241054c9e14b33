from __future__ import annotations

from django.contrib import admin

from .models import Client


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ("last_name", "first_name", "email", "phone", "surf_experience", "last_booking_date")
    list_filter = ("surf_experience", "marketing_consent", "is_anonymized")
    search_fields = ("first_name", "last_name", "email", "phone")
    readonly_fields = ("last_booking_date", "is_anonymized", "created_at", "updated_at")
