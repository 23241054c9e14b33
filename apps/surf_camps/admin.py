"""Admin registration for surf camps."""

from __future__ import annotations

from django.contrib import admin

from .models import SurfCamp


@admin.register(SurfCamp)
class SurfCampAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "category",
        "start_date",
        "end_date",
        "level",
        "location",
        "max_participants",
        "price_per_person",
        "is_active",
    )
    list_filter = ("category", "level", "is_active", "location")
    search_fields = ("name", "location", "description")
    filter_horizontal = ("rooms",)
    readonly_fields = ("created_at", "updated_at")
