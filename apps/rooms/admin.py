"""Admin registrations for the rooms domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Room, RoomBlock


class RoomBlockInline(admin.TabularInline):
    model = RoomBlock
    extra = 0
    fields = ("start_date", "end_date", "block_type", "reason")


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "booking_type",
        "capacity",
        "price_standard",
        "price_off_season",
        "is_active",
        "sort_order",
    )
    list_filter = ("booking_type", "is_active")
    search_fields = ("name", "slug", "description")
    prepopulated_fields = {"slug": ("name",)}
    inlines = (RoomBlockInline,)
    readonly_fields = ("created_at", "updated_at")


@admin.register(RoomBlock)
class RoomBlockAdmin(admin.ModelAdmin):
    list_display = ("room", "start_date", "end_date", "block_type", "created_by")
    list_filter = ("block_type", "room")
    search_fields = ("room__name", "reason")
