"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking, BookingAddOn, RoomAssignment, SurfCampAssignment


class BookingAddOnInline(admin.TabularInline):
    model = BookingAddOn
    extra = 0
    autocomplete_fields = ("add_on",)


class RoomAssignmentInline(admin.TabularInline):
    model = RoomAssignment
    extra = 0
    raw_id_fields = ("client",)


class SurfCampAssignmentInline(admin.TabularInline):
    model = SurfCampAssignment
    extra = 0
    raw_id_fields = ("client",)


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "booking_code",
        "booking_type",
        "room",
        "surf_camp",
        "status",
        "payment_status",
        "check_in",
        "check_out",
        "guests",
        "total_amount",
        "created_at",
    )
    list_filter = ("status", "payment_status", "booking_type", "source", "check_in")
    search_fields = ("booking_code", "clients__email", "clients__last_name")
    filter_horizontal = ("clients",)
    inlines = (BookingAddOnInline, RoomAssignmentInline, SurfCampAssignmentInline)
    readonly_fields = (
        "booking_code",
        "subtotal",
        "taxes",
        "fees",
        "total_amount",
        "is_peak_season",
        "expires_at",
        "cancelled_at",
        "created_at",
        "updated_at",
    )


@admin.register(RoomAssignment)
class RoomAssignmentAdmin(admin.ModelAdmin):
    list_display = ("booking", "client", "room", "check_in", "check_out", "status")
    list_filter = ("status", "room")
    search_fields = ("booking__booking_code", "client__email")


@admin.register(SurfCampAssignment)
class SurfCampAssignmentAdmin(admin.ModelAdmin):
    list_display = ("booking", "client", "surf_camp", "room", "status")
    list_filter = ("status", "surf_camp")
    search_fields = ("booking__booking_code", "client__email")
