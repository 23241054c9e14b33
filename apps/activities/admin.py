from __future__ import annotations

from django.contrib import admin

from .models import Activity


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = ("title", "category", "availability_tier", "display_order", "is_active")
    list_filter = ("category", "availability_tier", "is_active")
    list_editable = ("display_order",)
    search_fields = ("title", "description")
