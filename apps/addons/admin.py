from __future__ import annotations

from django.contrib import admin

from .models import AddOn


@admin.register(AddOn)
class AddOnAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "price", "max_quantity", "is_active")
    list_filter = ("category", "is_active")
    search_fields = ("name", "description")
