"""Admin registration for trips."""

from __future__ import annotations

from django.contrib import admin

from .models import FishingType, Trip


@admin.register(FishingType)
class FishingTypeAdmin(admin.ModelAdmin):
    search_fields = ("name",)


@admin.register(Trip)
class TripAdmin(admin.ModelAdmin):
    list_display = (
        "title",
        "location_name",
        "boat_type",
        "duration",
        "base_price",
        "max_guests",
        "is_active",
        "created_at",
    )
    list_filter = ("is_active", "boat_type", "fishing_types")
    search_fields = ("title", "location_name", "boat_type")
    filter_horizontal = ("fishing_types",)
    readonly_fields = ("created_at", "updated_at")
