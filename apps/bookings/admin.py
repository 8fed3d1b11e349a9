"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "trip",
        "user",
        "status",
        "start_date",
        "end_date",
        "guests",
        "total_price",
        "created_at",
    )
    list_filter = ("status", "start_date")
    search_fields = ("trip__title", "user__email", "user__name")
    readonly_fields = (
        "created_at",
        "updated_at",
        "cancelled_at",
        "total_price",
    )
