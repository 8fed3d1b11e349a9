"""Admin registration for reviews, including the manual approval queue."""

from __future__ import annotations

from django.contrib import admin

from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("trip", "user", "rating", "is_approved", "trip_date", "created_at")
    list_filter = ("is_approved", "rating")
    search_fields = ("comment", "trip__title", "user__email")
    readonly_fields = ("moderation_reasons", "created_at", "updated_at")
    actions = ["approve_reviews"]

    @admin.action(description="Approve selected reviews")
    def approve_reviews(self, request, queryset):  # type: ignore
        updated = queryset.update(is_approved=True)
        self.message_user(request, f"{updated} review(s) approved.")
