"""Serializers for reviews.

Provide read serializers for public and personal review lists and write
serializers for submitting and editing a review. The reviewing user is
taken from the request in the view.
"""

from __future__ import annotations

from datetime import date

from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.trips.models import Trip

from .models import Review
from .services import REVIEW_ORDERING

RATING_ERRORS = {
    "min_value": "Rating must be at least 1 star",
    "max_value": "Rating cannot exceed 5 stars",
}


class ReviewCreateSerializer(serializers.Serializer):
    trip_id = serializers.PrimaryKeyRelatedField(
        queryset=Trip.objects.active(),
        source="trip",
        pk_field=serializers.UUIDField(),
        error_messages={"does_not_exist": "Trip not found"},
    )
    rating = serializers.IntegerField(min_value=1, max_value=5, error_messages=RATING_ERRORS)
    comment = serializers.CharField(
        required=False,
        allow_blank=True,
        max_length=1000,
        error_messages={"max_length": "Comment must be less than 1000 characters"},
    )
    images = serializers.ListField(
        child=serializers.URLField(error_messages={"invalid": "Invalid image URL"}),
        required=False,
        max_length=5,
        error_messages={"max_length": "Maximum 5 images allowed"},
    )
    trip_date = serializers.DateField()

    def validate_trip_date(self, value: date) -> date:  # type: ignore
        if value > timezone.localdate():
            raise serializers.ValidationError("Trip date cannot be in the future")
        return value


class ReviewUpdateSerializer(serializers.Serializer):
    rating = serializers.IntegerField(
        min_value=1,
        max_value=5,
        error_messages={
            "required": "Rating must be between 1 and 5",
            "min_value": "Rating must be between 1 and 5",
            "max_value": "Rating must be between 1 and 5",
        },
    )
    comment = serializers.CharField(
        required=False,
        allow_blank=True,
        max_length=1000,
        error_messages={"max_length": "Comment must be less than 1000 characters"},
    )


class TripReviewsQuerySerializer(serializers.Serializer):
    sort_by = serializers.ChoiceField(choices=list(REVIEW_ORDERING), required=False, default="newest")
    rating = serializers.IntegerField(required=False, min_value=1, max_value=5)


class ReviewerSerializer(serializers.Serializer):
    name = serializers.CharField()


class ReviewSerializer(serializers.ModelSerializer):
    """Public review as shown on a trip page."""

    user = ReviewerSerializer(read_only=True)

    class Meta:
        model = Review
        fields = ["id", "rating", "comment", "images", "trip_date", "user", "created_at"]
        read_only_fields = fields


class ReviewTripSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    title = serializers.CharField()
    location_name = serializers.CharField()


class UserReviewSerializer(serializers.ModelSerializer):
    """The author's view of their own review, including moderation state."""

    trip = ReviewTripSerializer(read_only=True)

    class Meta:
        model = Review
        fields = [
            "id",
            "trip",
            "rating",
            "comment",
            "images",
            "trip_date",
            "is_approved",
            "moderation_reasons",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
