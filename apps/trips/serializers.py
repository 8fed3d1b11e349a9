"""Serializers for trips."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Trip


class TripSerializer(serializers.ModelSerializer):
    """Trip card/detail payload; expects a queryset annotated with ``with_stats``."""

    fishing_types = serializers.SlugRelatedField(many=True, read_only=True, slug_field="name")
    rating = serializers.SerializerMethodField()
    review_count = serializers.IntegerField(read_only=True, default=0)
    booking_count = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = Trip
        fields = [
            "id",
            "title",
            "description",
            "location_name",
            "latitude",
            "longitude",
            "duration",
            "base_price",
            "images",
            "inclusions",
            "boat_type",
            "fishing_types",
            "max_guests",
            "rating",
            "review_count",
            "booking_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_rating(self, obj: Trip) -> float:
        average = getattr(obj, "average_rating", None)
        return round(float(average), 1) if average is not None else 0.0
