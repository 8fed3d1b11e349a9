"""Serializers for the booking domain."""

from __future__ import annotations

from datetime import date

from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.users.serializers import CustomerInfoSerializer

from .models import Booking
from .services import BookingRequest

MAX_GUESTS_PER_REQUEST = 20

GUESTS_ERRORS = {
    "min_value": "At least 1 guest is required",
    "max_value": f"Maximum {MAX_GUESTS_PER_REQUEST} guests allowed",
}


class BookingDatesMixin:
    """Shared date rules: start today or later, end not before start."""

    def validate_start_date(self, value: date) -> date:  # type: ignore
        if value < timezone.localdate():
            raise serializers.ValidationError("Start date must be today or in the future")
        return value

    def validate(self, attrs):  # type: ignore
        start_date = attrs.get("start_date")
        end_date = attrs.get("end_date")
        if start_date and end_date and end_date < start_date:
            raise serializers.ValidationError({"end_date": "End date must be after or equal to start date"})
        return attrs


class AvailabilityCheckSerializer(BookingDatesMixin, serializers.Serializer):
    trip_id = serializers.UUIDField()
    start_date = serializers.DateField()
    end_date = serializers.DateField(required=False, allow_null=True)
    guests = serializers.IntegerField(min_value=1, max_value=MAX_GUESTS_PER_REQUEST, error_messages=GUESTS_ERRORS)


class BookingCreateSerializer(BookingDatesMixin, serializers.Serializer):
    """Booking form submitted by a customer, with or without an account."""

    trip_id = serializers.UUIDField(error_messages={"invalid": "Invalid trip ID format"})
    start_date = serializers.DateField()
    end_date = serializers.DateField(required=False, allow_null=True)
    guests = serializers.IntegerField(min_value=1, max_value=MAX_GUESTS_PER_REQUEST, error_messages=GUESTS_ERRORS)
    customer_info = CustomerInfoSerializer()
    special_requests = serializers.CharField(
        required=False,
        allow_blank=True,
        max_length=500,
        error_messages={"max_length": "Special requests must be less than 500 characters"},
    )

    def to_booking_request(self) -> BookingRequest:
        data = self.validated_data
        customer = data["customer_info"]
        return BookingRequest(
            trip_id=data["trip_id"],
            start_date=data["start_date"],
            end_date=data.get("end_date"),
            guests=data["guests"],
            customer_name=customer["name"],
            customer_email=customer["email"],
            customer_phone=customer["phone"],
            special_requests=data.get("special_requests", ""),
        )


class BookingUpdateSerializer(BookingDatesMixin, serializers.Serializer):
    guests = serializers.IntegerField(
        required=False, min_value=1, max_value=MAX_GUESTS_PER_REQUEST, error_messages=GUESTS_ERRORS
    )
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate_start_date(self, value: date) -> date:  # type: ignore
        if value <= timezone.localdate():
            raise serializers.ValidationError("Start date must be in the future")
        return value


class BookingTripSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    title = serializers.CharField()
    location_name = serializers.CharField()
    images = serializers.ListField(child=serializers.CharField())
    boat_type = serializers.CharField()
    duration = serializers.IntegerField()


class BookingSerializer(serializers.ModelSerializer):
    """Detailed booking for confirmation pages and the user's booking list."""

    trip = BookingTripSerializer(read_only=True)
    customer_info = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "trip",
            "start_date",
            "end_date",
            "guests",
            "total_price",
            "status",
            "special_requests",
            "customer_info",
            "cancelled_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_customer_info(self, obj: Booking) -> dict[str, str]:
        return {
            "name": obj.user.name,
            "email": obj.user.email,
            "phone": obj.user.phone,
        }
