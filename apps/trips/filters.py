"""FilterSet definitions for trip search and listing."""

from __future__ import annotations

import django_filters  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.bookings.models import Booking
from apps.bookings.services import conflicting_bookings_filter
from shared.domain.value_objects import DateRange

from .models import Trip


def _csv(value) -> list[str]:
    return [item.strip() for item in str(value).split(",") if item.strip()]


class TripFilterSet(django_filters.FilterSet):
    """FilterSet for Trip with the filters offered by the search page."""

    location = django_filters.CharFilter(field_name="location_name", lookup_expr="icontains")
    guests = django_filters.NumberFilter(field_name="max_guests", lookup_expr="gte")
    price_min = django_filters.NumberFilter(field_name="base_price", lookup_expr="gte")
    price_max = django_filters.NumberFilter(field_name="base_price", lookup_expr="lte")

    # CSV lists: any of the selected values matches
    boat_type = django_filters.CharFilter(method="filter_boat_type")
    fishing_type = django_filters.CharFilter(method="filter_fishing_type")
    duration = django_filters.CharFilter(method="filter_duration")

    # Trips with an active booking blocking the range are hidden
    start_date = django_filters.DateFilter(method="filter_available")
    end_date = django_filters.DateFilter(method="filter_end_date")

    ordering = django_filters.OrderingFilter(
        fields=(
            ("base_price", "price"),
            ("average_rating", "rating"),
            ("duration", "duration"),
            ("booking_count", "popularity"),
            ("created_at", "created_at"),
        ),
    )

    class Meta:
        model = Trip
        fields = ["location", "guests"]

    def filter_boat_type(self, queryset, name, value):  # type: ignore
        values = _csv(value)
        if not values:
            return queryset
        return queryset.filter(boat_type__in=values)

    def filter_fishing_type(self, queryset, name, value):  # type: ignore
        names = _csv(value)
        if not names:
            return queryset
        return queryset.filter(fishing_types__name__in=names).distinct()

    def filter_duration(self, queryset, name, value):  # type: ignore
        try:
            hours = [int(x) for x in _csv(value)]
        except ValueError:
            raise serializers.ValidationError({"duration": "Duration must be a list of whole hours"})
        if not hours:
            return queryset
        return queryset.filter(duration__in=hours)

    def filter_available(self, queryset, name, value):  # type: ignore
        end_date = self.form.cleaned_data.get("end_date")
        try:
            requested = DateRange(value, end_date or value)
        except ValueError:
            raise serializers.ValidationError({"end_date": "End date must be after or equal to start date"})
        blocked = Booking.objects.filter(conflicting_bookings_filter(requested)).values("trip_id")
        return queryset.exclude(pk__in=blocked)

    def filter_end_date(self, queryset, name, value):  # type: ignore
        # Consumed by filter_available
        return queryset
