"""Read-side services for trips: featured list and search filter options.

Both results change rarely and are requested on every landing/search page,
so they are kept in the Django cache for ``TRIP_CACHE_TTL`` seconds and
dropped by the signal handlers in ``signals`` when trip data changes.
"""

from __future__ import annotations

from typing import Any

from django.conf import settings  # type: ignore
from django.core.cache import cache  # type: ignore
from django.db.models import Max, Min  # type: ignore

from .models import FishingType, Trip
from .serializers import TripSerializer

FEATURED_CACHE_KEY = "trips:featured:{limit}"
FILTER_OPTIONS_CACHE_KEY = "trips:filter-options"

DEFAULT_PRICE_RANGE = (0, 1000)
MAX_FEATURED_LIMIT = 50


def get_featured_trips(limit: int = 8) -> list[dict[str, Any]]:
    """Most booked trips first, ties broken by review count."""

    def build() -> list[dict[str, Any]]:
        trips = (
            Trip.objects.active()
            .with_stats()
            .prefetch_related("fishing_types")
            .order_by("-booking_count", "-review_count", "-created_at")[:limit]
        )
        return [dict(item) for item in TripSerializer(trips, many=True).data]

    return cache.get_or_set(FEATURED_CACHE_KEY.format(limit=limit), build, settings.TRIP_CACHE_TTL)


def get_filter_options() -> dict[str, Any]:
    """Distinct values the search sidebar can filter on."""

    def build() -> dict[str, Any]:
        trips = Trip.objects.active()
        prices = trips.aggregate(min_price=Min("base_price"), max_price=Max("base_price"))
        min_price = float(prices["min_price"]) if prices["min_price"] is not None else DEFAULT_PRICE_RANGE[0]
        max_price = float(prices["max_price"]) if prices["max_price"] is not None else DEFAULT_PRICE_RANGE[1]
        return {
            "boat_types": list(trips.order_by("boat_type").values_list("boat_type", flat=True).distinct()),
            "fishing_types": list(
                FishingType.objects.filter(trips__is_active=True)
                .order_by("name")
                .values_list("name", flat=True)
                .distinct()
            ),
            "price_range": [min_price, max_price],
            "durations": list(trips.order_by("duration").values_list("duration", flat=True).distinct()),
        }

    return cache.get_or_set(FILTER_OPTIONS_CACHE_KEY, build, settings.TRIP_CACHE_TTL)


def invalidate_trip_caches() -> None:
    cache.delete(FILTER_OPTIONS_CACHE_KEY)
    cache.delete_many([FEATURED_CACHE_KEY.format(limit=limit) for limit in range(1, MAX_FEATURED_LIMIT + 1)])
