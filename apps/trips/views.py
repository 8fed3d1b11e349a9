"""Trip API views: search, detail, featured list, filter options and reviews."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, serializers, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.reviews.serializers import ReviewSerializer, TripReviewsQuerySerializer
from apps.reviews.services import calculate_trip_rating_stats, list_trip_reviews
from shared.api.pagination import PagePagination, ReviewPagination

from .filters import TripFilterSet
from .models import Trip
from .serializers import TripSerializer
from .services import MAX_FEATURED_LIMIT, get_featured_trips, get_filter_options


class FeaturedQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(required=False, default=8, min_value=1, max_value=MAX_FEATURED_LIMIT)


class TripViewSet(viewsets.ReadOnlyModelViewSet):
    """Public catalogue of active trips."""

    serializer_class = TripSerializer
    permission_classes = [permissions.AllowAny]
    pagination_class = PagePagination
    filter_backends = [DjangoFilterBackend]
    filterset_class = TripFilterSet

    def get_queryset(self):  # type: ignore
        return Trip.objects.active().with_stats().prefetch_related("fishing_types")

    @action(detail=False, methods=["get"])
    def featured(self, request):  # type: ignore
        query = FeaturedQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        return Response({"results": get_featured_trips(query.validated_data["limit"])})

    @action(detail=False, methods=["get"], url_path="filters", filter_backends=[], pagination_class=None)
    def filter_options(self, request):  # type: ignore
        return Response(get_filter_options())

    @action(detail=True, methods=["get"], filter_backends=[], pagination_class=ReviewPagination)
    def reviews(self, request, pk=None):  # type: ignore
        trip = self.get_object()
        query = TripReviewsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        reviews = list_trip_reviews(
            trip,
            sort_by=query.validated_data["sort_by"],
            rating=query.validated_data.get("rating"),
        )
        page = self.paginate_queryset(reviews)
        response = self.get_paginated_response(ReviewSerializer(page, many=True).data)
        response.data["stats"] = calculate_trip_rating_stats(trip)
        return response
