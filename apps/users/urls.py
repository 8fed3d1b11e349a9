"""URL declarations for the signed-in user's own bookings and reviews."""

from __future__ import annotations

from django.urls import path, include  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from apps.bookings.views import UserBookingViewSet
from apps.reviews.views import UserReviewViewSet

router = DefaultRouter()
router.register(r'bookings', UserBookingViewSet, basename='my-booking')
router.register(r'reviews', UserReviewViewSet, basename='my-review')

urlpatterns = [
    path('', include(router.urls)),
]
