"""API views for submitting and managing reviews."""

from __future__ import annotations

import structlog
from django.apps import apps  # type: ignore
from django.conf import settings  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.throttling import BaseThrottle  # type: ignore

from .models import Review
from .serializers import ReviewCreateSerializer, ReviewUpdateSerializer, UserReviewSerializer
from .services import ReviewRejectedError, submit_review, update_review

logger = structlog.get_logger(__name__)


def get_client_ip(request) -> str:  # type: ignore
    """Client address as DRF throttles resolve it; forwarded hops count only behind ``NUM_PROXIES``."""
    return BaseThrottle().get_ident(request) or "unknown"


def _rejected(exc: ReviewRejectedError) -> Response:
    return Response(
        {"detail": str(exc), "reasons": exc.result.reasons},
        status=status.HTTP_400_BAD_REQUEST,
    )


class ReviewViewSet(mixins.CreateModelMixin, viewsets.GenericViewSet):
    """Review submission, limited per client IP and screened by moderation."""

    queryset = Review.objects.all()
    serializer_class = ReviewCreateSerializer
    permission_classes = [permissions.IsAuthenticated]

    def create(self, request, *args, **kwargs):  # type: ignore
        ip_address = get_client_ip(request)
        limiter = apps.get_app_config("reviews").rate_limiter
        limit = limiter.check(
            f"review:{ip_address}",
            settings.REVIEW_RATE_LIMIT_ATTEMPTS,
            settings.REVIEW_RATE_LIMIT_WINDOW_MINUTES,
        )
        if not limit.allowed:
            logger.warning("review.rate_limited", ip=ip_address, reset_time=limit.reset_time.isoformat())
            return Response(
                {
                    "detail": "Too many review submissions. Please try again later.",
                    "reset_time": limit.reset_time.isoformat(),
                },
                status=status.HTTP_429_TOO_MANY_REQUESTS,
            )

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            review = submit_review(user=request.user, **serializer.validated_data)
        except ReviewRejectedError as exc:
            logger.warning("review.rejected", ip=ip_address, user_id=str(request.user.pk), reasons=exc.result.reasons)
            return _rejected(exc)

        return Response(
            {
                "review": UserReviewSerializer(review).data,
                "needs_approval": not review.is_approved,
                "remaining_attempts": limit.remaining_attempts,
            },
            status=status.HTTP_201_CREATED,
        )


class UserReviewViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """The signed-in customer's reviews: list, edit, delete."""

    serializer_class = UserReviewSerializer
    permission_classes = [permissions.IsAuthenticated]
    pagination_class = None

    def get_queryset(self):  # type: ignore
        return Review.objects.select_related("trip").filter(user=self.request.user)

    def partial_update(self, request, *args, **kwargs):  # type: ignore
        review: Review = self.get_object()  # type: ignore
        serializer = ReviewUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            review = update_review(review, **serializer.validated_data)
        except ReviewRejectedError as exc:
            return _rejected(exc)
        return Response({"review": UserReviewSerializer(review).data})

    def destroy(self, request, *args, **kwargs):  # type: ignore
        review = self.get_object()
        review.delete()
        return Response({"message": "Review deleted successfully"}, status=status.HTTP_200_OK)
