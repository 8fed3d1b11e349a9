"""Review services: submission with moderation, listing and rating statistics."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from django.db.models import Count  # type: ignore

from apps.trips.models import Trip

from .models import Review
from .moderation import (
    ModerationResult,
    moderate_review_content,
    should_auto_reject,
    should_require_manual_review,
)

logger = logging.getLogger(__name__)

REVIEW_ORDERING = {
    "newest": ("-created_at",),
    "oldest": ("created_at",),
    "highest": ("-rating", "-created_at"),
    "lowest": ("rating", "-created_at"),
}


class ReviewRejectedError(Exception):
    """Raised when moderation rejects a comment outright."""

    def __init__(self, result: ModerationResult) -> None:
        self.result = result
        super().__init__("Review content violates community guidelines")


@dataclass
class ModerationDecision:
    approved: bool
    reasons: list[str] = field(default_factory=list)


def moderate(comment: str) -> ModerationDecision:
    """Run the moderation scorer and map the score to approve/hold.

    Raises ``ReviewRejectedError`` when the comment must not be stored.
    """
    result = moderate_review_content(comment or "")
    if should_auto_reject(result):
        raise ReviewRejectedError(result)
    if should_require_manual_review(result):
        return ModerationDecision(approved=False, reasons=result.reasons)
    return ModerationDecision(approved=True, reasons=result.reasons)


def submit_review(*, user, trip: Trip, rating: int, trip_date, comment: str = "", images=None) -> Review:
    decision = moderate(comment)
    review = Review.objects.create(
        trip=trip,
        user=user,
        rating=rating,
        comment=comment,
        images=images or [],
        trip_date=trip_date,
        is_approved=decision.approved,
        moderation_reasons=decision.reasons,
    )
    if not decision.approved:
        logger.info("Review %s held for manual approval: %s", review.id, "; ".join(decision.reasons))
    return review


def update_review(review: Review, *, rating: int, comment: Optional[str] = None) -> Review:
    """Change rating/comment; a changed comment goes through moderation again."""
    update_fields = ["rating", "updated_at"]
    review.rating = rating
    if comment is not None and comment != review.comment:
        decision = moderate(comment)
        review.comment = comment
        review.is_approved = decision.approved
        review.moderation_reasons = decision.reasons
        update_fields += ["comment", "is_approved", "moderation_reasons"]
    review.save(update_fields=update_fields)
    return review


def list_trip_reviews(trip: Trip, *, sort_by: str = "newest", rating: Optional[int] = None):
    reviews = Review.objects.approved().filter(trip=trip).select_related("user")
    if rating:
        reviews = reviews.filter(rating=rating)
    return reviews.order_by(*REVIEW_ORDERING[sort_by])


def calculate_trip_rating_stats(trip: Trip) -> dict[str, Any]:
    """Count, one-decimal average and per-star distribution of approved reviews."""

    distribution = {star: 0 for star in range(1, 6)}
    rows = Review.objects.approved().filter(trip=trip).values("rating").annotate(total=Count("id"))
    for row in rows:
        distribution[row["rating"]] = row["total"]

    total_reviews = sum(distribution.values())
    if total_reviews == 0:
        return {"total_reviews": 0, "average_rating": 0, "rating_distribution": distribution}

    total_rating = sum(star * count for star, count in distribution.items())
    return {
        "total_reviews": total_reviews,
        "average_rating": round(total_rating / total_reviews, 1),
        "rating_distribution": distribution,
    }
