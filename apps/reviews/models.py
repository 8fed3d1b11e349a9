"""Models for the review domain.

Defines the ``Review`` entity: a customer's rating and comment for a trip
they went on. Reviews flagged by moderation are stored with
``is_approved=False`` and stay hidden from the public trip page until a
staff member approves them in the admin.
"""

from __future__ import annotations

import uuid

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class ReviewQuerySet(models.QuerySet):
    def approved(self) -> "ReviewQuerySet":
        return self.filter(is_approved=True)


class Review(models.Model):
    """A customer's review of a trip."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    trip = models.ForeignKey(
        "trips.Trip", on_delete=models.CASCADE, related_name="reviews"
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reviews"
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        help_text=_("Rating from 1 to 5."),
    )
    comment = models.TextField(blank=True, max_length=1000)
    images = models.JSONField(default=list, blank=True)
    trip_date = models.DateField(help_text=_("Day the customer went on the trip."))

    # Moderation
    is_approved = models.BooleanField(default=True)
    moderation_reasons = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ReviewQuerySet.as_manager()

    class Meta:
        verbose_name = _("Review")
        verbose_name_plural = _("Reviews")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(rating__gte=1, rating__lte=5),
                name="review_rating_range",
            ),
        ]
        indexes = [
            models.Index(fields=["trip", "-created_at"], name="reviews_rev_trip_id_5b7e90_idx"),
            models.Index(fields=["user"], name="reviews_rev_user_id_a41c3d_idx"),
            models.Index(fields=["rating"], name="reviews_rev_rating_2d8f6e_idx"),
        ]

    def __str__(self) -> str:
        return f"Review by {self.user_id} for trip {self.trip_id} (Rating: {self.rating})"
