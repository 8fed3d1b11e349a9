"""Trip domain models for the fishing charters platform."""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.db.models import Avg, Count, Q  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class FishingType(models.Model):
    """Style of fishing offered on a trip (deep sea, trolling, reef...)."""

    name = models.CharField(max_length=100, unique=True)

    class Meta:
        verbose_name = _("Fishing type")
        verbose_name_plural = _("Fishing types")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class TripQuerySet(models.QuerySet):
    def with_stats(self) -> "TripQuerySet":
        """Annotate approved-review rating/count and booking count."""
        approved = Q(reviews__is_approved=True)
        return self.annotate(
            average_rating=Avg("reviews__rating", filter=approved),
            review_count=Count("reviews", filter=approved, distinct=True),
            booking_count=Count("bookings", distinct=True),
        )

    def active(self) -> "TripQuerySet":
        return self.filter(is_active=True)


class Trip(models.Model):
    """A fishing charter that customers can book by the day."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField()
    location_name = models.CharField(max_length=255, db_index=True)
    latitude = models.FloatField()
    longitude = models.FloatField()
    duration = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1)],
        help_text=_("Trip length in hours."),
    )
    base_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
        help_text=_("Price per guest."),
    )
    max_guests = models.PositiveSmallIntegerField(validators=[MinValueValidator(1)])
    boat_type = models.CharField(max_length=100)
    images = models.JSONField(default=list, blank=True)
    inclusions = models.JSONField(default=list, blank=True)
    fishing_types = models.ManyToManyField(FishingType, related_name="trips", blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TripQuerySet.as_manager()

    class Meta:
        verbose_name = _("Trip")
        verbose_name_plural = _("Trips")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(base_price__gt=0),
                name="trip_positive_base_price",
            ),
            models.CheckConstraint(
                condition=models.Q(max_guests__gt=0),
                name="trip_positive_max_guests",
            ),
        ]
        indexes = [
            models.Index(fields=["boat_type"], name="trips_trip_boat_ty_6c0f1e_idx"),
            models.Index(fields=["base_price"], name="trips_trip_base_pr_1d9b4a_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.title} ({self.location_name})"
