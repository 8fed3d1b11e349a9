"""Model signal handlers for trip cache invalidation."""

from django.db.models.signals import m2m_changed, post_delete, post_save  # type: ignore
from django.dispatch import receiver  # type: ignore

from .models import FishingType, Trip
from .services import invalidate_trip_caches


@receiver([post_save, post_delete], sender=Trip)
@receiver([post_save, post_delete], sender=FishingType)
@receiver(m2m_changed, sender=Trip.fishing_types.through)
def trip_cache_invalidator(**_: object) -> None:
    """Drop cached featured trips and filter options whenever trip data changes."""
    invalidate_trip_caches()
