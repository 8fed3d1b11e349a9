"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from celery import shared_task  # type: ignore
from django.db.models.functions import Coalesce  # type: ignore
from django.utils import timezone  # type: ignore

from .models import Booking

logger = logging.getLogger(__name__)


# ============================================================================
# PERIODIC TASKS (scheduled by Celery Beat, see config/celery.py)
# ============================================================================

@shared_task(name="bookings.complete_finished_bookings")
def complete_finished_bookings(today: Optional[str] = None) -> dict[str, int]:
    """
    Mark confirmed bookings whose last day has passed as COMPLETED.

    The last day is ``end_date`` or, for single-day trips, ``start_date``.
    Completed bookings no longer block the calendar.

    Args:
        today: ISO date overriding the current local date.

    Returns:
        dict: {"completed": number of bookings moved to COMPLETED}
    """
    current = date.fromisoformat(today) if today else timezone.localdate()

    finished = (
        Booking.objects.filter(status=Booking.Status.CONFIRMED)
        .annotate(last_day=Coalesce("end_date", "start_date"))
        .filter(last_day__lt=current)
    )
    completed_count = Booking.objects.filter(pk__in=finished.values("pk")).update(
        status=Booking.Status.COMPLETED,
        updated_at=timezone.now(),
    )

    if completed_count > 0:
        logger.info("Completed %s finished bookings", completed_count)

    return {"completed": completed_count}
