"""Domain services for booking workflows.

``check_availability`` answers whether a trip can take a booking for a
date range and party size. ``create_booking``, ``modify_booking`` and
``cancel_booking`` enforce the same rules when bookings are written and
raise ``BookingError`` subclasses for business-rule violations, which the
API reports as 400 responses.

The conflict check and the insert run in one transaction with the trip row
locked where the database supports ``SELECT ... FOR UPDATE``. SQLite has no
row locks, so two concurrent requests can still both pass the check there.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Optional

from django.conf import settings  # type: ignore
from django.contrib.auth import get_user_model  # type: ignore
from django.db import transaction  # type: ignore
from django.db.models import Q, QuerySet  # type: ignore
from django.utils import timezone  # type: ignore

from apps.trips.models import Trip
from shared.domain.value_objects import DateRange

from .models import Booking

logger = logging.getLogger(__name__)

User = get_user_model()

TRIP_NOT_FOUND = "Trip not found"
NOT_AVAILABLE = "Trip is not available for the selected dates"


class BookingError(Exception):
    """Base exception for booking business-rule violations."""


class TripNotFoundError(BookingError):
    def __init__(self) -> None:
        super().__init__(TRIP_NOT_FOUND)


class CapacityExceededError(BookingError):
    def __init__(self, max_guests: int) -> None:
        self.max_guests = max_guests
        super().__init__(f"Maximum {max_guests} guests allowed for this trip")


class BookingConflictError(BookingError):
    def __init__(self) -> None:
        super().__init__(NOT_AVAILABLE)


class BookingStateError(BookingError):
    """Raised when a booking cannot be changed in its current state."""


@dataclass(frozen=True)
class AvailabilityResult:
    available: bool
    reason: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"available": self.available}
        if self.reason is not None:
            data["reason"] = self.reason
        return data


@dataclass
class BookingRequest:
    trip_id: Any
    start_date: date
    guests: int
    customer_name: str
    customer_email: str
    customer_phone: str
    end_date: Optional[date] = None
    special_requests: str = ""


def conflicting_bookings_filter(date_range: DateRange) -> Q:
    """Q object matching active bookings that block ``date_range``.

    A booking with an end date blocks when the two closed ranges share a day.
    A booking without an end date blocks every range starting on or after
    its start date.
    """
    return Q(status__in=Booking.ACTIVE_STATUSES) & (
        Q(start_date__lte=date_range.last_day, end_date__gte=date_range.start_date)
        | Q(start_date__lte=date_range.start_date, end_date__isnull=True)
    )


def find_conflicts(trip: Trip, date_range: DateRange, *, exclude_booking_id=None) -> QuerySet:
    bookings_qs = Booking.objects.filter(trip=trip).filter(conflicting_bookings_filter(date_range))
    if exclude_booking_id is not None:
        bookings_qs = bookings_qs.exclude(pk=exclude_booking_id)
    return bookings_qs


def _lock_queryset_if_possible(queryset: QuerySet) -> QuerySet:
    """Apply select_for_update when inside transaction.atomic() on a backend that supports it."""

    connection = transaction.get_connection()
    if not connection.in_atomic_block or not connection.features.has_select_for_update:
        return queryset
    return queryset.select_for_update()


def check_availability(
    trip_id: Any,
    start_date: date,
    end_date: Optional[date],
    guests: int,
) -> AvailabilityResult:
    """Decide whether a new booking fits the trip's capacity and calendar."""

    trip = Trip.objects.active().filter(pk=trip_id).first()
    if trip is None:
        return AvailabilityResult(False, TRIP_NOT_FOUND)

    if guests > trip.max_guests:
        return AvailabilityResult(False, f"Maximum {trip.max_guests} guests allowed")

    if find_conflicts(trip, DateRange(start_date, end_date or start_date)).exists():
        return AvailabilityResult(False, NOT_AVAILABLE)

    return AvailabilityResult(True)


def calculate_total_price(trip: Trip, guests: int) -> Decimal:
    """Per-guest pricing: no taxes, discounts or currency conversion."""
    return trip.base_price * guests


@transaction.atomic
def create_booking(request: BookingRequest) -> Booking:
    """Create a PENDING booking after capacity and conflict checks."""

    trip = _lock_queryset_if_possible(Trip.objects.active().filter(pk=request.trip_id)).first()
    if trip is None:
        raise TripNotFoundError()

    if request.guests > trip.max_guests:
        raise CapacityExceededError(trip.max_guests)

    requested = DateRange(request.start_date, request.end_date or request.start_date)
    if find_conflicts(trip, requested).exists():
        raise BookingConflictError()

    customer = User.objects.upsert_customer(
        email=request.customer_email,
        name=request.customer_name,
        phone=request.customer_phone,
    )

    booking = Booking.objects.create(
        trip=trip,
        user=customer,
        start_date=request.start_date,
        end_date=request.end_date,
        guests=request.guests,
        total_price=calculate_total_price(trip, request.guests),
        status=Booking.Status.PENDING,
        special_requests=request.special_requests,
    )

    logger.info("Booking %s created for trip %s (%s guests)", booking.id, trip.id, booking.guests)
    return booking


def _ensure_changeable(booking: Booking, action: str) -> None:
    if not booking.is_active:
        raise BookingStateError(f"Cannot {action} this booking")


@transaction.atomic
def modify_booking(
    booking: Booking,
    *,
    guests: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> Booking:
    """Change party size or dates of an upcoming active booking."""

    _ensure_changeable(booking, "modify")

    today = timezone.localdate()
    if booking.start_date <= today:
        raise BookingStateError("Cannot modify past bookings")

    if start_date is not None and start_date <= today:
        raise BookingError("Start date must be in the future")

    trip = _lock_queryset_if_possible(Trip.objects.filter(pk=booking.trip_id)).get()
    update_fields = ["updated_at"]

    if guests is not None:
        if guests > trip.max_guests:
            raise CapacityExceededError(trip.max_guests)
        booking.guests = guests
        booking.total_price = calculate_total_price(trip, guests)
        update_fields += ["guests", "total_price"]

    if start_date is not None or end_date is not None:
        new_start = start_date or booking.start_date
        new_end = end_date if end_date is not None else booking.end_date
        try:
            requested = DateRange(new_start, new_end or new_start)
        except ValueError:
            raise BookingError("End date must be after or equal to start date")
        if find_conflicts(trip, requested, exclude_booking_id=booking.pk).exists():
            raise BookingConflictError()
        booking.start_date = new_start
        booking.end_date = new_end
        update_fields += ["start_date", "end_date"]

    booking.save(update_fields=update_fields)
    logger.info("Booking %s modified (%s)", booking.id, ", ".join(update_fields[1:]) or "no changes")
    return booking


@transaction.atomic
def cancel_booking(booking: Booking, *, now: Optional[datetime] = None) -> Booking:
    """Cancel an active booking at least the notice period before it starts."""

    _ensure_changeable(booking, "cancel")

    now = now or timezone.now()
    notice = timedelta(hours=settings.BOOKING_CANCELLATION_NOTICE_HOURS)
    starts_at = timezone.make_aware(datetime.combine(booking.start_date, time.min))
    if starts_at < now + notice:
        raise BookingStateError(
            f"Cannot cancel bookings less than {settings.BOOKING_CANCELLATION_NOTICE_HOURS} hours before start time"
        )

    booking.mark_cancelled()
    logger.info("Booking %s cancelled", booking.id)
    return booking
