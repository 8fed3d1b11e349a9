"""Integration tests for booking API endpoints."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.trips.models import Trip
from apps.users.models import User


class BookingAPITests(APITestCase):
    """Covers availability checks, booking creation and conflicts."""

    def setUp(self) -> None:
        self.trip = Trip.objects.create(
            title="Offshore Tuna Run",
            description="Full day chasing yellowfin off the shelf.",
            location_name="Key West, FL",
            latitude=24.5551,
            longitude=-81.78,
            duration=8,
            base_price=Decimal("150.00"),
            max_guests=6,
            boat_type="Sport Fisher",
        )
        self.today = timezone.localdate()
        self.list_url = reverse("booking-list")
        self.availability_url = reverse("booking-check-availability")

    def _payload(self, start, end=None, guests: int = 2, email: str = "angler@example.com") -> dict:
        payload = {
            "trip_id": str(self.trip.id),
            "start_date": str(start),
            "guests": guests,
            "customer_info": {
                "name": "Sam Angler",
                "email": email,
                "phone": "+1 305 555 0101",
            },
        }
        if end is not None:
            payload["end_date"] = str(end)
        return payload

    def test_customer_can_book_without_an_account(self) -> None:
        start = self.today + timedelta(days=3)

        response = self.client.post(self.list_url, self._payload(start, start + timedelta(days=1)), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertTrue(response.data["success"])
        self.assertEqual(response.data["booking"]["status"], Booking.Status.PENDING)
        self.assertEqual(response.data["booking"]["total_price"], "300.00")
        self.assertEqual(response.data["booking_id"], response.data["booking"]["id"])

        customer = User.objects.get(email="angler@example.com")
        self.assertFalse(customer.has_usable_password())
        self.assertEqual(customer.name, "Sam Angler")

    def test_repeat_customer_details_are_updated(self) -> None:
        User.objects.create_user(email="angler@example.com", name="Old Name", phone="0000000000")
        start = self.today + timedelta(days=3)

        response = self.client.post(self.list_url, self._payload(start), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(User.objects.filter(email="angler@example.com").count(), 1)
        customer = User.objects.get(email="angler@example.com")
        self.assertEqual(customer.name, "Sam Angler")
        self.assertEqual(customer.phone, "+1 305 555 0101")

    def test_prevent_double_booking_on_overlap(self) -> None:
        start = self.today + timedelta(days=3)
        first = self.client.post(self.list_url, self._payload(start, start + timedelta(days=2)), format="json")
        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)

        conflict = self.client.post(
            self.list_url,
            self._payload(start + timedelta(days=2), start + timedelta(days=4), email="other@example.com"),
            format="json",
        )

        self.assertEqual(conflict.status_code, status.HTTP_400_BAD_REQUEST, conflict.data)
        self.assertEqual(conflict.data["detail"], "Trip is not available for the selected dates")
        self.assertEqual(Booking.objects.count(), 1)

    def test_next_day_booking_is_allowed(self) -> None:
        start = self.today + timedelta(days=3)
        first = self.client.post(self.list_url, self._payload(start, start + timedelta(days=1)), format="json")
        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)

        second = self.client.post(
            self.list_url,
            self._payload(start + timedelta(days=2), start + timedelta(days=3)),
            format="json",
        )

        self.assertEqual(second.status_code, status.HTTP_201_CREATED, second.data)
        self.assertEqual(Booking.objects.count(), 2)

    def test_capacity_is_enforced(self) -> None:
        response = self.client.post(
            self.list_url, self._payload(self.today + timedelta(days=3), guests=7), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["detail"], "Maximum 6 guests allowed for this trip")

    def test_request_validation_messages(self) -> None:
        too_many = self.client.post(
            self.list_url, self._payload(self.today + timedelta(days=3), guests=21), format="json"
        )
        self.assertEqual(too_many.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(too_many.data["guests"][0], "Maximum 20 guests allowed")

        in_the_past = self.client.post(self.list_url, self._payload(self.today - timedelta(days=1)), format="json")
        self.assertEqual(in_the_past.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(in_the_past.data["start_date"][0], "Start date must be today or in the future")

        start = self.today + timedelta(days=5)
        reversed_dates = self.client.post(
            self.list_url, self._payload(start, start - timedelta(days=1)), format="json"
        )
        self.assertEqual(reversed_dates.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(reversed_dates.data["end_date"][0], "End date must be after or equal to start date")

        payload = self._payload(start)
        payload["customer_info"]["phone"] = "12345"
        short_phone = self.client.post(self.list_url, payload, format="json")
        self.assertEqual(short_phone.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("phone", short_phone.data["customer_info"])

    def test_unknown_trip_cannot_be_booked(self) -> None:
        payload = self._payload(self.today + timedelta(days=3))
        payload["trip_id"] = "6f1c2a48-0000-4000-8000-000000000000"

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["detail"], "Trip not found")

    def test_check_availability(self) -> None:
        start = self.today + timedelta(days=10)
        payload = {"trip_id": str(self.trip.id), "start_date": str(start), "guests": 2}

        free = self.client.post(self.availability_url, payload, format="json")
        self.assertEqual(free.status_code, status.HTTP_200_OK, free.data)
        self.assertEqual(free.data, {"available": True})

        self.client.post(self.list_url, self._payload(start), format="json")

        taken = self.client.post(self.availability_url, payload, format="json")
        self.assertEqual(
            taken.data,
            {"available": False, "reason": "Trip is not available for the selected dates"},
        )

        crowded = self.client.post(
            self.availability_url, {**payload, "start_date": str(start + timedelta(days=5)), "guests": 9}, format="json"
        )
        self.assertEqual(crowded.data, {"available": False, "reason": "Maximum 6 guests allowed"})

    def test_booking_confirmation_is_public(self) -> None:
        created = self.client.post(self.list_url, self._payload(self.today + timedelta(days=3)), format="json")

        response = self.client.get(reverse("booking-detail", args=[created.data["booking_id"]]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["trip"]["title"], "Offshore Tuna Run")
        self.assertEqual(response.data["customer_info"]["email"], "angler@example.com")


class UserBookingAPITests(APITestCase):
    """Covers the signed-in customer's booking list, changes and cancellation."""

    def setUp(self) -> None:
        self.trip = Trip.objects.create(
            title="Bay Trolling",
            description="Half day on the bay.",
            location_name="Tampa, FL",
            latitude=27.95,
            longitude=-82.46,
            duration=4,
            base_price=Decimal("100.00"),
            max_guests=4,
            boat_type="Center Console",
        )
        self.user = User.objects.create_user(email="member@example.com", password="MemberPass123", name="Member")
        self.other = User.objects.create_user(email="other@example.com", password="OtherPass123")
        self.today = timezone.localdate()
        self.booking = Booking.objects.create(
            trip=self.trip,
            user=self.user,
            start_date=self.today + timedelta(days=7),
            guests=2,
            total_price=Decimal("200.00"),
        )
        self.client.force_authenticate(self.user)

    def _detail_url(self, booking: Booking) -> str:
        return reverse("my-booking-detail", args=[booking.id])

    def test_list_requires_authentication(self) -> None:
        self.client.force_authenticate(None)
        response = self.client.get(reverse("my-booking-list"))
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

    def test_list_shows_only_own_bookings(self) -> None:
        Booking.objects.create(
            trip=self.trip,
            user=self.other,
            start_date=self.today + timedelta(days=20),
            guests=1,
            total_price=Decimal("100.00"),
        )

        response = self.client.get(reverse("my-booking-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item["id"] for item in response.data], [str(self.booking.id)])

    def test_changing_guests_recalculates_price(self) -> None:
        response = self.client.patch(self._detail_url(self.booking), {"guests": 3}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["booking"]["guests"], 3)
        self.assertEqual(response.data["booking"]["total_price"], "300.00")

    def test_modify_rejects_capacity_and_conflicts(self) -> None:
        over = self.client.patch(self._detail_url(self.booking), {"guests": 5}, format="json")
        self.assertEqual(over.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(over.data["detail"], "Maximum 4 guests allowed for this trip")

        Booking.objects.create(
            trip=self.trip,
            user=self.other,
            start_date=self.today + timedelta(days=10),
            end_date=self.today + timedelta(days=11),
            guests=1,
            total_price=Decimal("100.00"),
        )
        clash = self.client.patch(
            self._detail_url(self.booking),
            {"start_date": str(self.today + timedelta(days=11))},
            format="json",
        )
        self.assertEqual(clash.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(clash.data["detail"], "Trip is not available for the selected dates")

    def test_modify_rejects_moving_start_to_today(self) -> None:
        response = self.client.patch(
            self._detail_url(self.booking), {"start_date": str(self.today)}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["start_date"][0], "Start date must be in the future")
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.start_date, self.today + timedelta(days=7))

    def test_cancel_marks_booking_cancelled(self) -> None:
        response = self.client.delete(self._detail_url(self.booking))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["message"], "Booking cancelled successfully")
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.status, Booking.Status.CANCELLED)
        self.assertIsNotNone(self.booking.cancelled_at)

    def test_cancel_too_close_to_start(self) -> None:
        tomorrow = Booking.objects.create(
            trip=self.trip,
            user=self.user,
            start_date=self.today + timedelta(days=1),
            guests=1,
            total_price=Decimal("100.00"),
        )

        response = self.client.delete(self._detail_url(tomorrow))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(
            response.data["detail"],
            "Cannot cancel bookings less than 24 hours before start time",
        )

    def test_cancelled_booking_cannot_be_modified(self) -> None:
        self.booking.mark_cancelled()

        response = self.client.patch(self._detail_url(self.booking), {"guests": 1}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Cannot modify this booking")

    def test_other_users_booking_is_not_found(self) -> None:
        foreign = Booking.objects.create(
            trip=self.trip,
            user=self.other,
            start_date=self.today + timedelta(days=30),
            guests=1,
            total_price=Decimal("100.00"),
        )

        response = self.client.delete(self._detail_url(foreign))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
