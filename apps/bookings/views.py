"""API views for the booking domain."""

from __future__ import annotations

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from .models import Booking
from .serializers import (
    AvailabilityCheckSerializer,
    BookingCreateSerializer,
    BookingSerializer,
    BookingUpdateSerializer,
)
from .services import BookingError, cancel_booking, check_availability, create_booking, modify_booking


def _business_error(exc: BookingError) -> Response:
    return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)


class BookingViewSet(mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """Public booking flow: availability check, booking form, confirmation page.

    Customers do not need an account to book; the booking id in the
    confirmation link is an unguessable UUID.
    """

    queryset = Booking.objects.select_related("trip", "user").all()
    serializer_class = BookingSerializer
    permission_classes = [permissions.AllowAny]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "check_availability":
            return AvailabilityCheckSerializer
        return BookingSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            booking = create_booking(serializer.to_booking_request())
        except BookingError as exc:
            return _business_error(exc)

        data = {
            "success": True,
            "booking_id": str(booking.id),
            "booking": BookingSerializer(booking, context=self.get_serializer_context()).data,
        }
        return Response(data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"], url_path="check-availability")
    def check_availability(self, request):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        result = check_availability(
            data["trip_id"],
            data["start_date"],
            data.get("end_date"),
            data["guests"],
        )
        return Response(result.to_dict())


class UserBookingViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """The signed-in customer's bookings: list, modify, cancel."""

    serializer_class = BookingSerializer
    permission_classes = [permissions.IsAuthenticated]
    pagination_class = None

    def get_queryset(self):  # type: ignore
        return Booking.objects.select_related("trip", "user").filter(user=self.request.user)

    def partial_update(self, request, *args, **kwargs):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        serializer = BookingUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            booking = modify_booking(booking, **serializer.validated_data)
        except BookingError as exc:
            return _business_error(exc)
        return Response({"booking": BookingSerializer(booking).data})

    def destroy(self, request, *args, **kwargs):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        try:
            booking = cancel_booking(booking)
        except BookingError as exc:
            return _business_error(exc)
        return Response(
            {
                "message": "Booking cancelled successfully",
                "booking": BookingSerializer(booking).data,
            },
            status=status.HTTP_200_OK,
        )
