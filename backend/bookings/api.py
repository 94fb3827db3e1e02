from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from bookings.serializers import BookingDecisionSerializer, BookingSerializer
from bookings.services.lifecycle import build_booking_lifecycle
from core.api import error_body
from core.exceptions import NotFoundError, ValidationError


class BookingCreateView(APIView):
    """Create a pending, unpaid booking with a snapshot of the selected guide."""

    def post(self, request, *args, **kwargs):
        try:
            booking = build_booking_lifecycle().create(request.data)
        except ValidationError as exc:
            return Response(error_body(exc), status=status.HTTP_400_BAD_REQUEST)
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)


class TouristBookingListView(APIView):
    def get(self, request, email, *args, **kwargs):
        bookings = build_booking_lifecycle().bookings_for_tourist(email)
        return Response(BookingSerializer(bookings, many=True).data)


class BookingCancelView(APIView):
    def patch(self, request, identifier, *args, **kwargs):
        try:
            booking = build_booking_lifecycle().cancel(identifier)
        except NotFoundError as exc:
            return Response(error_body(exc), status=status.HTTP_404_NOT_FOUND)
        return Response(BookingSerializer(booking).data)


class AssignedTourListView(APIView):
    """Bookings whose guide snapshot carries the given email."""

    def get(self, request, guide_email, *args, **kwargs):
        bookings = build_booking_lifecycle().tours_for_guide(guide_email)
        return Response(BookingSerializer(bookings, many=True).data)


class AssignedTourStatusView(APIView):
    """Let the assigned guide accept or reject a pending booking."""

    def put(self, request, booking_id, *args, **kwargs):
        serializer = BookingDecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            booking = build_booking_lifecycle().decide(booking_id, serializer.validated_data["status"])
        except ValidationError as exc:
            return Response(error_body(exc), status=status.HTTP_400_BAD_REQUEST)
        except NotFoundError as exc:
            return Response(error_body(exc), status=status.HTTP_404_NOT_FOUND)
        return Response(BookingSerializer(booking).data)
