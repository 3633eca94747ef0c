from rest_framework import status, viewsets
from rest_framework.decorators import action

from core.pagination import EnvelopePagination
from core.responses import envelope
from .models import Booking
from .serializers import (
    BookingCreateSerializer,
    BookingListQuerySerializer,
    BookingResponseSerializer,
    BookingSerializer,
)
from .services.lifecycle import (
    create_booking,
    get_booking_for,
    guest_bookings,
    host_bookings,
    host_summary,
    respond_to_booking,
)


class BookingViewSet(viewsets.GenericViewSet):
    serializer_class = BookingSerializer
    pagination_class = EnvelopePagination
    lookup_value_regex = r"\d+"

    def create(self, request):
        payload = BookingCreateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        booking = create_booking(guest=request.user, **payload.validated_data)
        booking = Booking.objects.select_related("guest", "host", "post").get(pk=booking.pk)
        return envelope(
            self.get_serializer(booking).data,
            message="Booking request sent successfully",
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, pk=None):
        booking = get_booking_for(booking_id=pk, user=request.user)
        return envelope(self.get_serializer(booking).data, message="Booking retrieved successfully")

    def _status_filter(self, request) -> str:
        params = BookingListQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        return params.validated_data["status"]

    @action(detail=False, methods=["get"], url_path="host/requests")
    def host_requests(self, request):
        queryset = host_bookings(request.user, self._status_filter(request))
        page = self.paginate_queryset(queryset)
        return self.paginator.get_paginated_response(
            self.get_serializer(page, many=True).data,
            message="Booking requests retrieved successfully",
            summary=host_summary(request.user),
        )

    @action(detail=False, methods=["get"], url_path="guest/my-bookings")
    def my_bookings(self, request):
        queryset = guest_bookings(request.user, self._status_filter(request))
        page = self.paginate_queryset(queryset)
        return self.paginator.get_paginated_response(
            self.get_serializer(page, many=True).data,
            message="Bookings retrieved successfully",
        )

    def _respond(self, request, pk, decision: str, message: str):
        payload = BookingResponseSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        booking = respond_to_booking(
            booking_id=pk,
            user=request.user,
            status=decision,
            host_response=payload.validated_data["host_response"],
        )
        return envelope(self.get_serializer(booking).data, message=message)

    @action(detail=True, methods=["patch"])
    def accept(self, request, pk=None):
        return self._respond(request, pk, Booking.ACCEPTED, "Booking accepted successfully")

    @action(detail=True, methods=["patch"])
    def decline(self, request, pk=None):
        return self._respond(request, pk, Booking.DECLINED, "Booking declined successfully")
