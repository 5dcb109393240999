"""API views for the booking domain.

Borrowers file, list, cancel and rate their bookings under ``my/``;
owners work their incoming requests under ``renter/``. Role and status
checks live in the services: a view only parses input and serializes the
result, and domain errors are rendered by the project exception handler.
"""

from __future__ import annotations

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from . import services
from .domain.lifecycle import BookingStatus
from .serializers import BookingCreateSerializer, BookingSerializer, RatingSerializer, RejectSerializer


class BookingCreateView(APIView):
    """File a booking request for someone else's equipment."""

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):  # type: ignore
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = services.create_booking(borrower=request.user, **serializer.validated_data)
        data = BookingSerializer(booking, context={"request": request}).data
        return Response(data, status=status.HTTP_201_CREATED)


class BookingDetailView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, pk):  # type: ignore
        booking = services.get_booking_for_stakeholder(pk, request.user)
        return Response(BookingSerializer(booking, context={"request": request}).data)


class BookingCancelView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def patch(self, request, pk):  # type: ignore
        booking = services.cancel_booking(pk, request.user)
        return Response(BookingSerializer(booking, context={"request": request}).data)


class _BookingListViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    serializer_class = BookingSerializer
    permission_classes = [permissions.IsAuthenticated]
    filterset_fields = ["status", "equipment"]
    lookup_value_regex = r"\d+"

    def _respond(self, booking):  # type: ignore
        return Response(BookingSerializer(booking, context=self.get_serializer_context()).data)

    def _rate(self, request, pk, rate):  # type: ignore
        serializer = RatingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = rate(
            pk,
            request.user,
            serializer.validated_data["rating"],
            serializer.validated_data["review"],
        )
        return self._respond(booking)


class BorrowerBookingViewSet(_BookingListViewSet):
    """Bookings the current user made as a borrower."""

    def get_queryset(self):  # type: ignore
        return services.bookings_for_borrower(self.request.user)

    @action(detail=True, methods=["post"])
    def rate(self, request, pk=None):  # type: ignore
        return self._rate(request, pk, services.rate_by_borrower)


class OwnerBookingViewSet(_BookingListViewSet):
    """Requests received for the current user's equipment."""

    def get_queryset(self):  # type: ignore
        return services.bookings_for_owner(self.request.user)

    @action(detail=False, methods=["get"])
    def pending(self, request):  # type: ignore
        queryset = self.filter_queryset(self.get_queryset()).filter(status=BookingStatus.PENDING)
        return Response(self.get_serializer(queryset, many=True).data)

    @action(detail=True, methods=["patch"])
    def approve(self, request, pk=None):  # type: ignore
        return self._respond(services.approve_booking(pk, request.user))

    @action(detail=True, methods=["patch"])
    def reject(self, request, pk=None):  # type: ignore
        data = request.data or {"reason": request.query_params.get("reason", "")}
        serializer = RejectSerializer(data=data)
        serializer.is_valid(raise_exception=True)
        booking = services.reject_booking(pk, request.user, serializer.validated_data["reason"])
        return self._respond(booking)

    @action(detail=True, methods=["patch"])
    def start(self, request, pk=None):  # type: ignore
        return self._respond(services.start_booking(pk, request.user))

    @action(detail=True, methods=["patch"])
    def complete(self, request, pk=None):  # type: ignore
        return self._respond(services.complete_booking(pk, request.user))

    @action(detail=True, methods=["post"])
    def rate(self, request, pk=None):  # type: ignore
        return self._rate(request, pk, services.rate_by_owner)
