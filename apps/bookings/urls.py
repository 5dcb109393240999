"""URL routing for the booking domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import (
    BookingCancelView,
    BookingCreateView,
    BookingDetailView,
    BorrowerBookingViewSet,
    OwnerBookingViewSet,
)

router = SimpleRouter()
router.register(r"my", BorrowerBookingViewSet, basename="booking-my")
router.register(r"renter", OwnerBookingViewSet, basename="booking-renter")

urlpatterns = [
    path("create/", BookingCreateView.as_view(), name="booking-create"),
    path("<int:pk>/", BookingDetailView.as_view(), name="booking-detail"),
    path("<int:pk>/cancel/", BookingCancelView.as_view(), name="booking-cancel"),
    path("", include(router.urls)),
]
