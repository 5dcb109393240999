"""Booking domain models for AgroRent."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import TimeInterval

from .domain.lifecycle import (
    BookingAction,
    BookingStatus,
    Role,
    available_actions,
    resolve_transition,
)
from .pricing import PricingType

RATING_VALIDATORS = [MinValueValidator(1), MaxValueValidator(5)]

# Timestamp recorded when a booking enters each status
STATUS_TIMESTAMPS = {
    BookingStatus.APPROVED: "approved_at",
    BookingStatus.REJECTED: "rejected_at",
    BookingStatus.ACTIVE: "started_at",
    BookingStatus.COMPLETED: "completed_at",
    BookingStatus.CANCELLED: "cancelled_at",
}


class Booking(models.Model):
    """Rental request of one equipment for a time interval."""

    Status = BookingStatus
    PricingType = PricingType

    equipment = models.ForeignKey(
        "equipment.Equipment",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_bookings",
    )
    borrower = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    equipment_name = models.CharField(
        max_length=200,
        help_text=_("Equipment name at the moment of booking."),
    )
    equipment_category = models.CharField(max_length=20)
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    duration_hours = models.DecimalField(max_digits=10, decimal_places=2)
    status = models.CharField(
        max_length=20,
        choices=BookingStatus.choices,
        default=BookingStatus.PENDING,
    )
    pricing_type = models.CharField(max_length=20, choices=PricingType.choices)
    total_cost = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Locked when the booking is created."),
    )
    notes = models.TextField(blank=True)
    rejection_reason = models.CharField(max_length=255, blank=True)

    rating_by_owner = models.PositiveSmallIntegerField(null=True, blank=True, validators=RATING_VALIDATORS)
    review_by_owner = models.TextField(blank=True)
    rating_by_borrower = models.PositiveSmallIntegerField(null=True, blank=True, validators=RATING_VALIDATORS)
    review_by_borrower = models.TextField(blank=True)

    approved_at = models.DateTimeField(null=True, blank=True)
    rejected_at = models.DateTimeField(null=True, blank=True)
    started_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_time__gt=models.F("start_time")),
                name="booking_valid_interval",
            ),
        ]
        indexes = [
            models.Index(fields=["equipment", "start_time", "end_time"], name="booking_equipment_time_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
            models.Index(fields=["owner", "status"], name="booking_owner_status_idx"),
            models.Index(fields=["borrower", "status"], name="booking_borrower_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} for {self.equipment_name} ({self.status})"

    @property
    def interval(self) -> TimeInterval:
        return TimeInterval(self.start_time, self.end_time)

    def role_of(self, user) -> Role | None:
        """Role ``user`` plays in this booking, or None for strangers."""
        user_id = getattr(user, "pk", None)
        if user_id is None:
            return None
        if user_id == self.owner_id:
            return Role.OWNER
        if user_id == self.borrower_id:
            return Role.BORROWER
        return None

    def actions_for(self, user) -> list[str]:
        return available_actions(self.status, self.role_of(user))

    def check_transition(self, action: BookingAction, actor) -> BookingStatus:
        return resolve_transition(self.status, action, self.role_of(actor))

    def apply_transition(self, action: BookingAction, actor, *, reason: str = "") -> list[str]:
        """
        Move the booking to the next status (caller saves).

        Returns the list of changed fields for ``save(update_fields=...)``.
        """
        target = self.check_transition(action, actor)
        self.status = target
        changed = ["status", "updated_at"]

        timestamp_field = STATUS_TIMESTAMPS.get(target)
        if timestamp_field:
            setattr(self, timestamp_field, timezone.now())
            changed.append(timestamp_field)

        if target == BookingStatus.REJECTED:
            self.rejection_reason = reason
            changed.append("rejection_reason")

        return changed
