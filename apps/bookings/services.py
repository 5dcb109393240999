"""Domain services for booking workflows.

Every operation runs in a single ``transaction.atomic()`` block, so a
booking is either fully created with its locked price or not created at
all, and a transition either fully applies or is rejected.

``create_booking`` and ``approve_booking`` read and then extend the set of
bookings that hold an equipment. Both take a row lock on the equipment
first, which serializes them per equipment without blocking unrelated
listings. The conflict check runs again on every attempt, so retries
cannot break the no-overlap invariant.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore
from django.db.models import F  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils import timezone  # type: ignore

from apps.equipment.models import Equipment
from shared.domain.exceptions import (
    InvalidInterval,
    InvalidTransition,
    NotFound,
    SelfBooking,
    Unauthorized,
    Unavailable,
)
from shared.domain.value_objects import TimeInterval

from .availability import ensure_slot_is_free
from .domain.lifecycle import BookingAction, BookingStatus, Role
from .models import Booking
from .pricing import compute_cost

logger = logging.getLogger(__name__)


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def _get_equipment_for_update(equipment_id) -> Equipment:
    equipment = _lock_queryset_if_possible(Equipment.objects.filter(pk=equipment_id)).first()
    if equipment is None:
        raise NotFound(f"Equipment {equipment_id} not found.")
    return equipment


def _get_booking(booking_id, *, lock: bool = False) -> Booking:
    queryset = Booking.objects.filter(pk=booking_id)
    if lock:
        queryset = _lock_queryset_if_possible(queryset)
    booking = queryset.first()
    if booking is None:
        raise NotFound(f"Booking {booking_id} not found.")
    return booking


def build_interval(start_time: datetime, end_time: datetime, *, now: datetime | None = None) -> TimeInterval:
    """Validate a requested rental interval."""
    interval = TimeInterval(start_time, end_time)
    now = now or timezone.now()
    if interval.starts_before(now):
        raise InvalidInterval("Start time cannot be in the past.")
    max_days = settings.BOOKING_MAX_DURATION_DAYS
    if interval.end - interval.start > timedelta(days=max_days):
        raise InvalidInterval(f"A booking cannot be longer than {max_days} days.")
    return interval


# ===== Borrower operations =====

def create_booking(
    *,
    equipment_id,
    borrower,
    start_time: datetime,
    end_time: datetime,
    notes: str = "",
) -> Booking:
    """
    File a PENDING booking request.

    Raises:
        NotFound, Unavailable, SelfBooking, InvalidInterval, SlotConflict,
        NoApplicableRate
    """
    with transaction.atomic():
        equipment = _get_equipment_for_update(equipment_id)
        if not equipment.available:
            raise Unavailable()
        if equipment.owner_id == borrower.pk:
            raise SelfBooking()

        interval = build_interval(start_time, end_time)
        ensure_slot_is_free(equipment.pk, interval)
        quote = compute_cost(equipment.rate_table, interval)

        booking = Booking.objects.create(
            equipment=equipment,
            owner_id=equipment.owner_id,
            borrower=borrower,
            equipment_name=equipment.name,
            equipment_category=equipment.category,
            start_time=interval.start,
            end_time=interval.end,
            duration_hours=quote.duration_hours,
            pricing_type=quote.pricing_type,
            total_cost=quote.amount,
            notes=notes or "",
        )

    logger.info(
        "Booking %s created for equipment %s by borrower %s (%s, total %s)",
        booking.pk,
        equipment.pk,
        borrower.pk,
        interval,
        booking.total_cost,
    )
    return booking


def cancel_booking(booking_id, actor) -> Booking:
    return _transition(booking_id, actor, BookingAction.CANCEL)


# ===== Owner operations =====

def approve_booking(booking_id, actor) -> Booking:
    """
    Approve a PENDING request.

    The slot is checked again against bookings approved since the request
    was filed; a stale request fails with ``SlotConflict`` and has to be
    rejected by the owner. Other overlapping requests are left untouched.
    """
    equipment_id = _get_booking(booking_id).equipment_id

    with transaction.atomic():
        _get_equipment_for_update(equipment_id)
        booking = _get_booking(booking_id, lock=True)
        booking.check_transition(BookingAction.APPROVE, actor)
        ensure_slot_is_free(equipment_id, booking.interval, exclude_booking_id=booking.pk)
        changed = booking.apply_transition(BookingAction.APPROVE, actor)
        booking.save(update_fields=changed)

    logger.info("Booking %s approved for equipment %s", booking.pk, equipment_id)
    return booking


def reject_booking(booking_id, actor, reason: str = "") -> Booking:
    return _transition(booking_id, actor, BookingAction.REJECT, reason=reason)


def start_booking(booking_id, actor) -> Booking:
    equipment_id = _get_booking(booking_id).equipment_id

    with transaction.atomic():
        _get_equipment_for_update(equipment_id)
        booking = _transition(booking_id, actor, BookingAction.START)
        Equipment.objects.filter(pk=booking.equipment_id).update(times_rented=F("times_rented") + 1)
    return booking


def complete_booking(booking_id, actor) -> Booking:
    return _transition(booking_id, actor, BookingAction.COMPLETE)


def _transition(booking_id, actor, action: BookingAction, *, reason: str = "") -> Booking:
    with transaction.atomic():
        booking = _get_booking(booking_id, lock=True)
        previous = booking.status
        changed = booking.apply_transition(action, actor, reason=reason)
        booking.save(update_fields=changed)

    logger.info(
        "Booking %s moved %s -> %s (%s by user %s)",
        booking.pk,
        previous,
        booking.status,
        action.value,
        getattr(actor, "pk", None),
    )
    return booking


# ===== Ratings =====

def rate_by_borrower(booking_id, actor, rating: int, review: str = "") -> Booking:
    """Borrower scores the rental; the score joins the equipment average."""
    return _rate(booking_id, actor, Role.BORROWER, rating, review)


def rate_by_owner(booking_id, actor, rating: int, review: str = "") -> Booking:
    """Owner scores the borrower; the score is stored on the booking only."""
    return _rate(booking_id, actor, Role.OWNER, rating, review)


def _rate(booking_id, actor, role: Role, rating: int, review: str) -> Booking:
    rating_field, review_field = (
        ("rating_by_borrower", "review_by_borrower")
        if role == Role.BORROWER
        else ("rating_by_owner", "review_by_owner")
    )

    equipment_id = _get_booking(booking_id).equipment_id

    with transaction.atomic():
        # Lock order: equipment, then booking
        equipment = _get_equipment_for_update(equipment_id) if role == Role.BORROWER else None
        booking = _get_booking(booking_id, lock=True)
        if booking.role_of(actor) != role:
            raise Unauthorized(f"Only the {role.label.lower()} can submit this rating.")
        if booking.status != BookingStatus.COMPLETED:
            raise InvalidTransition(
                "Only completed bookings can be rated.",
                current_status=booking.status,
            )
        if getattr(booking, rating_field) is not None:
            raise InvalidTransition("This booking has already been rated.", current_status=booking.status)

        setattr(booking, rating_field, rating)
        setattr(booking, review_field, review or "")
        booking.save(update_fields=[rating_field, review_field, "updated_at"])

        if equipment is not None:
            equipment.register_rating(rating)
            equipment.save(update_fields=["rating", "total_ratings", "updated_at"])

    logger.info("Booking %s rated %s by %s", booking.pk, rating, role.value)
    return booking


# ===== Queries =====

def bookings_for_borrower(user):
    return Booking.objects.select_related("equipment", "owner", "borrower").filter(borrower=user)


def bookings_for_owner(user):
    return Booking.objects.select_related("equipment", "owner", "borrower").filter(owner=user)


def get_booking_for_stakeholder(booking_id, user) -> Booking:
    """Single booking, readable by its owner and its borrower only."""
    booking = _get_booking(booking_id)
    if booking.role_of(user) is None:
        raise Unauthorized("This booking does not belong to you.")
    return booking
