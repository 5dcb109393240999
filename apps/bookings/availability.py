"""
Availability conflict checks.

A candidate interval conflicts with a booking of the same equipment when
the booking holds the equipment (APPROVED or ACTIVE) and the half-open
intervals overlap. PENDING requests never block each other; the owner
decides which one to approve.
"""

from __future__ import annotations

from typing import Iterable

from django.db.models import Q  # type: ignore

from shared.domain.exceptions import SlotConflict
from shared.domain.value_objects import TimeInterval

from .domain.lifecycle import BLOCKING_STATUSES


def has_conflict(
    bookings: Iterable,
    equipment_id,
    interval: TimeInterval,
    exclude_booking_id=None,
) -> bool:
    """
    Pure check of ``interval`` against an in-memory booking collection.

    Only bookings of ``equipment_id`` in a blocking status are considered;
    the booking identified by ``exclude_booking_id`` is skipped so an
    existing booking can be re-checked against the others.
    """
    for booking in bookings:
        if booking.equipment_id != equipment_id:
            continue
        if exclude_booking_id is not None and booking.id == exclude_booking_id:
            continue
        if booking.status not in BLOCKING_STATUSES:
            continue
        if booking.interval.overlaps_with(interval):
            return True
    return False


def conflicting_bookings(equipment_id, interval: TimeInterval, exclude_booking_id=None):
    """Queryset of blocking bookings of ``equipment_id`` overlapping ``interval``."""
    from .models import Booking  # Local import to prevent circular dependency

    overlapping_filter = Q(start_time__lt=interval.end) & Q(end_time__gt=interval.start)

    bookings_qs = Booking.objects.filter(
        equipment_id=equipment_id,
        status__in=BLOCKING_STATUSES,
    ).filter(overlapping_filter)

    if exclude_booking_id is not None:
        bookings_qs = bookings_qs.exclude(pk=exclude_booking_id)

    return bookings_qs


def ensure_slot_is_free(equipment_id, interval: TimeInterval, *, exclude_booking_id=None) -> None:
    """Raise ``SlotConflict`` if the slot is already held by another booking."""
    clash = (
        conflicting_bookings(equipment_id, interval, exclude_booking_id)
        .order_by("start_time")
        .values_list("id", flat=True)
        .first()
    )
    if clash is not None:
        raise SlotConflict(conflicting_booking_id=clash)
