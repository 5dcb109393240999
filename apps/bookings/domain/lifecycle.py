"""
Booking Lifecycle

The booking status finite state machine. ``TRANSITIONS`` and
``ACTION_ROLES`` are the only place where legal moves are defined; every
status change in the application goes through ``resolve_transition``.

State transitions (terminal states marked T):
- PENDING  -> APPROVED   (approve, owner)
- PENDING  -> REJECTED T (reject, owner)
- PENDING  -> CANCELLED T (cancel, borrower)
- APPROVED -> ACTIVE     (start, owner)
- APPROVED -> CANCELLED T (cancel, borrower)
- ACTIVE   -> COMPLETED T (complete, owner)
"""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.exceptions import InvalidTransition, Unauthorized


class BookingStatus(models.TextChoices):
    PENDING = "pending", _("Awaiting owner approval")
    APPROVED = "approved", _("Approved")
    REJECTED = "rejected", _("Rejected")
    ACTIVE = "active", _("Rental in progress")
    COMPLETED = "completed", _("Completed")
    CANCELLED = "cancelled", _("Cancelled")


class BookingAction(models.TextChoices):
    APPROVE = "approve", _("Approve")
    REJECT = "reject", _("Reject")
    START = "start", _("Start rental")
    COMPLETE = "complete", _("Complete rental")
    CANCEL = "cancel", _("Cancel")


class Role(models.TextChoices):
    OWNER = "owner", _("Owner")
    BORROWER = "borrower", _("Borrower")


ACTION_ROLES: dict[BookingAction, Role] = {
    BookingAction.APPROVE: Role.OWNER,
    BookingAction.REJECT: Role.OWNER,
    BookingAction.START: Role.OWNER,
    BookingAction.COMPLETE: Role.OWNER,
    BookingAction.CANCEL: Role.BORROWER,
}

TRANSITIONS: dict[tuple[BookingStatus, BookingAction], BookingStatus] = {
    (BookingStatus.PENDING, BookingAction.APPROVE): BookingStatus.APPROVED,
    (BookingStatus.PENDING, BookingAction.REJECT): BookingStatus.REJECTED,
    (BookingStatus.PENDING, BookingAction.CANCEL): BookingStatus.CANCELLED,
    (BookingStatus.APPROVED, BookingAction.START): BookingStatus.ACTIVE,
    (BookingStatus.APPROVED, BookingAction.CANCEL): BookingStatus.CANCELLED,
    (BookingStatus.ACTIVE, BookingAction.COMPLETE): BookingStatus.COMPLETED,
}

TERMINAL_STATUSES = frozenset({
    BookingStatus.REJECTED,
    BookingStatus.COMPLETED,
    BookingStatus.CANCELLED,
})

# Statuses that hold the equipment; their intervals must never overlap
BLOCKING_STATUSES = frozenset({
    BookingStatus.APPROVED,
    BookingStatus.ACTIVE,
})


def resolve_transition(
    status: BookingStatus | str,
    action: BookingAction | str,
    role: Role | str | None,
) -> BookingStatus:
    """
    Return the status a booking moves to when ``role`` performs ``action``.

    The actor is checked before the status, so a stranger learns nothing
    about the booking's state.

    Raises:
        Unauthorized: role is not the one the action requires
        InvalidTransition: the action is not allowed from ``status``
    """
    action = BookingAction(action)
    required = ACTION_ROLES[action]
    if role is None or Role(role) != required:
        raise Unauthorized(f"Only the {required.label.lower()} can {action.value} this booking.")

    status = BookingStatus(status)
    target = TRANSITIONS.get((status, action))
    if target is None:
        raise InvalidTransition(
            f"Cannot {action.value} a booking with status {status.value}.",
            current_status=status.value,
        )
    return target


def available_actions(status: BookingStatus | str, role: Role | str | None) -> list[str]:
    """Actions ``role`` may perform on a booking in ``status``."""
    if role is None:
        return []
    status = BookingStatus(status)
    role = Role(role)
    return [
        action.value
        for (source, action) in TRANSITIONS
        if source == status and ACTION_ROLES[action] == role
    ]


def is_terminal(status: BookingStatus | str) -> bool:
    return BookingStatus(status) in TERMINAL_STATUSES
