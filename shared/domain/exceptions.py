"""
Domain Error Taxonomy

All errors raised by the booking lifecycle engine and the equipment
catalogue. None of them represents a process fault; each one is surfaced
to the caller with enough detail to show a corrective message.
"""

from shared.domain.base import DomainError


class NotFound(DomainError):
    """Referenced equipment or booking does not exist"""
    default_message = "Requested object was not found."
    default_code = "not_found"
    status_code = 404


class Unauthorized(DomainError):
    """Acting user does not hold the role the operation requires"""
    default_message = "You are not allowed to perform this action."
    default_code = "unauthorized"
    status_code = 403


class InvalidTransition(DomainError):
    """Booking status does not allow the requested action"""
    default_message = "Booking status does not allow this action."
    default_code = "invalid_transition"
    status_code = 409


class InvalidInterval(DomainError):
    """Requested time range is empty, inverted or in the past"""
    default_message = "End time must be after start time and start time must not be in the past."
    default_code = "invalid_interval"
    status_code = 400


class SlotConflict(DomainError):
    """Interval overlaps an approved or active booking of the same equipment"""
    default_message = "Equipment is already booked for the selected time."
    default_code = "slot_conflict"
    status_code = 409


class NoApplicableRate(DomainError):
    """Equipment rate table has no hourly, daily or weekly price"""
    default_message = "Equipment has no price set."
    default_code = "no_applicable_rate"
    status_code = 400


class Unavailable(DomainError):
    """Owner has switched the equipment off for bookings"""
    default_message = "Equipment is not available for booking."
    default_code = "unavailable"
    status_code = 409


class SelfBooking(DomainError):
    """Borrower tried to rent their own equipment"""
    default_message = "You cannot book your own equipment."
    default_code = "self_booking"
    status_code = 400


class EquipmentInUse(DomainError):
    """Equipment still has bookings that are not finished"""
    default_message = "Equipment has open bookings and cannot be deleted."
    default_code = "equipment_in_use"
    status_code = 409
