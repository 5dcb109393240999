"""Tests for shared value objects and the domain error handler."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from rest_framework.exceptions import ValidationError

from shared.domain.exceptions import InvalidInterval, SlotConflict
from shared.infrastructure.exception_handler import domain_exception_handler
from shared.domain.value_objects import TimeInterval

T0 = datetime(2026, 6, 1, 8, 0, tzinfo=timezone.utc)


def test_interval_must_not_be_empty():
    with pytest.raises(InvalidInterval):
        TimeInterval(T0, T0)
    with pytest.raises(InvalidInterval):
        TimeInterval(T0, T0 - timedelta(minutes=1))


def test_interval_duration_in_fractional_hours():
    assert TimeInterval(T0, T0 + timedelta(minutes=90)).duration_hours == Decimal("1.5")


def test_overlap_is_half_open():
    morning = TimeInterval(T0, T0 + timedelta(hours=4))

    assert morning.overlaps_with(TimeInterval(T0 + timedelta(hours=3), T0 + timedelta(hours=5)))
    assert not morning.overlaps_with(TimeInterval(T0 + timedelta(hours=4), T0 + timedelta(hours=5)))


def test_domain_error_payload():
    error = SlotConflict(conflicting_booking_id=7)

    assert error.status_code == 409
    assert error.to_dict() == {
        "detail": "Equipment is already booked for the selected time.",
        "code": "slot_conflict",
        "conflicting_booking_id": 7,
    }


def test_handler_renders_domain_errors():
    response = domain_exception_handler(InvalidInterval("Start time cannot be in the past."), {})

    assert response.status_code == 400
    assert response.data == {"detail": "Start time cannot be in the past.", "code": "invalid_interval"}


def test_handler_leaves_other_errors_to_rest_framework():
    response = domain_exception_handler(ValidationError({"rating": ["Required."]}), {})

    assert response.status_code == 400
    assert response.data == {"rating": ["Required."]}
