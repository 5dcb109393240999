"""Integration tests for booking API endpoints."""

from __future__ import annotations

from datetime import timedelta

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.bookings.tests.factories import future, make_booking, make_equipment, make_user


class BookingAPITests(APITestCase):
    """Covers creation, conflicts, owner decisions and ratings over HTTP."""

    def setUp(self) -> None:
        self.owner = make_user("Ramesh")
        self.borrower = make_user("Sunita")
        self.stranger = make_user("Vijay")
        self.equipment = make_equipment(self.owner)
        self.start = future(days=3)
        self.client.force_authenticate(self.borrower)

    def _payload(self, start, hours: int = 72) -> dict:
        return {
            "equipment_id": self.equipment.pk,
            "start_time": start.isoformat(),
            "end_time": (start + timedelta(hours=hours)).isoformat(),
            "notes": "Paddy harvest",
        }

    def test_borrower_can_create_booking(self) -> None:
        response = self.client.post(reverse("booking-create"), self._payload(self.start), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["status"], "pending")
        self.assertEqual(response.data["total_cost"], "6000.00")
        self.assertEqual(response.data["pricing_type"], "daily")
        self.assertEqual(response.data["currency"], "INR")
        self.assertEqual(response.data["owner"]["id"], self.owner.pk)
        self.assertEqual(response.data["available_actions"], ["cancel"])
        self.assertEqual(Booking.objects.count(), 1)

    def test_create_requires_authentication(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.post(reverse("booking-create"), self._payload(self.start), format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_prevent_double_booking_on_overlap(self) -> None:
        make_booking(
            self.equipment,
            self.stranger,
            self.start,
            self.start + timedelta(days=1),
            status=Booking.Status.APPROVED,
        )

        response = self.client.post(
            reverse("booking-create"),
            self._payload(self.start + timedelta(hours=6)),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["code"], "slot_conflict")

    def test_owner_cannot_book_own_equipment(self) -> None:
        self.client.force_authenticate(self.owner)

        response = self.client.post(reverse("booking-create"), self._payload(self.start), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "self_booking")

    def test_inverted_interval_is_rejected(self) -> None:
        payload = self._payload(self.start)
        payload["end_time"] = (self.start - timedelta(hours=1)).isoformat()

        response = self.client.post(reverse("booking-create"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "invalid_interval")

    def test_unknown_equipment_is_not_found(self) -> None:
        payload = self._payload(self.start)
        payload["equipment_id"] = 999999

        response = self.client.post(reverse("booking-create"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["code"], "not_found")

    def test_owner_workflow(self) -> None:
        booking = make_booking(self.equipment, self.borrower, self.start, self.start + timedelta(hours=10))
        self.client.force_authenticate(self.owner)

        pending = self.client.get(reverse("booking-renter-pending"))
        self.assertEqual(pending.status_code, status.HTTP_200_OK)
        self.assertEqual([item["id"] for item in pending.data], [booking.pk])
        self.assertEqual(pending.data[0]["available_actions"], ["approve", "reject"])

        for action, expected in (("approve", "approved"), ("start", "active"), ("complete", "completed")):
            response = self.client.patch(reverse(f"booking-renter-{action}", args=[booking.pk]))
            self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
            self.assertEqual(response.data["status"], expected)

        pending = self.client.get(reverse("booking-renter-pending"))
        self.assertEqual(pending.data, [])

    def test_reject_with_reason(self) -> None:
        booking = make_booking(self.equipment, self.borrower, self.start, self.start + timedelta(hours=10))
        self.client.force_authenticate(self.owner)

        response = self.client.patch(
            reverse("booking-renter-reject", args=[booking.pk]),
            {"reason": "Tractor under repair"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], "rejected")
        self.assertEqual(response.data["rejection_reason"], "Tractor under repair")

    def test_borrower_cannot_approve(self) -> None:
        booking = make_booking(self.equipment, self.borrower, self.start, self.start + timedelta(hours=10))

        response = self.client.patch(reverse("booking-renter-approve", args=[booking.pk]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["code"], "unauthorized")

    def test_invalid_transition_is_a_conflict(self) -> None:
        booking = make_booking(self.equipment, self.borrower, self.start, self.start + timedelta(hours=10))
        self.client.force_authenticate(self.owner)

        response = self.client.patch(reverse("booking-renter-complete", args=[booking.pk]))

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "invalid_transition")
        self.assertEqual(response.data["current_status"], "pending")

    def test_borrower_cancels(self) -> None:
        booking = make_booking(self.equipment, self.borrower, self.start, self.start + timedelta(hours=10))

        response = self.client.patch(reverse("booking-cancel", args=[booking.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], "cancelled")

    def test_detail_is_limited_to_stakeholders(self) -> None:
        booking = make_booking(self.equipment, self.borrower, self.start, self.start + timedelta(hours=10))

        response = self.client.get(reverse("booking-detail", args=[booking.pk]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["equipment_id"], self.equipment.pk)

        self.client.force_authenticate(self.stranger)
        response = self.client.get(reverse("booking-detail", args=[booking.pk]))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_lists_are_split_by_role(self) -> None:
        booking = make_booking(self.equipment, self.borrower, self.start, self.start + timedelta(hours=10))

        mine = self.client.get(reverse("booking-my-list"))
        renter = self.client.get(reverse("booking-renter-list"))

        self.assertEqual([item["id"] for item in mine.data], [booking.pk])
        self.assertEqual(renter.data, [])

    def test_list_filters_by_status(self) -> None:
        make_booking(self.equipment, self.borrower, self.start, self.start + timedelta(hours=10))

        response = self.client.get(reverse("booking-my-list"), {"status": "completed"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, [])

    def test_both_sides_rate_completed_booking(self) -> None:
        booking = make_booking(
            self.equipment,
            self.borrower,
            self.start,
            self.start + timedelta(hours=10),
            status=Booking.Status.COMPLETED,
        )

        response = self.client.post(
            reverse("booking-my-rate", args=[booking.pk]),
            {"rating": 5, "review": "Well maintained"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["rating_by_borrower"], 5)

        self.client.force_authenticate(self.owner)
        response = self.client.post(reverse("booking-renter-rate", args=[booking.pk]), {"rating": 4}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["rating_by_owner"], 4)

        self.equipment.refresh_from_db()
        self.assertEqual(self.equipment.total_ratings, 1)

    def test_rating_out_of_range_is_rejected(self) -> None:
        booking = make_booking(
            self.equipment,
            self.borrower,
            self.start,
            self.start + timedelta(hours=10),
            status=Booking.Status.COMPLETED,
        )

        response = self.client.post(reverse("booking-my-rate", args=[booking.pk]), {"rating": 6}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("rating", response.data)
