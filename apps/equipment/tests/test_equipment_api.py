"""Integration tests for equipment API endpoints."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.tests.factories import future, make_booking, make_equipment, make_user
from apps.equipment.models import Equipment


class EquipmentAPITests(APITestCase):
    def setUp(self) -> None:
        self.owner = make_user("Ramesh")
        self.other = make_user("Sunita")
        self.client.force_authenticate(self.owner)

    def _payload(self, **extra) -> dict:
        payload = {
            "name": "Kubota Harvester",
            "category": "harvester",
            "price_per_hour": "450.00",
            "price_per_day": "6000.00",
            "latitude": "20.100000",
            "longitude": "78.050000",
            "village": "Wadgaon",
            "district": "Wardha",
            "state": "Maharashtra",
            "images": ["harvester/front.jpg"],
        }
        payload.update(extra)
        return payload

    def test_owner_creates_listing(self) -> None:
        response = self.client.post(reverse("equipment-my-list"), self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["owner"]["id"], self.owner.pk)
        self.assertEqual(response.data["display_price"], "6000.00")
        self.assertEqual(response.data["images"], ["harvester/front.jpg"])
        self.assertTrue(response.data["available"])

    def test_listing_needs_at_least_one_rate(self) -> None:
        payload = self._payload(price_per_hour=None, price_per_day=None)

        response = self.client.post(reverse("equipment-my-list"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Equipment.objects.exists())

    def test_partial_update_cannot_clear_every_rate(self) -> None:
        equipment = make_equipment(self.owner)

        response = self.client.patch(
            reverse("equipment-my-detail", args=[equipment.pk]),
            {"price_per_day": None},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_my_list_only_shows_own_equipment(self) -> None:
        mine = make_equipment(self.owner)
        make_equipment(self.other)

        response = self.client.get(reverse("equipment-my-list"))

        self.assertEqual([item["id"] for item in response.data], [mine.pk])

    def test_cannot_edit_someone_elses_equipment(self) -> None:
        theirs = make_equipment(self.other)

        response = self.client.patch(
            reverse("equipment-my-detail", args=[theirs.pk]),
            {"name": "Mine now"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_toggle_availability(self) -> None:
        equipment = make_equipment(self.owner)

        response = self.client.patch(reverse("equipment-my-toggle-availability", args=[equipment.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertFalse(response.data["available"])
        equipment.refresh_from_db()
        self.assertFalse(equipment.available)

    def test_delete_is_blocked_by_open_bookings(self) -> None:
        equipment = make_equipment(self.owner)
        start = future(days=2)
        make_booking(equipment, self.other, start, start + timedelta(hours=5))

        response = self.client.delete(reverse("equipment-my-detail", args=[equipment.pk]))

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "equipment_in_use")

    def test_delete_without_bookings(self) -> None:
        equipment = make_equipment(self.owner)

        response = self.client.delete(reverse("equipment-my-detail", args=[equipment.pk]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Equipment.objects.filter(pk=equipment.pk).exists())

    def test_public_catalogue(self) -> None:
        self.client.force_authenticate(None)
        tractor = make_equipment(self.owner)
        harvester = make_equipment(self.owner, name="Kubota", category=Equipment.Category.HARVESTER)
        hidden = make_equipment(self.owner, available=False)

        listing = self.client.get(reverse("equipment-public-list"))
        filtered = self.client.get(reverse("equipment-public-list"), {"category": "harvester"})
        detail = self.client.get(reverse("equipment-public-detail", args=[hidden.pk]))

        self.assertEqual({item["id"] for item in listing.data}, {tractor.pk, harvester.pk})
        self.assertEqual([item["id"] for item in filtered.data], [harvester.pk])
        self.assertEqual(detail.status_code, status.HTTP_200_OK)
        self.assertFalse(detail.data["available"])

    def test_categories(self) -> None:
        response = self.client.get(reverse("equipment-categories"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn({"value": "tractor", "label": "Tractor"}, response.data)
        self.assertEqual(len(response.data), len(Equipment.Category.choices))

    def test_search_endpoint(self) -> None:
        self.client.force_authenticate(None)
        near = make_equipment(self.owner, latitude=Decimal("20.359730"))
        make_equipment(self.owner, latitude=Decimal("20.539593"))

        response = self.client.post(
            reverse("equipment-search"),
            {"latitude": 20.0, "longitude": 78.0, "radius_km": 50},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["equipment"]["id"], near.pk)
        self.assertEqual(response.data[0]["distance_km"], 40.0)

    def test_search_uses_default_radius(self) -> None:
        make_equipment(self.owner, latitude=Decimal("20.359730"))
        make_equipment(self.owner, latitude=Decimal("20.539593"))

        response = self.client.post(reverse("equipment-search"), {"latitude": 20.0, "longitude": 78.0}, format="json")

        self.assertEqual(len(response.data), 1)

    def test_search_filters_by_weekly_price_range(self) -> None:
        cheap = make_equipment(self.owner, price_per_week=Decimal("9000.00"))
        make_equipment(self.owner, price_per_week=Decimal("15000.00"))
        make_equipment(self.owner)

        response = self.client.post(
            reverse("equipment-search"),
            {
                "latitude": 20.0,
                "longitude": 78.0,
                "min_price": "5000",
                "max_price": "10000",
                "price_basis": "weekly",
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([hit["equipment"]["id"] for hit in response.data], [cheap.pk])

    def test_search_rejects_inverted_price_range(self) -> None:
        response = self.client.post(
            reverse("equipment-search"),
            {"latitude": 20.0, "longitude": 78.0, "min_price": "3000", "max_price": "1000"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("min_price", response.data)

    def test_search_validates_coordinates(self) -> None:
        response = self.client.post(reverse("equipment-search"), {"latitude": 95, "longitude": 78.0}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("latitude", response.data)
