"""Tests for the equipment proximity search."""

from __future__ import annotations

from decimal import Decimal

from django.test import TestCase, override_settings

from apps.bookings.tests.factories import make_equipment, make_user
from apps.equipment.models import Equipment
from apps.equipment.search import SearchQuery, rank_equipment, search_equipment
from shared.domain.value_objects import GeoPoint

ORIGIN = GeoPoint(20.0, 78.0)

# Degrees of latitude north of the origin for a given distance
KM_40 = Decimal("20.359730")
KM_60 = Decimal("20.539593")
KM_10 = Decimal("20.089932")


def listing(pk, latitude=KM_10, **extra) -> Equipment:
    fields = {
        "name": f"Item {pk}",
        "category": Equipment.Category.TRACTOR,
        "price_per_day": Decimal("2000.00"),
        "latitude": latitude,
        "longitude": Decimal("78.000000"),
        "available": True,
        "rating": Decimal("0.00"),
    }
    fields.update(extra)
    return Equipment(pk=pk, **fields)


def ids(hits) -> list[int]:
    return [hit.equipment.pk for hit in hits]


def test_radius_keeps_40_km_and_drops_60_km():
    hits = rank_equipment([listing(1, KM_40), listing(2, KM_60)], SearchQuery(origin=ORIGIN, radius_km=50))

    assert ids(hits) == [1]
    assert round(hits[0].distance_km, 1) == 40.0


def test_unavailable_equipment_is_hidden():
    hits = rank_equipment([listing(1, available=False), listing(2)], SearchQuery(origin=ORIGIN))

    assert ids(hits) == [2]


def test_category_and_max_price_filters():
    candidates = [
        listing(1, category=Equipment.Category.HARVESTER),
        listing(2, price_per_day=Decimal("3500.00")),
        listing(3, price_per_day=Decimal("1500.00")),
        listing(4, price_per_day=None, price_per_hour=Decimal("250.00")),
    ]

    hits = rank_equipment(
        candidates,
        SearchQuery(origin=ORIGIN, category=Equipment.Category.TRACTOR, max_price=Decimal("2000")),
    )

    assert ids(hits) == [3, 4]


def test_min_and_max_price_bound_the_display_price():
    candidates = [
        listing(1, price_per_day=Decimal("900.00")),
        listing(2, price_per_day=Decimal("1500.00")),
        listing(3, price_per_day=Decimal("2500.00")),
    ]

    hits = rank_equipment(
        candidates,
        SearchQuery(origin=ORIGIN, min_price=Decimal("1000"), max_price=Decimal("2000")),
    )

    assert ids(hits) == [2]


def test_price_basis_selects_the_rate_to_bound():
    candidates = [
        listing(1, price_per_day=Decimal("5000.00"), price_per_hour=Decimal("300.00")),
        listing(2, price_per_day=Decimal("1500.00"), price_per_hour=Decimal("800.00")),
        listing(3, price_per_day=Decimal("1000.00")),
    ]

    hits = rank_equipment(
        candidates,
        SearchQuery(origin=ORIGIN, max_price=Decimal("500"), price_basis="hourly"),
    )

    assert ids(hits) == [1]


def test_price_basis_without_bounds_filters_nothing():
    candidates = [listing(1), listing(2, price_per_day=None, price_per_week=Decimal("9000.00"))]

    hits = rank_equipment(candidates, SearchQuery(origin=ORIGIN, price_basis="weekly"))

    assert ids(hits) == [1, 2]


def test_sorted_by_distance_by_default():
    hits = rank_equipment([listing(1, KM_40), listing(2, KM_10)], SearchQuery(origin=ORIGIN))

    assert ids(hits) == [2, 1]


def test_ties_are_broken_by_id_in_both_directions():
    candidates = [
        listing(3, rating=Decimal("4.00")),
        listing(1, rating=Decimal("4.00")),
        listing(2, rating=Decimal("4.50")),
    ]

    asc = rank_equipment(candidates, SearchQuery(origin=ORIGIN, sort_by="rating", sort_order="asc"))
    desc = rank_equipment(candidates, SearchQuery(origin=ORIGIN, sort_by="rating", sort_order="desc"))

    assert ids(asc) == [1, 3, 2]
    assert ids(desc) == [2, 1, 3]


def test_sort_by_display_price():
    candidates = [
        listing(1, price_per_day=Decimal("2500.00")),
        listing(2, price_per_day=None, price_per_hour=Decimal("300.00")),
        listing(3, price_per_day=None, price_per_week=Decimal("9000.00")),
    ]

    hits = rank_equipment(candidates, SearchQuery(origin=ORIGIN, sort_by="price"))

    assert ids(hits) == [2, 1, 3]


def test_limit_truncates_after_sorting():
    candidates = [listing(1, KM_40), listing(2, KM_10), listing(3, Decimal("20.200000"))]

    hits = rank_equipment(candidates, SearchQuery(origin=ORIGIN, limit=2))

    assert ids(hits) == [2, 3]


def test_ranking_is_deterministic():
    candidates = [listing(pk) for pk in (5, 2, 9, 1)]
    query = SearchQuery(origin=ORIGIN, sort_by="price", sort_order="desc")

    assert ids(rank_equipment(candidates, query)) == ids(rank_equipment(list(reversed(candidates)), query))


class SearchEquipmentTests(TestCase):
    def setUp(self) -> None:
        self.owner = make_user("Ramesh")

    def test_database_search_applies_radius(self) -> None:
        near = make_equipment(self.owner, latitude=KM_40)
        make_equipment(self.owner, latitude=KM_60)
        make_equipment(self.owner, latitude=Decimal("25.000000"))

        hits = search_equipment(SearchQuery(origin=ORIGIN, radius_km=50))

        self.assertEqual(ids(hits), [near.pk])

    @override_settings(EQUIPMENT_SEARCH_MAX_RESULTS=2)
    def test_limit_is_capped(self) -> None:
        for _ in range(3):
            make_equipment(self.owner)

        self.assertEqual(len(search_equipment(SearchQuery(origin=ORIGIN))), 2)
        self.assertEqual(len(search_equipment(SearchQuery(origin=ORIGIN, limit=50))), 2)
        self.assertEqual(len(search_equipment(SearchQuery(origin=ORIGIN, limit=1))), 1)
