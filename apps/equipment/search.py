"""
Proximity search over the equipment catalogue.

``rank_equipment`` is the pure ranking step: it filters, measures and
orders an in-memory collection, so the same input always yields the same
list. ``search_equipment`` narrows the candidates in the database first
(availability, category and a latitude band around the origin) and then
hands them to the ranking step.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Iterable

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore

from shared.domain.value_objects import GeoPoint

from .geo import haversine_km, latitude_band
from .models import Equipment

logger = logging.getLogger(__name__)


class SortBy(models.TextChoices):
    DISTANCE = "distance", "Distance"
    PRICE = "price", "Price"
    RATING = "rating", "Rating"


class SortOrder(models.TextChoices):
    ASC = "asc", "Ascending"
    DESC = "desc", "Descending"


class PriceBasis(models.TextChoices):
    HOURLY = "hourly", "Hourly"
    DAILY = "daily", "Daily"
    WEEKLY = "weekly", "Weekly"


@dataclass(frozen=True)
class SearchQuery:
    """Search parameters.

    ``min_price`` and ``max_price`` bound the rate named by ``price_basis``,
    or the display price when no basis is given. Equipment without that
    rate is left out whenever a bound is set.
    """

    origin: GeoPoint
    radius_km: float = 50.0
    category: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    price_basis: str | None = None
    sort_by: str = SortBy.DISTANCE
    sort_order: str = SortOrder.ASC
    limit: int | None = None


@dataclass(frozen=True)
class SearchHit:
    equipment: Equipment
    distance_km: float


def _sort_key(sort_by: str):
    if sort_by == SortBy.PRICE:
        return lambda hit: hit.equipment.display_price
    if sort_by == SortBy.RATING:
        return lambda hit: hit.equipment.rating
    return lambda hit: hit.distance_km


def _within_price_bounds(item: Equipment, query: SearchQuery) -> bool:
    if query.min_price is None and query.max_price is None:
        return True
    price = item.price_for(query.price_basis)
    if price is None:
        return False
    if query.min_price is not None and price < query.min_price:
        return False
    if query.max_price is not None and price > query.max_price:
        return False
    return True


def rank_equipment(candidates: Iterable[Equipment], query: SearchQuery) -> list[SearchHit]:
    """Filter ``candidates`` by ``query`` and order them.

    Ties on the sort key are broken by ascending id in both directions.
    """
    hits = []
    for item in candidates:
        if not item.available:
            continue
        if query.category and item.category != query.category:
            continue
        if item.display_price is None or not _within_price_bounds(item, query):
            continue
        distance = haversine_km(query.origin, item.location)
        if distance > query.radius_km:
            continue
        hits.append(SearchHit(equipment=item, distance_km=distance))

    # Two stable sorts: by id first, then by the key
    hits.sort(key=lambda hit: hit.equipment.pk)
    hits.sort(key=_sort_key(query.sort_by), reverse=query.sort_order == SortOrder.DESC)

    if query.limit is not None:
        hits = hits[: query.limit]
    return hits


def search_equipment(query: SearchQuery) -> list[SearchHit]:
    max_results = settings.EQUIPMENT_SEARCH_MAX_RESULTS
    limit = max_results if query.limit is None else min(query.limit, max_results)
    query = replace(query, limit=limit)

    lat_min, lat_max = latitude_band(query.origin, query.radius_km)
    candidates = Equipment.objects.select_related("owner").filter(
        available=True,
        latitude__gte=Decimal(str(lat_min)),
        latitude__lte=Decimal(str(lat_max)),
    )
    if query.category:
        candidates = candidates.filter(category=query.category)

    hits = rank_equipment(candidates, query)
    logger.info(
        "Equipment search at %s within %s km returned %d results",
        query.origin,
        query.radius_km,
        len(hits),
    )
    return hits
