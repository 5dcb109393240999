"""FilterSet definitions for equipment listings."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Equipment


class EquipmentFilterSet(django_filters.FilterSet):
    """Filters for the public catalogue and the owner's own listings."""

    category = django_filters.ChoiceFilter(choices=Equipment.Category.choices)
    district = django_filters.CharFilter(field_name="district", lookup_expr="icontains")
    state = django_filters.CharFilter(field_name="state", lookup_expr="icontains")
    available = django_filters.BooleanFilter(field_name="available")
    price_per_day_max = django_filters.NumberFilter(field_name="price_per_day", lookup_expr="lte")

    class Meta:
        model = Equipment
        fields = ["category", "district", "state", "available"]
