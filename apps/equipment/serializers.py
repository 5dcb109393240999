"""Serializers for the equipment catalogue."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserShortSerializer
from shared.domain.value_objects import GeoPoint

from .models import Equipment
from .search import PriceBasis, SearchQuery, SortBy, SortOrder

RATE_FIELDS = ("price_per_hour", "price_per_day", "price_per_week")


class EquipmentSerializer(serializers.ModelSerializer):
    """Read serializer for listings."""

    owner = UserShortSerializer(read_only=True)
    display_price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)

    class Meta:
        model = Equipment
        fields = [
            "id",
            "owner",
            "name",
            "description",
            "category",
            "price_per_hour",
            "price_per_day",
            "price_per_week",
            "display_price",
            "latitude",
            "longitude",
            "address",
            "village",
            "district",
            "state",
            "pincode",
            "available",
            "images",
            "rating",
            "total_ratings",
            "times_rented",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class EquipmentWriteSerializer(serializers.ModelSerializer):
    """Create/update payload of an owner's listing."""

    images = serializers.ListField(child=serializers.CharField(max_length=500), required=False)

    class Meta:
        model = Equipment
        fields = [
            "name",
            "description",
            "category",
            "price_per_hour",
            "price_per_day",
            "price_per_week",
            "latitude",
            "longitude",
            "address",
            "village",
            "district",
            "state",
            "pincode",
            "available",
            "images",
        ]

    def validate(self, attrs):  # type: ignore
        rates = {
            field: attrs.get(field, getattr(self.instance, field, None))
            for field in RATE_FIELDS
        }
        if all(value is None for value in rates.values()):
            raise serializers.ValidationError(
                "Set at least one of the hourly, daily or weekly price."
            )
        return attrs


class EquipmentSearchSerializer(serializers.Serializer):
    """Search request; validated data maps onto ``SearchQuery``."""

    latitude = serializers.FloatField(min_value=-90, max_value=90)
    longitude = serializers.FloatField(min_value=-180, max_value=180)
    radius_km = serializers.FloatField(min_value=0, required=False)
    category = serializers.ChoiceField(choices=Equipment.Category.choices, required=False)
    min_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0"), required=False
    )
    max_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0"), required=False
    )
    price_basis = serializers.ChoiceField(choices=PriceBasis.choices, required=False)
    sort_by = serializers.ChoiceField(choices=SortBy.choices, default=SortBy.DISTANCE)
    sort_order = serializers.ChoiceField(choices=SortOrder.choices, default=SortOrder.ASC)
    limit = serializers.IntegerField(min_value=1, required=False)

    def validate(self, attrs):  # type: ignore
        min_price, max_price = attrs.get("min_price"), attrs.get("max_price")
        if min_price is not None and max_price is not None and min_price > max_price:
            raise serializers.ValidationError({"min_price": "Must not exceed max_price."})
        return attrs

    def to_query(self) -> SearchQuery:
        data = self.validated_data
        return SearchQuery(
            origin=GeoPoint(data["latitude"], data["longitude"]),
            radius_km=data.get("radius_km", settings.EQUIPMENT_SEARCH_DEFAULT_RADIUS_KM),
            category=data.get("category"),
            min_price=data.get("min_price"),
            max_price=data.get("max_price"),
            price_basis=data.get("price_basis"),
            sort_by=data["sort_by"],
            sort_order=data["sort_order"],
            limit=data.get("limit"),
        )


class SearchHitSerializer(serializers.Serializer):
    equipment = EquipmentSerializer(read_only=True)
    distance_km = serializers.SerializerMethodField()

    def get_distance_km(self, obj) -> float:
        return round(obj.distance_km, 1)
