"""Serializers for the booking domain."""

from __future__ import annotations

from django.conf import settings  # type: ignore

from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserShortSerializer

from .models import Booking


class BookingCreateSerializer(serializers.Serializer):
    """Booking request filed by a borrower."""

    equipment_id = serializers.IntegerField(min_value=1)
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class BookingSerializer(serializers.ModelSerializer):
    """Read serializer shown to both sides of a booking."""

    equipment_id = serializers.ReadOnlyField(source="equipment.id")
    owner = UserShortSerializer(read_only=True)
    borrower = UserShortSerializer(read_only=True)
    currency = serializers.SerializerMethodField()
    available_actions = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "equipment_id",
            "equipment_name",
            "equipment_category",
            "owner",
            "borrower",
            "start_time",
            "end_time",
            "duration_hours",
            "status",
            "pricing_type",
            "total_cost",
            "currency",
            "notes",
            "rejection_reason",
            "rating_by_owner",
            "review_by_owner",
            "rating_by_borrower",
            "review_by_borrower",
            "available_actions",
            "approved_at",
            "rejected_at",
            "started_at",
            "completed_at",
            "cancelled_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_currency(self, obj: Booking) -> str:
        return settings.BOOKING_CURRENCY

    def get_available_actions(self, obj: Booking) -> list[str]:
        request = self.context.get("request")
        if request is None:
            return []
        return obj.actions_for(request.user)


class RejectSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)


class RatingSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=1, max_value=5)
    review = serializers.CharField(required=False, allow_blank=True, default="")
