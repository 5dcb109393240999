"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "equipment_name",
        "owner",
        "borrower",
        "status",
        "start_time",
        "end_time",
        "total_cost",
        "created_at",
    )
    list_filter = ("status", "pricing_type", "equipment_category")
    search_fields = ("equipment_name", "owner__phone", "borrower__phone", "borrower__name")
    raw_id_fields = ("equipment", "owner", "borrower")
    readonly_fields = (
        "status",
        "total_cost",
        "pricing_type",
        "duration_hours",
        "approved_at",
        "rejected_at",
        "started_at",
        "completed_at",
        "cancelled_at",
        "created_at",
        "updated_at",
    )
