"""Admin registration for equipment listings."""

from __future__ import annotations

from django.contrib import admin

from .models import Equipment


@admin.register(Equipment)
class EquipmentAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "category",
        "owner",
        "price_per_hour",
        "price_per_day",
        "price_per_week",
        "available",
        "rating",
        "times_rented",
    )
    list_filter = ("category", "available", "state")
    search_fields = ("name", "owner__phone", "owner__name", "village", "district")
    raw_id_fields = ("owner",)
    readonly_fields = ("rating", "total_ratings", "times_rented", "created_at", "updated_at")
