"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Profile of a platform user."""

    class Meta:
        model = User
        fields = [
            "id",
            "phone",
            "name",
            "email",
            "village",
            "district",
            "state",
            "pincode",
            "created_at",
        ]
        read_only_fields = ["id", "phone", "created_at"]


class UserShortSerializer(serializers.ModelSerializer):
    """Owner/borrower contact embedded in equipment and booking payloads."""

    class Meta:
        model = User
        fields = ["id", "name", "phone"]
        read_only_fields = fields
