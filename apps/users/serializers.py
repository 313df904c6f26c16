"""Serializers for user-related API responses."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Profile of the signed-in user."""

    class Meta:
        model = User
        fields = [
            "id",
            "full_name",
            "email",
            "mobile",
            "account_type",
            "created_at",
        ]
        read_only_fields = fields


class OwnerShortSerializer(serializers.ModelSerializer):
    """Owner details shown next to a listing."""

    class Meta:
        model = User
        fields = ["id", "full_name", "email", "mobile"]
        read_only_fields = fields
