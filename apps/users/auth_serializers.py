"""Serializers for authentication flows (signup, login)."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from django.db import transaction  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import MOBILE_VALIDATOR, AccountType


User = get_user_model()


class SignupSerializer(serializers.Serializer):
    full_name = serializers.CharField(min_length=2, max_length=150, trim_whitespace=True)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    mobile = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        validators=[MOBILE_VALIDATOR],
    )
    password = serializers.CharField(min_length=6, write_only=True, trim_whitespace=True)
    account_type = serializers.ChoiceField(choices=AccountType.choices)

    def validate_mobile(self, value: str | None) -> str | None:
        return User.objects.normalize_mobile(value) if value else None

    def validate_email(self, value: str | None) -> str | None:
        return value.lower() if value else None

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        email = attrs.get("email")
        mobile = attrs.get("mobile")
        if not email and not mobile:
            raise serializers.ValidationError(
                {"non_field_errors": ["Please provide either email or mobile number"]}
            )
        if email and User.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError({"email": "User with this email already exists"})
        if mobile and User.objects.filter(mobile=mobile).exists():
            raise serializers.ValidationError({"mobile": "User with this mobile number already exists"})
        return attrs

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]):  # type: ignore
        password = validated_data.pop("password")
        return User.objects.create_user(password=password, **validated_data)


class LoginSerializer(serializers.Serializer):
    login = serializers.CharField()
    password = serializers.CharField(min_length=6, write_only=True, trim_whitespace=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        try:
            user = User.objects.get_by_login(attrs.get("login", ""))
        except User.DoesNotExist:
            raise serializers.ValidationError({"login": "Invalid credentials"})

        if not user.check_password(attrs.get("password", "")):
            raise serializers.ValidationError({"login": "Invalid credentials"})

        attrs["user"] = user
        return attrs
