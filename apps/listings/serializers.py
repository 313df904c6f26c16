"""Serializers for the listings domain.

Sub-documents are flattened into prefixed model columns; the nested
serializers below use ``source="*"`` so that the API keeps the nested
shape while validated data comes back keyed by column name.
"""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.users.serializers import OwnerShortSerializer

from .models import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Furnishing,
    PropertyType,
    RentPeriod,
    SizeUnit,
)


class LocationSerializer(serializers.Serializer):
    division = serializers.CharField(source="location_division", max_length=100)
    district = serializers.CharField(source="location_district", max_length=100)
    area = serializers.CharField(source="location_area", max_length=150)
    address = serializers.CharField(source="location_address", max_length=255)


class RentSerializer(serializers.Serializer):
    # The 800 BDT floor is a moderation check, not a structural one.
    amount = serializers.DecimalField(source="rent_amount", max_digits=12, decimal_places=2)
    currency = serializers.CharField(source="rent_currency", read_only=True)
    period = serializers.ChoiceField(source="rent_period", choices=RentPeriod.choices, default=RentPeriod.MONTHLY)


class SizeSerializer(serializers.Serializer):
    value = serializers.DecimalField(
        source="size_value", max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    unit = serializers.ChoiceField(source="size_unit", choices=SizeUnit.choices, default=SizeUnit.SQFT)


class FeaturesSerializer(serializers.Serializer):
    bedrooms = serializers.IntegerField(min_value=0, max_value=32767, required=False, allow_null=True)
    bathrooms = serializers.IntegerField(min_value=0, max_value=32767, required=False, allow_null=True)
    size = SizeSerializer(source="*", required=False)
    furnished = serializers.ChoiceField(choices=Furnishing.choices, default=Furnishing.UNFURNISHED)


class ContactSerializer(serializers.Serializer):
    name = serializers.CharField(source="contact_name", max_length=150)
    # Format is checked by moderation so that a bad number reads as a rejection.
    phone = serializers.CharField(source="contact_phone", allow_blank=True, max_length=32)
    email = serializers.EmailField(source="contact_email", required=False, allow_blank=True)


class TermsSerializer(serializers.Serializer):
    minimum_stay = serializers.CharField(required=False, allow_blank=True, max_length=100)
    security_deposit = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    utilities_included = serializers.BooleanField(required=False)
    pets_allowed = serializers.BooleanField(required=False)
    smoking_allowed = serializers.BooleanField(required=False)
    additional_rules = serializers.CharField(required=False, allow_blank=True)


class PhotoSerializer(serializers.Serializer):
    url = serializers.URLField(read_only=True)
    caption = serializers.CharField(read_only=True)


class ListingInputSerializer(serializers.Serializer):
    """Structural validation of a submission or an edit.

    ``validated_data`` is keyed by model column, ready to be persisted.
    Ownership, identifiers, timestamps and the verification flag are not
    part of the input.
    """

    title = serializers.CharField(max_length=TITLE_MAX_LENGTH)
    description = serializers.CharField(max_length=DESCRIPTION_MAX_LENGTH)
    property_type = serializers.ChoiceField(choices=PropertyType.choices)
    location = LocationSerializer(source="*")
    rent = RentSerializer(source="*")
    features = FeaturesSerializer(source="*", required=False)
    amenities = serializers.ListField(
        child=serializers.CharField(max_length=100), required=False, max_length=50
    )
    contact = ContactSerializer(source="*")
    terms = TermsSerializer(source="*", required=False)


class ListingSerializer(ListingInputSerializer):
    """Public representation of a listing."""

    id = serializers.UUIDField(read_only=True)
    owner = OwnerShortSerializer(read_only=True)
    photos = PhotoSerializer(many=True, read_only=True)
    is_available = serializers.BooleanField(read_only=True)
    is_verified = serializers.BooleanField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)


class ListingUpdateSerializer(ListingInputSerializer):
    """An owner's edit: the submission fields plus availability."""

    is_available = serializers.BooleanField(required=False)
