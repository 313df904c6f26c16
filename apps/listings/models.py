"""Listing domain model for Rentnest.

A listing is a single property offered for rent by an owner account.
Its sub-documents (location, rent, features, contact, terms) are stored
in prefixed columns so that every filter of the public feed is a plain
indexed column lookup; the API renders them nested again.
"""

from __future__ import annotations

import uuid

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import PLATFORM_CURRENCY, Money


class PropertyType(models.TextChoices):
    APARTMENT = "apartment", _("Apartment")
    HOSTEL = "hostel", _("Hostel")
    SUBLET = "sublet", _("Sublet")
    ROOM = "room", _("Room")
    HOUSE = "house", _("House")


class RentPeriod(models.TextChoices):
    MONTHLY = "monthly", _("Monthly")
    DAILY = "daily", _("Daily")


class SizeUnit(models.TextChoices):
    SQFT = "sqft", _("Square feet")
    SQM = "sqm", _("Square metres")


class Furnishing(models.TextChoices):
    FURNISHED = "furnished", _("Furnished")
    SEMI_FURNISHED = "semi-furnished", _("Semi-furnished")
    UNFURNISHED = "unfurnished", _("Unfurnished")


TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 2000


class Listing(models.Model):
    """Rental property published by an owner."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="listings",
        editable=False,
    )
    title = models.CharField(max_length=TITLE_MAX_LENGTH)
    description = models.TextField(max_length=DESCRIPTION_MAX_LENGTH)
    property_type = models.CharField(max_length=20, choices=PropertyType.choices)

    location_division = models.CharField(max_length=100)
    location_district = models.CharField(max_length=100)
    location_area = models.CharField(max_length=150)
    location_address = models.CharField(max_length=255)

    rent_amount = models.DecimalField(max_digits=12, decimal_places=2)
    rent_currency = models.CharField(max_length=3, default=PLATFORM_CURRENCY, editable=False)
    rent_period = models.CharField(max_length=10, choices=RentPeriod.choices, default=RentPeriod.MONTHLY)

    bedrooms = models.PositiveSmallIntegerField(null=True, blank=True)
    bathrooms = models.PositiveSmallIntegerField(null=True, blank=True)
    size_value = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    size_unit = models.CharField(max_length=4, choices=SizeUnit.choices, default=SizeUnit.SQFT)
    furnished = models.CharField(max_length=20, choices=Furnishing.choices, default=Furnishing.UNFURNISHED)

    amenities = models.JSONField(default=list, blank=True)
    photos = models.JSONField(default=list, blank=True, help_text=_("Ordered list of {url, caption}."))

    contact_name = models.CharField(max_length=150)
    contact_phone = models.CharField(max_length=11)
    contact_email = models.EmailField(blank=True)

    minimum_stay = models.CharField(max_length=100, blank=True)
    security_deposit = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    utilities_included = models.BooleanField(default=False)
    pets_allowed = models.BooleanField(default=False)
    smoking_allowed = models.BooleanField(default=False)
    additional_rules = models.TextField(blank=True)

    is_available = models.BooleanField(default=True)
    is_verified = models.BooleanField(default=False, editable=False)
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name = _("Listing")
        verbose_name_plural = _("Listings")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["is_available", "-created_at"], name="listings_li_is_avai_6f1c2e_idx"),
            models.Index(fields=["owner", "-created_at"], name="listings_li_owner_i_0b7a41_idx"),
            models.Index(fields=["property_type"], name="listings_li_propert_9d3e57_idx"),
            models.Index(fields=["rent_amount"], name="listings_li_rent_am_4c28f0_idx"),
        ]

    def __str__(self) -> str:
        return self.title

    @property
    def rent(self) -> Money:
        return Money.of(self.rent_amount)

    @property
    def photo_urls(self) -> list[str]:
        return [photo.get("url") for photo in self.photos or [] if photo.get("url")]
