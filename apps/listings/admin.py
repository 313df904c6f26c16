"""Admin registrations for the listings domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Listing


@admin.register(Listing)
class ListingAdmin(admin.ModelAdmin):
    list_display = (
        "title",
        "property_type",
        "location_division",
        "location_district",
        "location_area",
        "rent_amount",
        "is_available",
        "is_verified",
        "owner",
        "created_at",
    )
    list_filter = ("property_type", "is_available", "is_verified", "furnished", "location_division")
    search_fields = ("title", "location_area", "location_district", "owner__email", "owner__mobile")
    readonly_fields = ("id", "owner", "rent_currency", "is_verified", "created_at", "updated_at")
    list_select_related = ("owner",)
