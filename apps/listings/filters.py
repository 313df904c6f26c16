"""Query building for the public listing feed and the owner dashboard."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Mapping

import django_filters  # type: ignore
from django.conf import settings  # type: ignore
from django.db.models import Q  # type: ignore
from django_filters.constants import EMPTY_VALUES  # type: ignore

from shared.domain.exceptions import InvalidInput

from .models import Furnishing, Listing, PropertyType
from .repository import ListingRepository

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_ORDERING = ("-created_at",)

# Columns searched by the free-text ``search`` parameter
SEARCH_FIELDS = (
    "title",
    "description",
    "location_address",
    "location_area",
    "location_district",
    "location_division",
)


class ListingFilterSet(django_filters.FilterSet):
    """Feed filters. ORM lookups are parameterised, so user text is never a pattern."""

    property_type = django_filters.ChoiceFilter(field_name="property_type", choices=PropertyType.choices)
    division = django_filters.CharFilter(field_name="location_division", lookup_expr="iexact")
    district = django_filters.CharFilter(field_name="location_district", lookup_expr="iexact")
    area = django_filters.CharFilter(field_name="location_area", lookup_expr="iexact")
    min_rent = django_filters.NumberFilter(field_name="rent_amount", lookup_expr="gte")
    max_rent = django_filters.NumberFilter(field_name="rent_amount", lookup_expr="lte")
    bedrooms = django_filters.NumberFilter(field_name="bedrooms", lookup_expr="exact")
    furnished = django_filters.ChoiceFilter(field_name="furnished", choices=Furnishing.choices)
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Listing
        fields = [
            "property_type",
            "division",
            "district",
            "area",
            "min_rent",
            "max_rent",
            "bedrooms",
            "furnished",
            "search",
        ]

    def filter_search(self, queryset, name, value):  # type: ignore
        return queryset.filter(self.search_q(value))

    @staticmethod
    def search_q(value: str) -> Q:
        term = Q()
        for column in SEARCH_FIELDS:
            term |= Q(**{f"{column}__icontains": value})
        return term

    def as_q(self) -> Q:
        """The validated filters as one ``Q``, for repositories that take conditions rather than querysets"""
        if not self.is_valid():
            errors = {
                name: [error["message"] for error in messages]
                for name, messages in self.errors.get_json_data().items()
            }
            raise InvalidInput(errors=errors, message="Invalid query parameters")

        q = Q()
        for name, value in self.form.cleaned_data.items():
            if value in EMPTY_VALUES:
                continue
            declared = self.filters[name]
            if name == "search":
                q &= self.search_q(value)
            else:
                q &= Q(**{f"{declared.field_name}__{declared.lookup_expr}": value})
        return q


@dataclass(frozen=True)
class ListingQuery:
    filters: Q
    ordering: tuple[str, ...] = DEFAULT_ORDERING
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class ListingPage:
    items: list[Listing]
    total: int
    page: int
    limit: int
    total_pages: int = field(init=False)

    def __post_init__(self) -> None:
        self.total_pages = math.ceil(self.total / self.limit) if self.limit else 0


def _int_param(params: Mapping[str, Any], name: str, default: int, minimum: int = 1) -> int:
    raw = str(params.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise InvalidInput(errors={name: ["A valid integer is required."]}, message=f"Invalid {name}")
    if value < minimum:
        raise InvalidInput(errors={name: [f"Must be at least {minimum}."]}, message=f"Invalid {name}")
    return value


def _paging(params: Mapping[str, Any]) -> tuple[int, int]:
    page = _int_param(params, "page", DEFAULT_PAGE)
    limit = _int_param(params, "limit", DEFAULT_LIMIT)
    return page, min(limit, getattr(settings, "LISTING_PAGE_SIZE_MAX", 100))


def _filters(params: Mapping[str, Any]) -> Q:
    return ListingFilterSet(data=params, queryset=Listing.objects.none()).as_q()


def build_query(params: Mapping[str, Any]) -> ListingQuery:
    """Public feed: only available listings, newest first."""
    page, limit = _paging(params)
    return ListingQuery(filters=Q(is_available=True) & _filters(params), page=page, limit=limit)


def build_owner_query(owner_id: Any, params: Mapping[str, Any]) -> ListingQuery:
    """An owner's own listings, whatever their availability."""
    page, limit = _paging(params)
    return ListingQuery(filters=Q(owner_id=owner_id) & _filters(params), page=page, limit=limit)


def search_listings(repository: ListingRepository, query: ListingQuery) -> ListingPage:
    items = repository.find(query.filters, ordering=query.ordering, skip=query.skip, limit=query.limit)
    total = repository.count(query.filters)
    return ListingPage(items=items, total=total, page=query.page, limit=query.limit)
