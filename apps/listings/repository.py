"""
Listing Repository

The listing services talk to storage only through ``ListingRepository``.
``DjangoListingRepository`` keeps listings in the project database and
reports database failures as ``StoreError``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Sequence

from django.core.exceptions import ValidationError  # type: ignore
from django.db import DatabaseError  # type: ignore
from django.db.models import Q  # type: ignore

from shared.domain.exceptions import StoreError

from .models import Listing

logger = logging.getLogger(__name__)


class ListingRepository(ABC):
    """Abstract document store for listings"""

    @abstractmethod
    def insert(self, listing: Listing) -> Listing:
        """Persist a new listing and return it"""

    @abstractmethod
    def find_by_id(self, listing_id: Any) -> Optional[Listing]:
        """Return the listing or None when the id does not resolve"""

    @abstractmethod
    def find(
        self,
        query: Q,
        ordering: Sequence[str] = ("-created_at",),
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> list[Listing]:
        """Return the listings matching ``query``"""

    @abstractmethod
    def count(self, query: Q) -> int:
        """Count the listings matching ``query``"""

    @abstractmethod
    def update_by_id(self, listing_id: Any, patch: Mapping[str, Any]) -> Listing:
        """Apply ``patch`` to one listing and return the stored result"""

    @abstractmethod
    def delete_by_id(self, listing_id: Any) -> None:
        """Delete one listing"""


class DjangoListingRepository(ListingRepository):
    """
    Django ORM implementation

    Usage:
        repository = DjangoListingRepository()
        listing = repository.find_by_id(listing_id)
        repository.update_by_id(listing.id, {"is_available": False})
    """

    def __init__(self):
        self._manager = Listing.objects

    def insert(self, listing: Listing) -> Listing:
        try:
            listing.save(force_insert=True)
        except DatabaseError as exc:
            raise StoreError(f"Failed to insert listing: {exc}") from exc
        return listing

    def find_by_id(self, listing_id: Any) -> Optional[Listing]:
        try:
            return self._manager.select_related("owner").filter(pk=listing_id).first()
        except (ValidationError, ValueError):
            # Malformed ids never resolve
            return None
        except DatabaseError as exc:
            raise StoreError(f"Failed to load listing: {exc}") from exc

    def find(
        self,
        query: Q,
        ordering: Sequence[str] = ("-created_at",),
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> list[Listing]:
        qs = self._manager.select_related("owner").filter(query).order_by(*ordering)
        if limit is not None:
            qs = qs[skip:skip + limit]
        elif skip:
            qs = qs[skip:]
        try:
            return list(qs)
        except DatabaseError as exc:
            raise StoreError(f"Failed to query listings: {exc}") from exc

    def count(self, query: Q) -> int:
        try:
            return self._manager.filter(query).count()
        except DatabaseError as exc:
            raise StoreError(f"Failed to count listings: {exc}") from exc

    def update_by_id(self, listing_id: Any, patch: Mapping[str, Any]) -> Listing:
        listing = self.find_by_id(listing_id)
        if listing is None:
            raise StoreError(f"Listing {listing_id} disappeared during update")
        for attr, value in patch.items():
            setattr(listing, attr, value)
        try:
            listing.save(update_fields=list(patch))
        except DatabaseError as exc:
            raise StoreError(f"Failed to update listing: {exc}") from exc
        logger.debug("Listing %s updated (%s)", listing_id, ", ".join(patch))
        return listing

    def delete_by_id(self, listing_id: Any) -> None:
        try:
            self._manager.filter(pk=listing_id).delete()
        except DatabaseError as exc:
            raise StoreError(f"Failed to delete listing: {exc}") from exc
