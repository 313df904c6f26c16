"""
Listing Lifecycle

Owner-only mutations of a stored listing: availability toggle, edit and
delete. Every mutation loads the listing first (NotFound), then asks
``authorize_mutation`` (Forbidden), and only then writes. A refused
mutation never touches the store.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Callable, Mapping, Optional

from django.conf import settings  # type: ignore
from django.utils import timezone  # type: ignore

from apps.users.identity import Identity
from apps.users.models import AccountType
from shared.domain.exceptions import Forbidden, InvalidInput, NotFound

from .admission import moderate_fields
from .models import Listing
from .moderation import ModerationEngine, get_moderation_engine
from .repository import ListingRepository
from .serializers import ListingUpdateSerializer
from .storage import BlobStore

logger = logging.getLogger(__name__)


class Authorization(enum.Enum):
    ALLOWED = "allowed"
    FORBIDDEN = "forbidden"


def authorize_mutation(listing: Listing, identity: Identity) -> Authorization:
    """Only the owner account that created a listing may change it"""
    match AccountType(identity.account_type):
        case AccountType.OWNER:
            if listing.owner_id == identity.user_id:
                return Authorization.ALLOWED
            return Authorization.FORBIDDEN
        case AccountType.TENANT:
            return Authorization.FORBIDDEN
        case role:
            raise AssertionError(f"Unhandled account type: {role}")


class ListingLifecycle:
    """
    Lifecycle operations on stored listings

    Usage:
        lifecycle = ListingLifecycle(DjangoListingRepository(), get_blob_store())
        listing = lifecycle.toggle_availability(listing_id, identity)
    """

    def __init__(
        self,
        repository: ListingRepository,
        blob_store: Optional[BlobStore] = None,
        engine: Optional[ModerationEngine] = None,
        clock: Callable[[], Any] = timezone.now,
        moderate_updates: Optional[bool] = None,
    ):
        self.repository = repository
        self.blob_store = blob_store
        self.engine = engine or get_moderation_engine()
        self.clock = clock
        if moderate_updates is None:
            moderate_updates = getattr(settings, "LISTING_MODERATE_UPDATES", True)
        self.moderate_updates = moderate_updates

    def get(self, listing_id: Any) -> Listing:
        listing = self.repository.find_by_id(listing_id)
        if listing is None:
            raise NotFound()
        return listing

    def _get_for_mutation(self, listing_id: Any, identity: Identity) -> Listing:
        listing = self.get(listing_id)
        if authorize_mutation(listing, identity) is not Authorization.ALLOWED:
            logger.info("User %s may not change listing %s", identity.user_id, listing_id)
            raise Forbidden()
        return listing

    def toggle_availability(self, listing_id: Any, identity: Identity) -> Listing:
        listing = self._get_for_mutation(listing_id, identity)
        listing = self.repository.update_by_id(
            listing.pk,
            {"is_available": not listing.is_available, "updated_at": self.clock()},
        )
        logger.info("Listing %s marked as %s", listing.pk, "available" if listing.is_available else "unavailable")
        return listing

    def update(self, listing_id: Any, identity: Identity, fields: Mapping[str, Any]) -> Listing:
        listing = self._get_for_mutation(listing_id, identity)

        serializer = ListingUpdateSerializer(instance=listing, data=fields, partial=True)
        if not serializer.is_valid():
            raise InvalidInput(errors=serializer.errors)
        patch = dict(serializer.validated_data)

        if self.moderate_updates:
            moderate_fields(self.engine, patch)

        patch["updated_at"] = self.clock()
        listing = self.repository.update_by_id(listing.pk, patch)
        logger.info("Listing %s updated by owner %s", listing.pk, identity.user_id)
        return listing

    def delete(self, listing_id: Any, identity: Identity) -> None:
        listing = self._get_for_mutation(listing_id, identity)
        urls = listing.photo_urls
        self.repository.delete_by_id(listing.pk)
        logger.info("Listing %s deleted by owner %s", listing.pk, identity.user_id)

        if self.blob_store is None:
            return
        for url in urls:
            try:
                self.blob_store.delete(url)
            except Exception as e:
                logger.error("Could not remove photo %s of deleted listing %s: %s", url, listing.pk, e)
