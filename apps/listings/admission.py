"""
Listing Admission

Turns an owner's submission into a persisted listing. The submission is
checked in a fixed order and the first failure ends the workflow:

1. the submitter must be an owner
2. the fields must be structurally valid
3. title, description, contact phone and rent pass moderation
4. the images respect the count, size and type policy
5. every image is uploaded to the blob store
6. the listing is stored

Nothing is persisted when a step fails, and blobs uploaded before a
failure are removed again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from io import BytesIO
from typing import Any, Callable, Mapping, Optional, Sequence

from django.conf import settings  # type: ignore
from django.utils import timezone  # type: ignore
from PIL import Image

from apps.users.identity import Identity
from shared.domain.exceptions import (
    ContentRejected,
    Forbidden,
    InternalFailure,
    InvalidImage,
    InvalidInput,
    UploadFailed,
)

from .models import Listing
from .moderation import ModerationEngine, get_moderation_engine
from .repository import ListingRepository
from .serializers import ListingInputSerializer
from .storage import BlobStore

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")
ALLOWED_IMAGE_FORMATS = ("JPEG", "PNG", "WEBP")


@dataclass(frozen=True)
class ImageUpload:
    """An image and its declared type. Request files are only read when the bytes are needed."""

    content: bytes = b""
    content_type: str = ""
    filename: str = ""
    file: Any = field(default=None, repr=False, compare=False)
    declared_size: Optional[int] = None

    @property
    def size(self) -> int:
        if self.declared_size is not None:
            return self.declared_size
        return len(self.content)

    def read(self) -> bytes:
        if self.file is None:
            return self.content
        self.file.seek(0)
        return self.file.read()

    @classmethod
    def from_uploaded_file(cls, uploaded) -> "ImageUpload":  # type: ignore
        """Wrap a Django ``UploadedFile`` without reading it"""
        return cls(
            content_type=(uploaded.content_type or "").lower(),
            filename=uploaded.name or "",
            file=uploaded,
            declared_size=uploaded.size,
        )


def check_image_limits(
    sizes: Sequence[int],
    max_count: Optional[int] = None,
    max_size: Optional[int] = None,
) -> None:
    """Count and size policy, checked on declared sizes before any file is read"""
    if max_count is None:
        max_count = getattr(settings, "LISTING_MAX_IMAGES", 5)
    if max_size is None:
        max_size = getattr(settings, "LISTING_MAX_IMAGE_SIZE", 5 * 1024 * 1024)

    if len(sizes) > max_count:
        raise InvalidImage(f"You can upload at most {max_count} images")
    for size in sizes:
        if size > max_size:
            raise InvalidImage(f"Image size must be less than {max_size // (1024 * 1024)}MB")


def validate_images(
    images: Sequence[ImageUpload],
    max_count: Optional[int] = None,
    max_size: Optional[int] = None,
) -> None:
    """Raise InvalidImage for the first image that breaks the policy"""
    check_image_limits([image.size for image in images], max_count, max_size)

    for image in images:
        if image.content_type.lower() not in ALLOWED_IMAGE_TYPES:
            raise InvalidImage("Only JPG, PNG, and WebP images are allowed")
        image_format = _sniff_format(image)
        if image_format not in ALLOWED_IMAGE_FORMATS:
            raise InvalidImage("Only JPG, PNG, and WebP images are allowed")


def _sniff_format(image: ImageUpload) -> Optional[str]:
    content = image.read()
    if not content:
        raise InvalidImage("Empty or corrupted image file")
    try:
        with Image.open(BytesIO(content)) as img:
            img.verify()
            return img.format
    except Exception as e:
        logger.info("Rejected undecodable image %r: %s", image.filename, e)
        raise InvalidImage("Empty or corrupted image file") from e


def moderate_fields(engine: ModerationEngine, data: Mapping[str, Any]) -> None:
    """Run the content checks over the columns present in ``data``"""
    checks = (
        ("title", "title", engine.evaluate_text),
        ("description", "description", engine.evaluate_text),
        ("contact_phone", "phone", engine.check_phone),
        ("rent_amount", "price", engine.check_price),
    )
    for column, name, check in checks:
        if column not in data:
            continue
        verdict = check(data[column])
        if not verdict:
            logger.info("Content rejected on %s by rule %s", name, verdict.rule)
            raise ContentRejected(name, verdict.reason)


class ListingAdmission:
    """
    Admission workflow for new listings

    Usage:
        admission = ListingAdmission(DjangoListingRepository(), get_blob_store())
        listing = admission.submit(identity, request_fields, images)
    """

    def __init__(
        self,
        repository: ListingRepository,
        blob_store: BlobStore,
        engine: Optional[ModerationEngine] = None,
        clock: Callable[[], Any] = timezone.now,
    ):
        self.repository = repository
        self.blob_store = blob_store
        self.engine = engine or get_moderation_engine()
        self.clock = clock

    def submit(
        self,
        identity: Identity,
        fields: Mapping[str, Any],
        images: Sequence[ImageUpload] = (),
    ) -> Listing:
        if not identity.is_owner:
            logger.info("Submission refused for non-owner account %s", identity.user_id)
            raise Forbidden()

        serializer = ListingInputSerializer(data=fields)
        if not serializer.is_valid():
            raise InvalidInput(errors=serializer.errors)
        data = dict(serializer.validated_data)

        moderate_fields(self.engine, data)
        validate_images(images)

        photos = self._upload_all(images)

        now = self.clock()
        listing = Listing(
            owner_id=identity.user_id,
            is_available=True,
            created_at=now,
            updated_at=now,
            photos=photos,
            **data,
        )
        try:
            listing = self.repository.insert(listing)
        except InternalFailure:
            self._discard([photo["url"] for photo in photos])
            raise

        logger.info("Listing %s created by owner %s with %d photo(s)", listing.pk, identity.user_id, len(photos))
        return listing

    def _upload_all(self, images: Sequence[ImageUpload]) -> list[dict[str, str]]:
        photos: list[dict[str, str]] = []
        for image in images:
            try:
                url = self.blob_store.upload(image.read(), image.content_type, image.filename)
            except Exception as e:
                logger.warning("Image upload failed after %d of %d: %s", len(photos), len(images), e)
                self._discard([photo["url"] for photo in photos])
                raise UploadFailed() from e
            photos.append({"url": url, "caption": ""})
        return photos

    def _discard(self, urls: Sequence[str]) -> None:
        for url in urls:
            try:
                self.blob_store.delete(url)
            except Exception as e:
                logger.error("Could not remove orphaned photo %s: %s", url, e)
