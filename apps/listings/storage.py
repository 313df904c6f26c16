# apps/listings/storage.py: blob storage for listing photos (S3/MinIO or Django storage)

import hashlib
import logging
import mimetypes
import uuid
from abc import ABC, abstractmethod
from typing import Optional
from urllib.parse import urlparse

import boto3
from botocore.client import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)

KEY_PREFIX = "properties"


class UploadError(Exception):
    """The blob store could not accept an object"""


class BlobStore(ABC):
    """Stores photo bytes and hands back a public URL"""

    @abstractmethod
    def upload(self, content: bytes, content_type: str, filename: str = "") -> str:
        """Store ``content`` and return its public URL; raise UploadError on failure"""

    @abstractmethod
    def delete(self, url: str) -> None:
        """Remove the object behind ``url``"""


def generate_key(content: bytes, content_type: str, filename: str = "") -> str:
    """Key: properties/<md5_8>_<uuid8>.<ext>"""
    h = hashlib.md5(content).hexdigest()[:8]
    uid = uuid.uuid4().hex[:8]
    ext = mimetypes.guess_extension(content_type or "") or ""
    if not ext and "." in (filename or ""):
        ext = "." + filename.rsplit(".", 1)[1].lower()
    if ext == ".jpe":
        ext = ".jpg"
    return f"{KEY_PREFIX}/{h}_{uid}{ext}"


class S3BlobStore(BlobStore):
    """S3/MinIO store, configured from the S3_* settings"""

    def __init__(self, client=None):
        self.s3_client = client or boto3.client(
            "s3",
            endpoint_url=getattr(settings, "S3_ENDPOINT_URL", None) or None,  # напр. http://minio:9000
            aws_access_key_id=getattr(settings, "S3_ACCESS_KEY", ""),
            aws_secret_access_key=getattr(settings, "S3_SECRET_KEY", ""),
            region_name=getattr(settings, "S3_REGION", "us-east-1"),
            config=BotoConfig(
                signature_version="s3v4",
                s3={"addressing_style": getattr(settings, "S3_ADDRESSING_STYLE", "path")},
            ),
            use_ssl=getattr(settings, "S3_USE_SSL", False),
            verify=getattr(settings, "S3_USE_SSL", False),
        )
        self.bucket_name = getattr(settings, "S3_BUCKET_NAME", "rentnest-photos")
        self.public_base = (getattr(settings, "S3_PUBLIC_BASE", "") or "").rstrip("/")
        self.endpoint = (getattr(settings, "S3_ENDPOINT_URL", "") or "").rstrip("/")

    def upload(self, content: bytes, content_type: str, filename: str = "") -> str:
        key = generate_key(content, content_type, filename)
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=content,
                ContentType=content_type,
                CacheControl="max-age=31536000",  # 1 год
                Metadata={"original_name": filename or ""},
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("S3 upload failed for %s: %s", key, e)
            raise UploadError(str(e)) from e
        logger.info("Uploaded photo: %s", key)
        return self.url(key)

    def delete(self, url: str) -> None:
        key = self.key_for(url)
        if not key:
            logger.warning("Not a photo URL of bucket %s: %s", self.bucket_name, url)
            return
        self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
        logger.info("Deleted photo: %s", key)

    def url(self, key: str) -> str:
        """Public URL: S3_PUBLIC_BASE, then endpoint + path-style, then AWS virtual host"""
        if self.public_base:
            return f"{self.public_base}/{key.lstrip('/')}"
        if self.endpoint:
            return f"{self.endpoint}/{self.bucket_name}/{key.lstrip('/')}"
        return f"https://{self.bucket_name}.s3.amazonaws.com/{key.lstrip('/')}"

    def key_for(self, url: str) -> Optional[str]:
        for base in (self.public_base, f"{self.endpoint}/{self.bucket_name}" if self.endpoint else ""):
            if base and url.startswith(base + "/"):
                return url[len(base) + 1:]
        path = urlparse(url).path.lstrip("/")
        if path.startswith(f"{self.bucket_name}/"):
            path = path[len(self.bucket_name) + 1:]
        return path if path.startswith(f"{KEY_PREFIX}/") else None


class DjangoStorageBlobStore(BlobStore):
    """Local development store on top of ``default_storage``"""

    def __init__(self, storage=None):
        self.storage = storage or default_storage

    def upload(self, content: bytes, content_type: str, filename: str = "") -> str:
        name = generate_key(content, content_type, filename)
        try:
            saved = self.storage.save(name, ContentFile(content))
        except OSError as e:
            logger.error("Storage upload failed for %s: %s", name, e)
            raise UploadError(str(e)) from e
        return self.storage.url(saved)

    def delete(self, url: str) -> None:
        path = urlparse(url).path
        media_url = urlparse(settings.MEDIA_URL or "/").path
        name = path[len(media_url):] if path.startswith(media_url) else path.lstrip("/")
        self.storage.delete(name)


_blob_store: Optional[BlobStore] = None


def get_blob_store() -> BlobStore:
    """Store class named by ``settings.LISTING_BLOB_STORE``"""
    global _blob_store
    if _blob_store is None:
        _blob_store = import_string(settings.LISTING_BLOB_STORE)()
    return _blob_store


def reset_blob_store(**kwargs) -> None:
    global _blob_store
    setting = kwargs.get("setting")
    if setting is None or setting == "LISTING_BLOB_STORE" or setting.startswith("S3_"):
        _blob_store = None
