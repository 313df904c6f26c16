"""Development settings for the Rentnest backend.

This module extends the base settings with development specific
configuration: debug mode, permissive hosts, photos kept on the local
filesystem and human readable log lines. Do not use these settings in
production!
"""

import structlog

from .base import *  # noqa: F401,F403
from .base import LOGGING, get_env

# Enable debug mode for development
DEBUG = True

# Allow all hosts in development
ALLOWED_HOSTS = ['*']

# Photos go to MEDIA_ROOT unless an S3/MinIO endpoint is configured
LISTING_BLOB_STORE = get_env('LISTING_BLOB_STORE', 'apps.listings.storage.DjangoStorageBlobStore')

LOGGING['formatters']['json']['processor'] = structlog.dev.ConsoleRenderer()
