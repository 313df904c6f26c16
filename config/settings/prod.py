"""Production settings for the Rentnest backend.

This module extends the base settings with production specific
configuration. Ensure that sensitive values are provided via
environment variables and that security settings are appropriate for
production use.
"""

from .base import *  # noqa: F401,F403
from .base import get_bool, get_env, get_list

# Never run with debug enabled in production
DEBUG = False

SECRET_KEY = get_env('DJANGO_SECRET_KEY', required=True)

# Allowed hosts should be defined explicitly via environment variable
ALLOWED_HOSTS = get_list('DJANGO_ALLOWED_HOSTS')

# Photos are served from S3/MinIO in production
S3_ENDPOINT_URL = get_env('S3_ENDPOINT_URL', required=True)
S3_PUBLIC_BASE = get_env('S3_PUBLIC_BASE', required=True)

# Configure secure proxies and cookies
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
SECURE_SSL_REDIRECT = get_bool('SECURE_SSL_REDIRECT', 'true')
CSRF_COOKIE_SECURE = True
SESSION_COOKIE_SECURE = True
