"""
Error taxonomy for the listing services

Every failure a listing operation can report to its caller is one of the
classes below. The API layer maps each kind onto an HTTP status in
shared.infrastructure.api_errors.
"""

from typing import Any, Dict, Optional


class ListingServiceError(Exception):
    """Base class for all errors reported by the listing services"""

    code = 'error'
    default_message = 'Request failed'

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {'error': self.code, 'message': self.message}


class Unauthenticated(ListingServiceError):
    code = 'unauthenticated'
    default_message = 'Not authorized, no valid token'

    def __init__(self):
        super().__init__()


class Forbidden(ListingServiceError):
    code = 'forbidden'
    default_message = 'You are not allowed to perform this action'

    def __init__(self):
        super().__init__()


class NotFound(ListingServiceError):
    code = 'not_found'
    default_message = 'Property not found'

    def __init__(self):
        super().__init__()


class InvalidInput(ListingServiceError):
    """Missing or malformed structural fields"""

    code = 'invalid_input'
    default_message = 'Please provide all required fields'

    def __init__(self, errors: Optional[Dict[str, Any]] = None, message: Optional[str] = None):
        self.errors = errors or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['errors'] = self.errors
        return data


class ContentRejected(ListingServiceError):
    """A moderation, phone or price check rejected a field"""

    code = 'content_rejected'

    _LABELS = {
        'title': 'Title',
        'description': 'Description',
        'phone': 'Phone number',
        'price': 'Price',
    }

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        label = self._LABELS.get(field, field.capitalize())
        super().__init__(f"{label} rejected: {reason}")

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(field=self.field, reason=self.reason)
        return data


class InvalidImage(ListingServiceError):
    """An uploaded image broke the count, size or type policy"""

    code = 'invalid_image'

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['reason'] = self.reason
        return data


class UploadFailed(ListingServiceError):
    code = 'upload_failed'
    default_message = 'Failed to upload image. Please try again.'


class InternalFailure(ListingServiceError):
    """A collaborator failed in a way the caller cannot act on"""

    code = 'internal_error'
    default_message = 'Internal server error'


class StoreError(InternalFailure):
    """The listing store could not complete an operation"""
