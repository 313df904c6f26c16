"""Listing API views."""

from __future__ import annotations

import json

from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.identity import resolve_identity
from shared.domain.exceptions import Forbidden, InvalidInput

from .admission import ImageUpload, ListingAdmission
from .filters import build_owner_query, build_query, search_listings
from .lifecycle import ListingLifecycle
from .models import Listing
from .repository import DjangoListingRepository
from .serializers import ListingInputSerializer, ListingSerializer, ListingUpdateSerializer
from .storage import get_blob_store

# Multipart submissions carry the nested parts as JSON strings
JSON_ENCODED_FIELDS = ("location", "rent", "features", "amenities", "contact", "terms")

FEED_PARAMETERS = [
    OpenApiParameter("property_type", str),
    OpenApiParameter("division", str),
    OpenApiParameter("district", str),
    OpenApiParameter("area", str),
    OpenApiParameter("min_rent", float),
    OpenApiParameter("max_rent", float),
    OpenApiParameter("bedrooms", int),
    OpenApiParameter("furnished", str),
    OpenApiParameter("search", str, description="Matches title, description and location"),
    OpenApiParameter("page", int),
    OpenApiParameter("limit", int),
]


def submission_fields(data) -> dict:  # type: ignore
    """Plain dict of submitted fields, nested parts decoded from JSON strings."""
    if hasattr(data, "getlist"):
        fields = {key: data.get(key) for key in data.keys() if key != "images"}
    else:
        fields = dict(data)
    for key in JSON_ENCODED_FIELDS:
        value = fields.get(key)
        if isinstance(value, str):
            try:
                fields[key] = json.loads(value) if value.strip() else None
            except ValueError:
                raise InvalidInput(errors={key: ["Invalid JSON."]})
    return fields


@extend_schema_view(
    list=extend_schema(parameters=FEED_PARAMETERS),
    mine=extend_schema(parameters=FEED_PARAMETERS),
    create=extend_schema(request=ListingInputSerializer),
    update=extend_schema(request=ListingUpdateSerializer),
    partial_update=extend_schema(request=ListingUpdateSerializer),
)
class ListingViewSet(viewsets.GenericViewSet):
    """Public feed, owner dashboard and owner-only mutations of listings."""

    queryset = Listing.objects.all()
    serializer_class = ListingSerializer
    parser_classes = [JSONParser, MultiPartParser, FormParser]
    lookup_value_regex = "[^/]+"

    def get_permissions(self):  # type: ignore
        if self.action in {"list", "retrieve"}:
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get_repository(self):  # type: ignore
        return DjangoListingRepository()

    def get_admission(self) -> ListingAdmission:
        return ListingAdmission(self.get_repository(), get_blob_store())

    def get_lifecycle(self) -> ListingLifecycle:
        return ListingLifecycle(self.get_repository(), get_blob_store())

    def _paged_response(self, page) -> Response:  # type: ignore
        properties = ListingSerializer(page.items, many=True).data
        return Response(
            {
                "success": True,
                "count": len(properties),
                "total": page.total,
                "total_pages": page.total_pages,
                "current_page": page.page,
                "data": {"properties": properties},
            }
        )

    def list(self, request):  # type: ignore
        query = build_query(request.query_params)
        return self._paged_response(search_listings(self.get_repository(), query))

    @action(detail=False, methods=["get"])
    def mine(self, request):  # type: ignore
        identity = resolve_identity(request.user)
        if not identity.is_owner:
            raise Forbidden()
        query = build_owner_query(identity.user_id, request.query_params)
        return self._paged_response(search_listings(self.get_repository(), query))

    def retrieve(self, request, pk=None):  # type: ignore
        listing = self.get_lifecycle().get(pk)
        return Response({"success": True, "data": {"property": ListingSerializer(listing).data}})

    def create(self, request):  # type: ignore
        identity = resolve_identity(request.user)
        fields = submission_fields(request.data)
        images = [ImageUpload.from_uploaded_file(f) for f in request.FILES.getlist("images")]
        listing = self.get_admission().submit(identity, fields, images)
        return Response(
            {
                "success": True,
                "message": "Property created successfully",
                "data": {"property": ListingSerializer(listing).data},
            },
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, pk=None):  # type: ignore
        """Edit a listing. PUT and PATCH both merge the sent fields into the stored listing, so a PUT may omit fields."""
        identity = resolve_identity(request.user)
        listing = self.get_lifecycle().update(pk, identity, submission_fields(request.data))
        return Response(
            {
                "success": True,
                "message": "Property updated successfully",
                "data": {"property": ListingSerializer(listing).data},
            }
        )

    def partial_update(self, request, pk=None):  # type: ignore
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):  # type: ignore
        identity = resolve_identity(request.user)
        self.get_lifecycle().delete(pk, identity)
        return Response({"success": True, "message": "Property deleted successfully"})

    @action(detail=True, methods=["patch"], url_path="toggle-availability")
    def toggle_availability(self, request, pk=None):  # type: ignore
        identity = resolve_identity(request.user)
        listing = self.get_lifecycle().toggle_availability(pk, identity)
        state = "available" if listing.is_available else "unavailable"
        return Response(
            {
                "success": True,
                "message": f"Property marked as {state}",
                "data": {"property": ListingSerializer(listing).data},
            }
        )
