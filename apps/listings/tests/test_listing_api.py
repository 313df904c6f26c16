"""API tests for the listing endpoints."""

from __future__ import annotations

import json
import uuid
from decimal import Decimal
from io import BytesIO

from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from PIL import Image
from rest_framework import status
from rest_framework.test import APITestCase

from apps.listings.models import Listing
from apps.users.models import AccountType, User


def listing_payload(**overrides) -> dict:
    payload = {
        "title": "Cozy hostel seat near Dhaka University",
        "description": "Shared room for students with meals and wifi included.",
        "property_type": "hostel",
        "location": {
            "division": "Dhaka",
            "district": "Dhaka",
            "area": "Nilkhet",
            "address": "Nilkhet Road 5",
        },
        "rent": {"amount": 4500, "period": "monthly"},
        "features": {"bedrooms": 1, "bathrooms": 1, "furnished": "furnished"},
        "amenities": ["wifi", "meals"],
        "contact": {"name": "Sumi", "phone": "01612345678"},
        "terms": {"utilities_included": True},
    }
    payload.update(overrides)
    return payload


def jpeg_file(name: str = "room.jpg") -> SimpleUploadedFile:
    out = BytesIO()
    Image.new("RGB", (40, 30), (10, 90, 160)).save(out, format="JPEG")
    return SimpleUploadedFile(name, out.getvalue(), content_type="image/jpeg")


class ListingAPITests(APITestCase):
    def setUp(self) -> None:
        self.owner = User.objects.create_user(
            email="owner@example.com",
            password="secret123",
            full_name="Owner One",
            account_type=AccountType.OWNER,
        )
        self.other_owner = User.objects.create_user(
            email="other@example.com", password="secret123", account_type=AccountType.OWNER
        )
        self.tenant = User.objects.create_user(
            mobile="01512345678", password="secret123", account_type=AccountType.TENANT
        )
        self.listing = Listing.objects.create(
            owner=self.owner,
            title="Family flat in Uttara",
            description="Three bedroom flat close to the metro station",
            property_type="apartment",
            location_division="Dhaka",
            location_district="Dhaka",
            location_area="Uttara",
            location_address="Sector 7, Road 3",
            rent_amount=Decimal("30000"),
            bedrooms=3,
            contact_name="Owner One",
            contact_phone="01712345678",
        )
        self.hidden = Listing.objects.create(
            owner=self.owner,
            title="Rented out room",
            description="Not available right now",
            property_type="room",
            location_division="Dhaka",
            location_district="Dhaka",
            location_area="Mohammadpur",
            location_address="Block C",
            rent_amount=Decimal("6000"),
            contact_name="Owner One",
            contact_phone="01712345678",
            is_available=False,
        )

    def detail_url(self, listing_id) -> str:  # type: ignore
        return reverse("listing-detail", args=[listing_id])

    def test_public_feed(self) -> None:
        response = self.client.get(reverse("listing-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertTrue(response.data["success"])
        self.assertEqual(response.data["total"], 1)
        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["total_pages"], 1)
        self.assertEqual(response.data["current_page"], 1)
        item = response.data["data"]["properties"][0]
        self.assertEqual(item["id"], str(self.listing.pk))
        self.assertEqual(item["location"]["area"], "Uttara")
        self.assertEqual(item["rent"]["currency"], "BDT")
        self.assertEqual(item["features"]["bedrooms"], 3)
        self.assertEqual(item["owner"]["full_name"], "Owner One")

    def test_feed_filters(self) -> None:
        response = self.client.get(reverse("listing-list"), {"search": "metro", "max_rent": "30000"})
        self.assertEqual(response.data["total"], 1)

        response = self.client.get(reverse("listing-list"), {"area": "gulshan"})
        self.assertEqual(response.data["total"], 0)

    def test_feed_rejects_malformed_paging(self) -> None:
        response = self.client.get(reverse("listing-list"), {"page": "first"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertFalse(response.data["success"])
        self.assertEqual(response.data["error"], "invalid_input")
        self.assertIn("page", response.data["errors"])

    def test_retrieve(self) -> None:
        response = self.client.get(self.detail_url(self.listing.pk))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["data"]["property"]["title"], "Family flat in Uttara")

    def test_retrieve_missing(self) -> None:
        for listing_id in (uuid.uuid4(), "garbage"):
            response = self.client.get(self.detail_url(listing_id))
            self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)
            self.assertEqual(
                response.data,
                {"success": False, "error": "not_found", "message": "Property not found"},
            )

    def test_create_requires_authentication(self) -> None:
        response = self.client.post(reverse("listing-list"), listing_payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED, response.data)
        self.assertFalse(response.data["success"])

    def test_tenant_cannot_create(self) -> None:
        self.client.force_authenticate(self.tenant)
        response = self.client.post(reverse("listing-list"), listing_payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)
        self.assertEqual(response.data["error"], "forbidden")

    def test_owner_creates_listing_from_json(self) -> None:
        self.client.force_authenticate(self.owner)
        response = self.client.post(reverse("listing-list"), listing_payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        created = response.data["data"]["property"]
        self.assertEqual(created["owner"]["id"], self.owner.pk)
        self.assertEqual(created["location"]["area"], "Nilkhet")
        self.assertEqual(created["rent"]["period"], "monthly")
        self.assertTrue(created["terms"]["utilities_included"])
        self.assertTrue(created["is_available"])
        self.assertFalse(created["is_verified"])
        self.assertEqual(created["photos"], [])
        self.assertTrue(Listing.objects.filter(pk=created["id"], owner=self.owner).exists())

    def test_owner_creates_listing_with_images(self) -> None:
        self.client.force_authenticate(self.owner)
        payload = listing_payload()
        data = {key: json.dumps(value) if isinstance(value, (dict, list)) else value for key, value in payload.items()}
        data["images"] = [jpeg_file("one.jpg"), jpeg_file("two.jpg")]

        response = self.client.post(reverse("listing-list"), data, format="multipart")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        photos = response.data["data"]["property"]["photos"]
        self.assertEqual(len(photos), 2)
        for photo in photos:
            self.assertIn("/properties/", photo["url"])
            self.assertEqual(photo["caption"], "")

    def test_oversized_image_is_refused(self) -> None:
        self.client.force_authenticate(self.owner)
        data = {key: json.dumps(value) if isinstance(value, (dict, list)) else value for key, value in listing_payload().items()}
        data["images"] = [SimpleUploadedFile("huge.jpg", b"\xff" * (5 * 1024 * 1024 + 1), content_type="image/jpeg")]

        response = self.client.post(reverse("listing-list"), data, format="multipart")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["error"], "invalid_image")
        self.assertEqual(response.data["message"], "Image size must be less than 5MB")
        self.assertFalse(Listing.objects.filter(title=listing_payload()["title"]).exists())

    def test_multipart_with_broken_json(self) -> None:
        self.client.force_authenticate(self.owner)
        data = {"title": "Nice room", "location": "{not json"}
        response = self.client.post(reverse("listing-list"), data, format="multipart")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("location", response.data["errors"])

    def test_rejected_content(self) -> None:
        self.client.force_authenticate(self.owner)
        response = self.client.post(
            reverse("listing-list"), listing_payload(title="Click here for a room"), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["error"], "content_rejected")
        self.assertEqual(response.data["field"], "title")
        self.assertEqual(response.data["message"], 'Title rejected: Contains suspicious scam keyword: "click here"')

    def test_invalid_structure(self) -> None:
        self.client.force_authenticate(self.owner)
        response = self.client.post(reverse("listing-list"), {"title": "Room"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["error"], "invalid_input")
        self.assertIn("description", response.data["errors"])

    def test_mine_includes_unavailable(self) -> None:
        self.client.force_authenticate(self.owner)
        response = self.client.get(reverse("listing-mine"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["total"], 2)
        ids = {item["id"] for item in response.data["data"]["properties"]}
        self.assertEqual(ids, {str(self.listing.pk), str(self.hidden.pk)})

    def test_mine_is_for_owners(self) -> None:
        self.client.force_authenticate(self.tenant)
        response = self.client.get(reverse("listing-mine"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)

        self.client.force_authenticate(self.other_owner)
        response = self.client.get(reverse("listing-mine"))
        self.assertEqual(response.data["total"], 0)

    def test_toggle_availability(self) -> None:
        self.client.force_authenticate(self.owner)
        url = reverse("listing-toggle-availability", args=[self.listing.pk])

        response = self.client.patch(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["message"], "Property marked as unavailable")
        self.assertFalse(response.data["data"]["property"]["is_available"])

        response = self.client.patch(url)
        self.assertEqual(response.data["message"], "Property marked as available")

    def test_toggle_by_other_owner(self) -> None:
        self.client.force_authenticate(self.other_owner)
        response = self.client.patch(reverse("listing-toggle-availability", args=[self.listing.pk]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)
        self.listing.refresh_from_db()
        self.assertTrue(self.listing.is_available)

    def test_update(self) -> None:
        self.client.force_authenticate(self.owner)
        response = self.client.patch(
            self.detail_url(self.listing.pk),
            {"title": "Family flat in Uttara sector 7", "features": {"bedrooms": 4}},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["message"], "Property updated successfully")
        self.listing.refresh_from_db()
        self.assertEqual(self.listing.title, "Family flat in Uttara sector 7")
        self.assertEqual(self.listing.bedrooms, 4)

    def test_update_sets_availability(self) -> None:
        self.client.force_authenticate(self.owner)
        response = self.client.patch(self.detail_url(self.listing.pk), {"is_available": False}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertFalse(response.data["data"]["property"]["is_available"])
        self.listing.refresh_from_db()
        self.assertFalse(self.listing.is_available)

    def test_put_is_treated_as_edit(self) -> None:
        self.client.force_authenticate(self.owner)
        response = self.client.put(self.detail_url(self.listing.pk), {"rent": {"amount": 28000}}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.listing.refresh_from_db()
        self.assertEqual(self.listing.rent_amount, Decimal("28000"))

    def test_update_by_tenant(self) -> None:
        self.client.force_authenticate(self.tenant)
        response = self.client.patch(self.detail_url(self.listing.pk), {"title": "Taken"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)

    def test_delete(self) -> None:
        self.client.force_authenticate(self.owner)
        response = self.client.delete(self.detail_url(self.listing.pk))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["message"], "Property deleted successfully")
        self.assertEqual(self.client.get(self.detail_url(self.listing.pk)).status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_missing(self) -> None:
        self.client.force_authenticate(self.owner)
        response = self.client.delete(self.detail_url(uuid.uuid4()))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)
