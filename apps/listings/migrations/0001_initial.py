import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Listing",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=100)),
                ("description", models.TextField(max_length=2000)),
                (
                    "property_type",
                    models.CharField(
                        choices=[
                            ("apartment", "Apartment"),
                            ("hostel", "Hostel"),
                            ("sublet", "Sublet"),
                            ("room", "Room"),
                            ("house", "House"),
                        ],
                        max_length=20,
                    ),
                ),
                ("location_division", models.CharField(max_length=100)),
                ("location_district", models.CharField(max_length=100)),
                ("location_area", models.CharField(max_length=150)),
                ("location_address", models.CharField(max_length=255)),
                ("rent_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("rent_currency", models.CharField(default="BDT", editable=False, max_length=3)),
                (
                    "rent_period",
                    models.CharField(
                        choices=[("monthly", "Monthly"), ("daily", "Daily")],
                        default="monthly",
                        max_length=10,
                    ),
                ),
                ("bedrooms", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("bathrooms", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("size_value", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                (
                    "size_unit",
                    models.CharField(
                        choices=[("sqft", "Square feet"), ("sqm", "Square metres")],
                        default="sqft",
                        max_length=4,
                    ),
                ),
                (
                    "furnished",
                    models.CharField(
                        choices=[
                            ("furnished", "Furnished"),
                            ("semi-furnished", "Semi-furnished"),
                            ("unfurnished", "Unfurnished"),
                        ],
                        default="unfurnished",
                        max_length=20,
                    ),
                ),
                ("amenities", models.JSONField(blank=True, default=list)),
                ("photos", models.JSONField(blank=True, default=list, help_text="Ordered list of {url, caption}.")),
                ("contact_name", models.CharField(max_length=150)),
                ("contact_phone", models.CharField(max_length=11)),
                ("contact_email", models.EmailField(blank=True, max_length=254)),
                ("minimum_stay", models.CharField(blank=True, max_length=100)),
                ("security_deposit", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("utilities_included", models.BooleanField(default=False)),
                ("pets_allowed", models.BooleanField(default=False)),
                ("smoking_allowed", models.BooleanField(default=False)),
                ("additional_rules", models.TextField(blank=True)),
                ("is_available", models.BooleanField(default=True)),
                ("is_verified", models.BooleanField(default=False, editable=False)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "owner",
                    models.ForeignKey(
                        editable=False,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="listings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Listing",
                "verbose_name_plural": "Listings",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["is_available", "-created_at"], name="listings_li_is_avai_6f1c2e_idx"),
                    models.Index(fields=["owner", "-created_at"], name="listings_li_owner_i_0b7a41_idx"),
                    models.Index(fields=["property_type"], name="listings_li_propert_9d3e57_idx"),
                    models.Index(fields=["rent_amount"], name="listings_li_rent_am_4c28f0_idx"),
                ],
            },
        ),
    ]
