import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Property",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("title", models.CharField(max_length=140)),
                ("description", models.TextField()),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                ("city", models.CharField(blank=True, default="", max_length=80)),
                (
                    "property_type",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("apartment", "Apartment"),
                            ("house", "House"),
                            ("condo", "Condo"),
                            ("townhouse", "Townhouse"),
                            ("land", "Land"),
                            ("other", "Other"),
                        ],
                        default="",
                        max_length=16,
                    ),
                ),
                ("amenities", models.JSONField(blank=True, default=list)),
                ("image_url", models.URLField(blank=True, default="", max_length=1024)),
                ("pano_image_url", models.URLField(blank=True, default="", max_length=1024)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("verified", "Verified"),
                            ("rejected", "Rejected"),
                        ],
                        default="pending",
                        max_length=12,
                    ),
                ),
                ("rejection_reason", models.TextField(blank=True, default="")),
                ("latitude", models.FloatField(blank=True, null=True)),
                ("longitude", models.FloatField(blank=True, null=True)),
                ("bedrooms", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("bathrooms", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("balconies", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("kitchen_available", models.BooleanField(default=False)),
                ("hall_available", models.BooleanField(default=False)),
                (
                    "size",
                    models.PositiveIntegerField(
                        blank=True, help_text="Area in square feet.", null=True
                    ),
                ),
                ("floor_number", models.SmallIntegerField(blank=True, null=True)),
                ("total_floors", models.PositiveSmallIntegerField(blank=True, null=True)),
                (
                    "facing",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("north", "North"),
                            ("south", "South"),
                            ("east", "East"),
                            ("west", "West"),
                            ("north-east", "North-East"),
                            ("north-west", "North-West"),
                            ("south-east", "South-East"),
                            ("south-west", "South-West"),
                        ],
                        default="",
                        max_length=16,
                    ),
                ),
                ("gallery_images", models.JSONField(blank=True, default=list)),
                ("tags", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="properties",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ("-created_at",),
                "verbose_name_plural": "properties",
            },
        ),
        migrations.AddIndex(
            model_name="property",
            index=models.Index(fields=["status", "created_at"], name="property_status_created_idx"),
        ),
        migrations.AddIndex(
            model_name="property",
            index=models.Index(fields=["owner", "created_at"], name="property_owner_created_idx"),
        ),
    ]
