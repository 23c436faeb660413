import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models


class Property(models.Model):
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        VERIFIED = "verified", "Verified"
        REJECTED = "rejected", "Rejected"

    class PropertyType(models.TextChoices):
        APARTMENT = "apartment", "Apartment"
        HOUSE = "house", "House"
        CONDO = "condo", "Condo"
        TOWNHOUSE = "townhouse", "Townhouse"
        LAND = "land", "Land"
        OTHER = "other", "Other"

    class Facing(models.TextChoices):
        NORTH = "north", "North"
        SOUTH = "south", "South"
        EAST = "east", "East"
        WEST = "west", "West"
        NORTH_EAST = "north-east", "North-East"
        NORTH_WEST = "north-west", "North-West"
        SOUTH_EAST = "south-east", "South-East"
        SOUTH_WEST = "south-west", "South-West"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="properties",
    )
    title = models.CharField(max_length=140)
    description = models.TextField()
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(1)],
    )
    city = models.CharField(max_length=80, blank=True, default="")
    property_type = models.CharField(
        max_length=16,
        choices=PropertyType.choices,
        blank=True,
        default="",
    )
    amenities = models.JSONField(default=list, blank=True)
    image_url = models.URLField(max_length=1024, blank=True, default="")
    pano_image_url = models.URLField(max_length=1024, blank=True, default="")
    status = models.CharField(max_length=12, choices=Status.choices, default=Status.PENDING)
    rejection_reason = models.TextField(blank=True, default="")
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)
    bedrooms = models.PositiveSmallIntegerField(null=True, blank=True)
    bathrooms = models.PositiveSmallIntegerField(null=True, blank=True)
    balconies = models.PositiveSmallIntegerField(null=True, blank=True)
    kitchen_available = models.BooleanField(default=False)
    hall_available = models.BooleanField(default=False)
    size = models.PositiveIntegerField(null=True, blank=True, help_text="Area in square feet.")
    floor_number = models.SmallIntegerField(null=True, blank=True)
    total_floors = models.PositiveSmallIntegerField(null=True, blank=True)
    facing = models.CharField(max_length=16, choices=Facing.choices, blank=True, default="")
    gallery_images = models.JSONField(default=list, blank=True)
    tags = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("-created_at",)
        indexes = [
            models.Index(fields=("status", "created_at"), name="property_status_created_idx"),
            models.Index(fields=("owner", "created_at"), name="property_owner_created_idx"),
        ]
        verbose_name_plural = "properties"

    def clean(self):
        if not self.title or len(self.title.strip()) < 5:
            raise ValidationError({"title": "Title must be at least 5 characters."})
        if self.floor_number is not None and self.total_floors is not None:
            if self.floor_number > self.total_floors:
                raise ValidationError({"floor_number": "Floor number exceeds total floors."})

    def __str__(self) -> str:
        return f"{self.title} ({self.status})"


class PropertyReport(models.Model):
    """A user's complaint about a listing, queued for admin review."""

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        REVIEWED = "reviewed", "Reviewed"

    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="reports")
    reporter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="property_reports",
    )
    reason = models.TextField()
    status = models.CharField(max_length=12, choices=Status.choices, default=Status.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    reviewed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ("-created_at", "-id")
        indexes = [
            models.Index(fields=("status", "created_at"), name="property_report_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Report #{self.pk} on {self.property_id} ({self.status})"
