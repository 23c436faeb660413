"""Database models for property bookings."""

from __future__ import annotations

import uuid

from django.conf import settings
from django.db import models

from properties.models import Property


class Booking(models.Model):
    """A renter's request to stay at a property for a date range."""

    class Status(models.TextChoices):
        PENDING = "pending", "pending"
        APPROVED = "approved", "approved"
        CANCELLED = "cancelled", "cancelled"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name="bookings",
        on_delete=models.CASCADE,
    )
    property = models.ForeignKey(
        Property,
        related_name="bookings",
        on_delete=models.CASCADE,
    )
    start_date = models.DateField()
    end_date = models.DateField()
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.PENDING,
    )
    booking_date = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-booking_date"]
        indexes = [
            models.Index(fields=["user", "status"], name="booking_user_status_idx"),
            models.Index(fields=["property", "status"], name="booking_property_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking {self.pk} for {self.property_id} ({self.status})"

    def is_terminal(self) -> bool:
        return self.status == self.Status.CANCELLED
